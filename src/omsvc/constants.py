"""
module responsible for small utility functions and constants used throughout the omsvc package
"""
import argparse
import os
import re
from typing import Iterable, List

PROGNAME: str = 'omsvc'


def cast_boolean(input_value):
    value = str(input_value).lower()
    if value in ['t', 'true', '1', 'y', 'yes', '+']:
        return True
    elif value in ['f', 'false', '0', 'n', 'no', '-']:
        return False
    raise TypeError('casting to boolean failed', input_value)


class OmsvcNamespace:
    """
    Namespace to hold module constants

    Example:
        >>> nspace = OmsvcNamespace(thing=1, otherthing=2)
        >>> nspace.thing
        1
        >>> nspace.otherthing
        2
    """

    DELIM = r'[;,\s]+'
    """:class:`str`: delimiter to use is parsing listable variables from the environment"""

    def __init__(self, **kwargs):
        object.__setattr__(self, '_defns', {})
        object.__setattr__(self, '_types', {})
        object.__setattr__(self, '_members', {})
        object.__setattr__(self, '_nullable', set())
        object.__setattr__(self, '_listable', set())
        object.__setattr__(self, '_env_overwritable', set())
        object.__setattr__(self, '_env_prefix', PROGNAME.upper())

        for attr, val in kwargs.items():
            self._members[attr] = val
            self._set_type(attr, type(val))

    def get_env_name(self, attr: str) -> str:
        """
        Get the name of the corresponding environment variable

        Example:
            >>> nspace = OmsvcNamespace(a=1)
            >>> nspace.get_env_name('a')
            'OMSVC_A'
        """
        return '{}_{}'.format(self._env_prefix, attr).upper()

    def get_env_var(self, attr: str):
        """
        retrieve the environment variable definition of a given attribute
        """
        env_name = self.get_env_name(attr)
        env = os.environ[env_name].strip()
        attr_type = self._types.get(attr, str)

        if attr in self._nullable and env.lower() == 'none':
            return None
        if attr in self._listable:
            return self.parse_listable_string(env, attr_type, attr in self._nullable)
        return attr_type(env)

    @classmethod
    def parse_listable_string(cls, string: str, cast_type=str, nullable: bool = False) -> List:
        """
        Given some string, parse it into a list

        Example:
            >>> OmsvcNamespace.parse_listable_string('1,2,3', int)
            [1, 2, 3]
            >>> OmsvcNamespace.parse_listable_string('1;2,None', int, True)
            [1, 2, None]
        """
        result = []
        string = string.strip()
        for val in re.split(cls.DELIM, string) if string else []:
            if nullable and val.lower() == 'none':
                result.append(None)
            else:
                result.append(cast_type(val))
        return result

    def __getattribute__(self, attr):
        try:
            return object.__getattribute__(self, attr)
        except AttributeError as err:
            variables = object.__getattribute__(self, '_members')
            if attr not in variables:
                raise err
            if attr in object.__getattribute__(self, '_env_overwritable'):
                try:
                    return self.get_env_var(attr)
                except KeyError:
                    pass
            return variables[attr]

    def __setattr__(self, attr, val):
        raise AttributeError('namespace members are added with add', attr)

    def values(self) -> List:
        return [getattr(self, k) for k in self._members]

    def enforce(self, value):
        """
        checks that the current namespace has a given value

        Returns:
            the input value

        Raises:
            KeyError: the value did not exist

        Example:
            >>> nspace = OmsvcNamespace(thing=1, otherthing=2)
            >>> nspace.enforce(1)
            1
            >>> nspace.enforce(3)
            Traceback (most recent call last):
            ....
        """
        if value not in self.values():
            raise KeyError('value {0} is not a valid member of '.format(repr(value)), self.values())
        return value

    def _set_type(self, attr, cast_type):
        if cast_type == bool:
            self._types[attr] = cast_boolean
        else:
            self._types[attr] = cast_type

    def define(self, attr, *pos):
        """
        Get the definition of a given attribute or return a default (when given) if the attribute does not exist

        Raises:
            KeyError: the attribute does not exist and a default was not given
        """
        if len(pos) > 1:
            raise TypeError('too many arguments. define takes a single \'default\' value argument')
        try:
            return self._defns[attr]
        except KeyError as err:
            if pos:
                return pos[0]
            raise err

    def add(
        self,
        attr,
        value,
        defn=None,
        cast_type=None,
        nullable=False,
        env_overwritable=False,
        listable=False,
    ):
        """
        Add an attribute to the name space

        Args:
            attr (str): name of the attribute being added
            value: the value of the attribute
            defn (str): the definition, will be used in generating the help menus
            cast_type (callable): the function to use in casting the value
            nullable (bool): True if this attribute can have a None value
            env_overwritable (bool): True if this attribute will be overriden by its environment variable equivalent
            listable (bool): True if this attribute can have multiple values
        """
        if attr.startswith('_'):
            raise ValueError('cannot set private', attr)
        if cast_type:
            self._set_type(attr, cast_type)
        else:
            self._set_type(attr, type(value))
        if defn:
            self._defns[attr] = defn
        if nullable:
            self._nullable.add(attr)
        if env_overwritable:
            self._env_overwritable.add(attr)
        if listable:
            self._listable.add(attr)
        self._members[attr] = value


def float_fraction(num):
    """
    cast input to a float

    Args:
        num: input to cast

    Returns:
        float

    Raises:
        argparse.ArgumentTypeError: if the input cannot be cast to a float or the number is not between 0 and 1
    """
    try:
        num = float(num)
    except ValueError:
        raise argparse.ArgumentTypeError('Must be a value between 0 and 1')
    if num < 0 or num > 1:
        raise argparse.ArgumentTypeError('Must be a value between 0 and 1')
    return num


def non_negative_int(num):
    """
    cast input to a non-negative integer

    Raises:
        argparse.ArgumentTypeError: if the input is not an integer or is negative
    """
    try:
        num = int(num)
    except ValueError:
        raise argparse.ArgumentTypeError('Must be a non-negative integer')
    if num < 0:
        raise argparse.ArgumentTypeError('Must be a non-negative integer')
    return num


SVTYPE = OmsvcNamespace(
    BND='BND', CNV='CNV', DEL='DEL', INS='INS', DUP='DUP', INV='INV', UNK='UNK'
)
"""
holds controlled vocabulary for acceptable structural variant classifications

- ``BND``: breakend, one side of a translocation-like event
- ``CNV``: copy number variant
- ``DEL``: deletion
- ``INS``: insertion
- ``DUP``: duplication
- ``INV``: inversion
- ``UNK``: unknown/unclassified
"""


def parse_svtypes(string: str) -> List[str]:
    """
    parse a comma separated list of sv types

    Example:
        >>> parse_svtypes('DEL,ins')
        ['DEL', 'INS']
    """
    result = []
    for svtype in OmsvcNamespace.parse_listable_string(string):
        try:
            result.append(SVTYPE.enforce(svtype.upper()))
        except KeyError:
            raise argparse.ArgumentTypeError(
                'Invalid variant type {}. Must be one of: {}'.format(
                    repr(svtype), ','.join(SVTYPE.values())
                )
            )
    return result


SOURCE = OmsvcNamespace(
    BIONANO='bionano',
    ANNOTSV='annotsv',
    SAMPLOT='samplot',
    VCF_LONGRANGER='vcf-longranger',
    VCF_SNIFFLES='vcf-sniffles',
)
"""source tags used to label the variants (and the report columns) for each input"""

NULL_VALUE: str = 'None'
"""marker written to the report for missing values"""

GENE_DELIM: str = ';'


CHROMOSOME_ALIASES = {'MT': 'M', '23': 'X', '24': 'Y', '25': 'M'}


def normalize_chromosome(chrom, numeric_sex_chromosomes: bool = False) -> str:
    """
    strip the chr prefix and unify mitochondrial naming

    Args:
        chrom: the input chromosome name
        numeric_sex_chromosomes: the input uses 23/24/25 for X/Y/M (optical mapping reference contig ids)

    Example:
        >>> normalize_chromosome('chr1')
        '1'
        >>> normalize_chromosome('chrMT')
        'M'
        >>> normalize_chromosome('23', numeric_sex_chromosomes=True)
        'X'
    """
    chrom = str(chrom).strip()
    if re.match(r'^\d+\.0$', chrom):
        chrom = chrom[:-2]
    chrom = re.sub(r'^chr', '', chrom, flags=re.IGNORECASE)
    if chrom.upper() in {'X', 'Y', 'M', 'MT'}:
        chrom = chrom.upper()
    if chrom == 'MT' or (numeric_sex_chromosomes and chrom in CHROMOSOME_ALIASES):
        chrom = CHROMOSOME_ALIASES[chrom]
    return chrom


def chromosome_sort_key(chrom: str):
    """
    natural sort order for chromosome names: numbered autosomes, then X, Y, M, then anything else

    Example:
        >>> sorted(['X', '10', '2', 'GL000.1', 'M'], key=chromosome_sort_key)
        ['2', '10', 'X', 'M', 'GL000.1']
    """
    if chrom.isdigit():
        return (0, int(chrom), '')
    special = {'X': 1, 'Y': 2, 'M': 3}
    if chrom in special:
        return (1, special[chrom], '')
    return (2, 0, chrom)


def join_genes(genes: Iterable[str]) -> str:
    return GENE_DELIM.join(sorted(genes))
