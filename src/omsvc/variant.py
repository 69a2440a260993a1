from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from .constants import SVTYPE, chromosome_sort_key, join_genes, normalize_chromosome
from .error import InvalidVariantError
from .interval import Interval
from .util import logger


class StructuralVariant:
    """
    class for storing a structural variant call from a single source (caller or platform)

    The breakpoints are stored in ascending order. For variants on a single chromosome this means
    ``pos1 <= pos2``. For breakends joining two chromosomes the ends are ordered by chromosome so that
    the same event reported from either side has the same representation
    """

    __slots__ = (
        'source',
        'chrom1',
        'pos1',
        'chrom2',
        'pos2',
        'primary_type',
        'alternate_type',
        'genes',
        'id',
        'data',
    )

    source: str
    chrom1: str
    pos1: int
    chrom2: str
    pos2: int
    primary_type: str
    alternate_type: Optional[str]
    genes: frozenset
    id: Optional[str]
    data: Mapping

    def __init__(
        self,
        source: str,
        chrom1: str,
        pos1: int,
        chrom2: Optional[str] = None,
        pos2: Optional[int] = None,
        primary_type: str = SVTYPE.UNK,
        alternate_type: Optional[str] = None,
        genes: Iterable[str] = (),
        id: Optional[str] = None,
        data: Optional[Dict] = None,
    ):
        """
        Args:
            source: tag of the caller/platform the variant was reported by
            chrom1: chromosome of the first breakpoint
            pos1: position of the first breakpoint
            chrom2: chromosome of the second breakpoint, defaults to chrom1
            pos2: position of the second breakpoint, defaults to pos1 (a point event)
            primary_type (SVTYPE): the variant type reported by the caller
            alternate_type (SVTYPE): the alternate classification some callers report for breakends
            genes: gene symbols overlapping the variant
            id: the identifier of the variant in the source file
            data: any other columns from the source kept for diagnostics

        Examples:
            >>> StructuralVariant('bionano', '1', 1000, '1', 2000, SVTYPE.DEL)
            >>> StructuralVariant('sniffles', '2', 3000, primary_type=SVTYPE.INS)
        """
        if primary_type is None:
            raise InvalidVariantError('a structural variant must have a primary type')
        chrom1 = normalize_chromosome(chrom1)
        chrom2 = chrom1 if chrom2 is None else normalize_chromosome(chrom2)
        pos1 = int(pos1)
        pos2 = pos1 if pos2 is None else int(pos2)
        if pos1 < 0 or pos2 < 0:
            raise InvalidVariantError('breakpoint positions cannot be negative', pos1, pos2)

        if chrom1 == chrom2:
            pos1, pos2 = sorted([pos1, pos2])
        elif chrom_key(chrom2, pos2) < chrom_key(chrom1, pos1):
            chrom1, pos1, chrom2, pos2 = chrom2, pos2, chrom1, pos1

        _set = object.__setattr__
        _set(self, 'source', source)
        _set(self, 'chrom1', chrom1)
        _set(self, 'pos1', pos1)
        _set(self, 'chrom2', chrom2)
        _set(self, 'pos2', pos2)
        _set(self, 'primary_type', SVTYPE.enforce(primary_type))
        _set(
            self,
            'alternate_type',
            SVTYPE.enforce(alternate_type) if alternate_type is not None else None,
        )
        _set(self, 'genes', frozenset(g for g in genes if g))
        _set(self, 'id', id)
        _set(self, 'data', MappingProxyType(dict(data or {})))

    def __setattr__(self, attr, value):
        raise AttributeError('StructuralVariant is immutable', attr)

    def __delattr__(self, attr):
        raise AttributeError('StructuralVariant is immutable', attr)

    def __reduce__(self):
        return (
            self.__class__,
            (
                self.source,
                self.chrom1,
                self.pos1,
                self.chrom2,
                self.pos2,
                self.primary_type,
                self.alternate_type,
                tuple(self.genes),
                self.id,
                dict(self.data),
            ),
        )

    @property
    def interchromosomal(self) -> bool:
        """bool: True if the breakpoints are on different chromosomes, False otherwise"""
        return self.chrom1 != self.chrom2

    @property
    def length(self) -> Optional[int]:
        """the distance between the breakpoints, None for breakends joining two chromosomes"""
        if self.interchromosomal:
            return None
        return self.pos2 - self.pos1

    @property
    def point_event(self) -> bool:
        return not self.interchromosomal and self.pos1 == self.pos2

    @property
    def break1(self) -> Interval:
        return Interval(self.pos1)

    @property
    def break2(self) -> Interval:
        return Interval(self.pos2)

    @property
    def span(self) -> Optional[Interval]:
        if self.interchromosomal:
            return None
        return Interval(self.pos1, self.pos2)

    def key(self, prefer_base_type: bool = False):
        """
        the identity of the variant within its source, used to find duplicate calls
        """
        return (
            self.source,
            effective_type(self, prefer_base_type),
            self.chrom1,
            self.pos1,
            self.chrom2,
            self.pos2,
        )

    def __repr__(self):
        svtype = self.primary_type
        if self.alternate_type:
            svtype = '{}/{}'.format(svtype, self.alternate_type)
        return 'StructuralVariant({}:{}:{}:{}-{}:{})'.format(
            self.source, svtype, self.chrom1, self.pos1, self.chrom2, self.pos2
        )

    def __eq__(self, other):
        if not isinstance(other, StructuralVariant):
            return False
        return all(
            getattr(self, attr) == getattr(other, attr)
            for attr in [
                'source',
                'chrom1',
                'pos1',
                'chrom2',
                'pos2',
                'primary_type',
                'alternate_type',
                'genes',
                'id',
            ]
        )

    def __hash__(self):
        return hash((self.key(True), self.alternate_type, self.genes, self.id))

    def flatten(self, prefix: str = '') -> Dict:
        """
        convert the variant to a flat dictionary of report columns

        Example:
            >>> StructuralVariant('bionano', '1', 1, '1', 10, SVTYPE.DEL).flatten('base_')
            {'base_id': None, 'base_chrom1': '1', ...}
        """
        return {
            prefix + 'id': self.id,
            prefix + 'chrom1': self.chrom1,
            prefix + 'pos1': self.pos1,
            prefix + 'chrom2': self.chrom2,
            prefix + 'pos2': self.pos2,
            prefix + 'type': self.primary_type
            if not self.alternate_type
            else '{}/{}'.format(self.primary_type, self.alternate_type),
            prefix + 'length': self.length,
            prefix + 'genes': join_genes(self.genes) if self.genes else None,
        }


def chrom_key(chrom: str, pos: int):
    return (chromosome_sort_key(chrom), pos)


def effective_type(variant: StructuralVariant, prefer_base_type: bool = False) -> str:
    """
    resolve the type used for comparison. Breakends reported with an alternate classification
    (ex. SVTYPE2 in linked-read callers) are compared by the alternate type unless the base type is preferred

    Example:
        >>> sv = StructuralVariant('a', '1', 5000, '2', 8000, SVTYPE.BND, SVTYPE.INV)
        >>> effective_type(sv, prefer_base_type=True)
        'BND'
        >>> effective_type(sv, prefer_base_type=False)
        'INV'
    """
    if variant.primary_type == SVTYPE.BND and variant.alternate_type and not prefer_base_type:
        return variant.alternate_type
    return variant.primary_type


def deduplicate(
    variants: Iterable[StructuralVariant], prefer_base_type: bool = False
) -> List[StructuralVariant]:
    """
    remove variants sharing their identity with an earlier variant. The first occurrence is kept and the
    input order is preserved. Genes and ids are not part of the identity
    """
    seen = set()
    result = []
    total = 0
    for variant in variants:
        total += 1
        key = variant.key(prefer_base_type)
        if key in seen:
            continue
        seen.add(key)
        result.append(variant)
    logger.debug(f'collapsed {total} to {len(result)} variants')
    return result
