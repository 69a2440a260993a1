import re

from ..constants import SVTYPE, OmsvcNamespace
from ..util import logger


SUPPORTED_TOOL = OmsvcNamespace(
    BIONANO='bionano',
    ANNOTSV='annotsv',
    SAMPLOT='samplot',
    VCF='vcf',
)
"""
Supported Tools used to call SVs and then used as input into the comparison

- ``bionano``: Bionano Solve/Access optical mapping structural variant calls (smap)
- ``annotsv``: AnnotSV annotated structural variants (tsv)
- ``samplot``: samplot variant listing (tsv)
- ``vcf``: any VCF 4.x structural variant caller (ex. LongRanger, Sniffles)
"""

DEFAULT_DELIMITER = {
    SUPPORTED_TOOL.BIONANO: r'[,\t]',
    SUPPORTED_TOOL.ANNOTSV: '\t',
    SUPPORTED_TOOL.SAMPLOT: '\t',
    SUPPORTED_TOOL.VCF: '\t',
}

TOOL_SVTYPE_MAPPING = {v: v for v in SVTYPE.values()}
TOOL_SVTYPE_MAPPING.update(
    {
        'deletion': SVTYPE.DEL,
        'insertion': SVTYPE.INS,
        'inversion': SVTYPE.INV,
        'duplication': SVTYPE.DUP,
        'translocation': SVTYPE.BND,
        'TRA': SVTYPE.BND,
        'TRANS': SVTYPE.BND,
        'CTX': SVTYPE.BND,
        'DUP:TANDEM': SVTYPE.DUP,
        'DUP:INT': SVTYPE.DUP,
        'INVDUP': SVTYPE.DUP,
        'CNV': SVTYPE.CNV,
        'copy_number_variant': SVTYPE.CNV,
        'gain': SVTYPE.DUP,
        'loss': SVTYPE.DEL,
        'UNKNOWN': SVTYPE.UNK,
    }
)

# optical mapping subtypes (ex. inversion_paired, duplication_inverted, translocation_interchr, trans_intrachr_common)
TOOL_SVTYPE_PREFIX_MAPPING = [
    (re.compile(r'^inversion', re.IGNORECASE), SVTYPE.INV),
    (re.compile(r'^duplication', re.IGNORECASE), SVTYPE.DUP),
    (re.compile(r'^trans', re.IGNORECASE), SVTYPE.BND),
    (re.compile(r'^deletion', re.IGNORECASE), SVTYPE.DEL),
    (re.compile(r'^insertion', re.IGNORECASE), SVTYPE.INS),
]


def convert_svtype(value) -> str:
    """
    map the variant type reported by a caller to the SV types used for comparison. Unrecognized types are UNK

    Example:
        >>> convert_svtype('inversion_paired')
        'INV'
        >>> convert_svtype('<DEL>')
        'DEL'
        >>> convert_svtype('complex')
        'UNK'
    """
    if value is None:
        return SVTYPE.UNK
    value = str(value).strip().strip('<>')
    for option in [value, value.upper(), value.lower(), value.split(':')[0].upper()]:
        if option in TOOL_SVTYPE_MAPPING:
            return TOOL_SVTYPE_MAPPING[option]
    for pattern, svtype in TOOL_SVTYPE_PREFIX_MAPPING:
        if pattern.match(value):
            return svtype
    logger.debug(f'unrecognized variant type {repr(value)} treated as {SVTYPE.UNK}')
    return SVTYPE.UNK
