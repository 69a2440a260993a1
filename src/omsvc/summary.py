from typing import Dict, Iterable

import pandas as pd

from .constants import SVTYPE
from .util import logger
from .variant import StructuralVariant, effective_type


def variant_type_counts(
    variants: Iterable[StructuralVariant], prefer_base_type: bool = False
) -> Dict[str, int]:
    """
    count the variants by their effective type. Every type is reported, including those with no variants

    Example:
        >>> variant_type_counts([StructuralVariant('a', '1', 10, '1', 100, SVTYPE.DEL)])
        {'BND': 0, 'CNV': 0, 'DEL': 1, 'DUP': 0, 'INS': 0, 'INV': 0, 'UNK': 0}
    """
    types = pd.Series([effective_type(v, prefer_base_type) for v in variants], dtype=object)
    counts = types.value_counts()
    return {svtype: int(counts.get(svtype, 0)) for svtype in sorted(SVTYPE.values())}


def log_variant_stats(
    source: str, variants: Iterable[StructuralVariant], prefer_base_type: bool = False
) -> Dict[str, int]:
    variants = list(variants)
    counts = variant_type_counts(variants, prefer_base_type)
    logger.info(f'{source}: {len(variants)} variants')
    for svtype, count in counts.items():
        if count:
            logger.info(f'{source}: {svtype} {count}')
    return counts
