import bisect
from concurrent.futures import ProcessPoolExecutor
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ..constants import SVTYPE, join_genes
from ..interval import Interval
from ..util import logger
from ..variant import StructuralVariant, effective_type

CandidateKey = Tuple[str, str, str]


class ComparisonFilter:
    """
    the settings controlling when two variants are considered to be the same event

    Attributes:
        distance_variance: maximum difference (in bases) allowed at each breakpoint. None requires identical breakpoints
        minimal_proportion: minimum overlap of two interval variants relative to the larger one. None skips the check
        variant_types: the variant types to compare. None compares all types
        only_common_genes: require the variants to share at least one gene
        prefer_base_type: resolve breakends with an alternate classification to their base type
    """

    def __init__(
        self,
        distance_variance: Optional[int] = None,
        minimal_proportion: Optional[float] = None,
        variant_types: Optional[Iterable[str]] = None,
        only_common_genes: bool = False,
        prefer_base_type: bool = False,
    ):
        if distance_variance is not None:
            distance_variance = int(distance_variance)
            if distance_variance < 0:
                raise ValueError('distance variance must be a non-negative integer', distance_variance)
        if minimal_proportion is not None:
            minimal_proportion = float(minimal_proportion)
            if not 0 <= minimal_proportion <= 1:
                raise ValueError('minimal proportion must be between 0 and 1', minimal_proportion)
        self.distance_variance = distance_variance
        self.minimal_proportion = minimal_proportion
        self.variant_types: Optional[Set[str]] = (
            {SVTYPE.enforce(t) for t in variant_types} if variant_types is not None else None
        )
        self.only_common_genes = bool(only_common_genes)
        self.prefer_base_type = bool(prefer_base_type)

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__name__,
            ', '.join(
                '{}={}'.format(k, repr(v))
                for k, v in [
                    ('distance_variance', self.distance_variance),
                    ('minimal_proportion', self.minimal_proportion),
                    ('variant_types', sorted(self.variant_types) if self.variant_types else None),
                    ('only_common_genes', self.only_common_genes),
                    ('prefer_base_type', self.prefer_base_type),
                ]
            ),
        )

    def accepts_type(self, svtype: str) -> bool:
        return self.variant_types is None or svtype in self.variant_types


class MatchSet:
    """
    the matches found in each of the other sources for a single base variant
    """

    def __init__(self, base: StructuralVariant, sources: Sequence[str]):
        self.base = base
        self.matches: Dict[str, Optional[StructuralVariant]] = {source: None for source in sources}

    @property
    def matched_sources(self) -> List[str]:
        return [source for source, match in self.matches.items() if match is not None]

    @property
    def common_genes(self) -> frozenset:
        """
        the genes of the base variant also found in any of the matched variants
        """
        matched_genes: Set[str] = set()
        for match in self.matches.values():
            if match is not None:
                matched_genes.update(match.genes)
        if not self.matched_sources:
            return frozenset()
        return frozenset(self.base.genes & matched_genes)

    def deltas(self, source: str) -> Tuple[Optional[int], Optional[int]]:
        """
        the difference of the breakpoint positions of the match relative to the base variant
        """
        match = self.matches[source]
        if match is None:
            return None, None
        return match.pos1 - self.base.pos1, match.pos2 - self.base.pos2

    def flatten(self) -> Dict:
        row = self.base.flatten('base_')
        for source, match in self.matches.items():
            prefix = source + '_'
            if match is None:
                row.update({col: None for col in report_columns(prefix)})
            else:
                row.update(match.flatten(prefix))
            pos1_delta, pos2_delta = self.deltas(source)
            row[prefix + 'pos1_delta'] = pos1_delta
            row[prefix + 'pos2_delta'] = pos2_delta
        row['matched_sources'] = len(self.matched_sources)
        row['common_genes'] = join_genes(self.common_genes) if self.common_genes else None
        return row

    def __repr__(self):
        return 'MatchSet({}, matched={})'.format(self.base, self.matched_sources)


def report_columns(prefix: str) -> List[str]:
    return [
        prefix + col for col in ['id', 'chrom1', 'pos1', 'chrom2', 'pos2', 'type', 'length', 'genes']
    ]


def report_header(sources: Sequence[str]) -> List[str]:
    """
    the ordered columns of the comparison report
    """
    header = report_columns('base_')
    for source in sources:
        header.extend(report_columns(source + '_'))
        header.extend([source + '_pos1_delta', source + '_pos2_delta'])
    header.extend(['matched_sources', 'common_genes'])
    return header


def positional_difference(base: StructuralVariant, other: StructuralVariant) -> int:
    return abs(Interval.dist(base.break1, other.break1)) + abs(
        Interval.dist(base.break2, other.break2)
    )


def same_chromosomes(base: StructuralVariant, other: StructuralVariant) -> bool:
    return base.chrom1 == other.chrom1 and base.chrom2 == other.chrom2


def within_distance(
    base: StructuralVariant, other: StructuralVariant, distance_variance: Optional[int]
) -> bool:
    """
    check both breakpoints are within the allowed distance. Without a distance variance the breakpoints must be identical
    """
    if distance_variance is None:
        return base.pos1 == other.pos1 and base.pos2 == other.pos2
    return (
        abs(Interval.dist(base.break1, other.break1)) <= distance_variance
        and abs(Interval.dist(base.break2, other.break2)) <= distance_variance
    )


def sufficient_proportion(
    base: StructuralVariant,
    other: StructuralVariant,
    minimal_proportion: Optional[float],
) -> bool:
    """
    check the overlap of two interval variants. Breakends (whatever their alternate type), variants spanning
    two chromosomes and point events (ex. insertions) are not checked and rely on the distance check alone
    """
    if minimal_proportion is None:
        return True
    if SVTYPE.BND in {base.primary_type, other.primary_type}:
        return True
    for variant in [base, other]:
        if variant.interchromosomal or variant.point_event:
            return True
    return Interval.proportion(base.span, other.span) >= minimal_proportion


def shares_genes(base: StructuralVariant, other: StructuralVariant) -> bool:
    return bool(base.genes & other.genes)


def equivalent(
    base: StructuralVariant, other: StructuralVariant, settings: ComparisonFilter
) -> bool:
    """
    compares two variants of the same type to see if they are the same event. Checks are applied in order and
    stop at the first failure: chromosomes, breakpoint distance, overlap proportion and common genes
    """
    if not same_chromosomes(base, other):
        return False
    if not within_distance(base, other, settings.distance_variance):
        return False
    if not sufficient_proportion(base, other, settings.minimal_proportion):
        return False
    if settings.only_common_genes and not shares_genes(base, other):
        return False
    return True


class CandidateIndex:
    """
    groups the variants of a single source by type and chromosomes and sorts each group by the first breakpoint
    so that only nearby variants are compared
    """

    def __init__(self, variants: Iterable[StructuralVariant], prefer_base_type: bool = False):
        groups: Dict[CandidateKey, List[Tuple[int, int, StructuralVariant]]] = {}
        for index, variant in enumerate(variants):
            key = (effective_type(variant, prefer_base_type), variant.chrom1, variant.chrom2)
            groups.setdefault(key, []).append((variant.pos1, index, variant))
        self.positions: Dict[CandidateKey, List[int]] = {}
        self.groups: Dict[CandidateKey, List[Tuple[int, StructuralVariant]]] = {}
        for key, group in groups.items():
            group.sort(key=lambda x: (x[0], x[1]))
            self.positions[key] = [pos for pos, _, _ in group]
            self.groups[key] = [(index, variant) for _, index, variant in group]

    def candidates(
        self, svtype: str, base: StructuralVariant, distance_variance: Optional[int] = None
    ) -> List[Tuple[int, StructuralVariant]]:
        """
        Returns:
            the (original index, variant) of every variant of the given type on the same chromosomes whose first
            breakpoint falls within the distance variance of the base variant
        """
        key = (svtype, base.chrom1, base.chrom2)
        if key not in self.groups:
            return []
        window = distance_variance if distance_variance is not None else 0
        positions = self.positions[key]
        start = bisect.bisect_left(positions, base.pos1 - window)
        end = bisect.bisect_right(positions, base.pos1 + window)
        return self.groups[key][start:end]


def best_match(
    base: StructuralVariant,
    index: CandidateIndex,
    settings: ComparisonFilter,
) -> Optional[StructuralVariant]:
    """
    find the closest equivalent variant. Ties are resolved by the order of the variants in the source
    """
    svtype = effective_type(base, settings.prefer_base_type)
    if not settings.accepts_type(svtype):
        return None
    best = None
    for position, candidate in index.candidates(svtype, base, settings.distance_variance):
        if not equivalent(base, candidate, settings):
            continue
        score = (positional_difference(base, candidate), position)
        if best is None or score < best[0]:
            best = (score, candidate)
    return best[1] if best else None


def _compare_partition(
    base_variants: List[StructuralVariant],
    indices: Dict[str, CandidateIndex],
    settings: ComparisonFilter,
) -> List[MatchSet]:
    result = []
    for base in base_variants:
        match_set = MatchSet(base, list(indices.keys()))
        for source, index in indices.items():
            match_set.matches[source] = best_match(base, index, settings)
        result.append(match_set)
    return result


def partition_by_chromosomes(
    variants: Sequence[StructuralVariant],
) -> Dict[Tuple[str, str], List[int]]:
    partitions: Dict[Tuple[str, str], List[int]] = {}
    for i, variant in enumerate(variants):
        partitions.setdefault((variant.chrom1, variant.chrom2), []).append(i)
    return partitions


def compare_variants(
    base_variants: Sequence[StructuralVariant],
    other_variants: Dict[str, Sequence[StructuralVariant]],
    settings: Optional[ComparisonFilter] = None,
    processes: int = 1,
) -> List[MatchSet]:
    """
    match each base variant against the variants of every other source

    Args:
        base_variants: the variants all others are compared against (ex. optical mapping calls)
        other_variants: the variants of each other source by the source name
        settings: the comparison settings
        processes: number of processes to use. The base variants are split by chromosome

    Returns:
        one match set per base variant, in the order of the base variants
    """
    if settings is None:
        settings = ComparisonFilter()
    indices = {
        source: CandidateIndex(variants, settings.prefer_base_type)
        for source, variants in other_variants.items()
    }
    logger.info(
        f'comparing {len(base_variants)} base variants against {len(indices)} source(s) with {settings}'
    )
    if processes <= 1:
        result = _compare_partition(list(base_variants), indices, settings)
    else:
        partitions = partition_by_chromosomes(base_variants)
        logger.info(f'splitting the comparison into {len(partitions)} partitions')
        result = [None] * len(base_variants)  # type: List
        with ProcessPoolExecutor(max_workers=processes) as executor:
            futures = {
                executor.submit(
                    _compare_partition,
                    [base_variants[i] for i in positions],
                    indices,
                    settings,
                ): positions
                for positions in partitions.values()
            }
            for future, positions in futures.items():
                for i, match_set in zip(positions, future.result()):
                    result[i] = match_set

    for source in indices:
        matched = sum([1 for match_set in result if match_set.matches[source] is not None])
        logger.info(f'{source}: matched {matched} of {len(base_variants)} base variants')
    return result
