import os
import time
from typing import Dict, List, Optional, Tuple

from ..constants import SOURCE
from ..convert import SUPPORTED_TOOL, convert_tool_output
from ..summary import log_variant_stats
from ..util import logger, mkdirp, output_tabbed_file
from .compare import ComparisonFilter, MatchSet, compare_variants, report_header

SOURCE_FILE_TYPE = {
    SOURCE.BIONANO: SUPPORTED_TOOL.BIONANO,
    SOURCE.ANNOTSV: SUPPORTED_TOOL.ANNOTSV,
    SOURCE.SAMPLOT: SUPPORTED_TOOL.SAMPLOT,
    SOURCE.VCF_LONGRANGER: SUPPORTED_TOOL.VCF,
    SOURCE.VCF_SNIFFLES: SUPPORTED_TOOL.VCF,
}
"""the input format of each source"""


def write_report(match_sets: List[MatchSet], sources: List[str], filename: str):
    """
    write one row per base variant with the match found in each source (in the given order)
    """
    if os.path.dirname(filename):
        mkdirp(os.path.dirname(filename))
    output_tabbed_file(match_sets, filename, header=report_header(sources))


def main(
    base_input: str,
    other_inputs: List[Tuple[str, str]],
    output: str,
    distance_variance: Optional[int] = None,
    minimal_proportion: Optional[float] = None,
    variant_type: Optional[List[str]] = None,
    gene_intersection: bool = False,
    prefer_base_svtype: bool = False,
    keep_duplicates: bool = False,
    processes: int = 1,
    start_time=int(time.time()),
) -> List[MatchSet]:
    """
    Args:
        base_input: the optical mapping (smap) variants file
        other_inputs: the (source, file) pairs of the sequencing based callers to compare against
        output: path to the report file
    """
    if not other_inputs:
        raise ValueError('at least one other source is required for the comparison')
    settings = ComparisonFilter(
        distance_variance=distance_variance,
        minimal_proportion=minimal_proportion,
        variant_types=variant_type,
        only_common_genes=gene_intersection,
        prefer_base_type=prefer_base_svtype,
    )

    base_variants = convert_tool_output(
        base_input,
        SOURCE_FILE_TYPE[SOURCE.BIONANO],
        source=SOURCE.BIONANO,
        collapse=not keep_duplicates,
        prefer_base_type=prefer_base_svtype,
    )
    log_variant_stats(SOURCE.BIONANO, base_variants, prefer_base_svtype)

    other_variants: Dict[str, List] = {}
    for source, input_file in other_inputs:
        if source in other_variants:
            raise ValueError('source given more than once', source)
        other_variants[source] = convert_tool_output(
            input_file,
            SOURCE_FILE_TYPE[source],
            source=source,
            collapse=not keep_duplicates,
            prefer_base_type=prefer_base_svtype,
        )
        log_variant_stats(source, other_variants[source], prefer_base_svtype)

    match_sets = compare_variants(base_variants, other_variants, settings, processes=processes)

    write_report(match_sets, list(other_variants.keys()), output)
    logger.info(f'compared {len(base_variants)} base variants in {int(time.time()) - start_time}s')
    return match_sets
