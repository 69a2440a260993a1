from typing import Dict, List

from ..util import read_delimited_file
from .constants import DEFAULT_DELIMITER, SUPPORTED_TOOL, convert_svtype
from .vcf import parse_genes

COLUMN_ALIASES = {'chr': 'chrom', 'type': 'svtype', 'gene': 'genes'}


def convert_row(row: Dict) -> Dict:
    """
    Converts a row of a samplot variant table to the standard row format

    Columns
    - chrom (or chr): chromosome name
    - start/end: the breakpoint positions
    - svtype (or type): the variant type
    - id: optional identifier
    - genes: optional list of genes overlapping the variant
    """
    return {
        'id': row.get('id'),
        'chrom1': row['chrom'],
        'pos1': int(row['start']),
        'pos2': int(row['end']),
        'primary_type': convert_svtype(row['svtype']),
        'genes': parse_genes(row.get('genes')),
        'data': {
            k: v
            for k, v in row.items()
            if k not in {'id', 'chrom', 'start', 'end', 'svtype', 'genes'} and v is not None
        },
    }


def convert_file(input_file: str, delimiter: str = DEFAULT_DELIMITER[SUPPORTED_TOOL.SAMPLOT]) -> List[Dict]:
    rows = []
    for row in read_delimited_file(input_file, delimiter=delimiter):
        rows.append({COLUMN_ALIASES.get(k.lower(), k.lower()): v for k, v in row.items()})
    return rows
