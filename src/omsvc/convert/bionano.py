import re
from typing import Dict, List

from ..constants import normalize_chromosome
from ..util import read_delimited_file
from .constants import DEFAULT_DELIMITER, SUPPORTED_TOOL, convert_svtype

GENE_COLUMNS = ['OverlapGenes', 'Gene', 'Genes']
KEPT_COLUMNS = ['Confidence', 'Zygosity', 'SVsize', 'Type']


def parse_position(value) -> int:
    """
    smap positions are reported as floats (ex. ``1234.5``) and rounded to the nearest base
    """
    return int(round(float(value)))


def parse_genes(value) -> List[str]:
    if value is None:
        return []
    return [g.strip() for g in re.split(r'[;,\s]+', str(value)) if g.strip() and g.strip() != '-']


def convert_row(row: Dict) -> Dict:
    """
    Converts a row of a Bionano smap file to the standard row format

    smap Columns (only those used)
    - SmapEntryID: the identifier of the call
    - RefcontigID1/RefcontigID2: the reference contig (chromosome), X/Y/M are given as 23/24/25
    - RefStartPos/RefEndPos: the breakpoint positions
    - Type: the variant classification (ex. deletion, inversion_paired, translocation_interchr)
    """
    std_row = {
        'id': row.get('SmapEntryID'),
        'chrom1': normalize_chromosome(row['RefcontigID1'], numeric_sex_chromosomes=True),
        'chrom2': normalize_chromosome(row['RefcontigID2'], numeric_sex_chromosomes=True),
        'pos1': parse_position(row['RefStartPos']),
        'pos2': parse_position(row['RefEndPos']),
        'primary_type': convert_svtype(row['Type']),
    }
    genes: List[str] = []
    for col in GENE_COLUMNS:
        genes.extend(parse_genes(row.get(col)))
    std_row['genes'] = genes
    std_row['data'] = {col: row[col] for col in KEPT_COLUMNS if row.get(col) is not None}
    return std_row


def convert_file(input_file: str, delimiter: str = DEFAULT_DELIMITER[SUPPORTED_TOOL.BIONANO]) -> List[Dict]:
    """
    read an smap file. The header is the line starting with ``#h``, the other comment lines (``#f`` types
    and the file version) are skipped. Exported tables without comments use their first line as the header
    """
    return read_delimited_file(input_file, delimiter=delimiter, header_prefix='#h')
