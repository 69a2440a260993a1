import re
from typing import Dict, List

from ..constants import SVTYPE
from ..util import read_delimited_file
from .constants import DEFAULT_DELIMITER, SUPPORTED_TOOL, convert_svtype
from .vcf import parse_bnd_alt, parse_genes, parse_info

ANNOTATION_MODE_COLUMN = 'Annotation_mode'
FULL_ANNOTATION = 'full'
KEPT_COLUMNS = ['AnnotSV_ID', 'SV_length', 'ACMG_class', 'AnnotSV_ranking_score', 'CytoBand']


def normalize_column(name: str) -> str:
    """
    older versions of AnnotSV use spaces in the column names (ex. ``SV chrom``)
    """
    return re.sub(r'\s+', '_', name.strip())


def convert_row(row: Dict) -> Dict:
    """
    Converts a row of an AnnotSV annotated tsv to the standard row format

    The location of the mate of a breakend is not given by the SV_* columns and is parsed from the ALT column
    (VCF bracket notation). Breakends classified by the original caller (SVTYPE2 in the INFO column) keep that
    classification as the alternate type
    """
    info = parse_info(row.get('INFO'))
    primary_type = convert_svtype(row['SV_type'])
    std_row = {
        'id': row.get('ID'),
        'chrom1': row['SV_chrom'],
        'pos1': int(row['SV_start']),
        'chrom2': row['SV_chrom'],
        'pos2': int(row['SV_end']) if row.get('SV_end') is not None else int(row['SV_start']),
        'primary_type': primary_type,
        'alternate_type': convert_svtype(info['SVTYPE2']) if 'SVTYPE2' in info else None,
    }
    alt = row.get('ALT')
    if primary_type == SVTYPE.BND and alt and ('[' in alt or ']' in alt):
        std_row['chrom2'], std_row['pos2'], _, _ = parse_bnd_alt(alt)
    std_row['genes'] = parse_genes(row.get('Gene_name'))
    std_row['data'] = {col: row[col] for col in KEPT_COLUMNS if row.get(col) is not None}
    return std_row


def convert_file(input_file: str, delimiter: str = DEFAULT_DELIMITER[SUPPORTED_TOOL.ANNOTSV]) -> List[Dict]:
    """
    read an AnnotSV tsv. When both full and split annotations are present only the full annotation rows are
    kept so that each variant is read once
    """
    rows = []
    for row in read_delimited_file(input_file, delimiter=delimiter):
        row = {normalize_column(k): v for k, v in row.items()}
        if ANNOTATION_MODE_COLUMN in row and row[ANNOTATION_MODE_COLUMN] != FULL_ANNOTATION:
            continue
        rows.append(row)
    return rows
