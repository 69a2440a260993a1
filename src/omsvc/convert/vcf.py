import gzip
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import pandas as pd

from ..constants import SVTYPE
from ..util import logger
from .constants import convert_svtype

PANDAS_DEFAULT_NA_VALUES = [
    '-1.#IND',
    '1.#QNAN',
    '1.#IND',
    '-1.#QNAN',
    '#N/A',
    'N/A',
    'NA',
    '#NA',
    'NULL',
    'NaN',
    '-NaN',
    'nan',
    '-nan',
]

GENE_INFO_FIELDS = ['GENES', 'GENE', 'Gene_name']


@dataclass
class VcfRecordType:
    id: Optional[str]
    pos: int
    chrom: str
    alts: List[Optional[str]]
    info: Dict
    ref: Optional[str]

    @property
    def stop(self) -> int:
        return self.info.get('END', self.pos)


def parse_bnd_alt(alt: str) -> Tuple[str, int, str, str]:
    """
    parses the alt statement from vcf files using the specification in vcf 4.1/4.2.

    r = reference base/seq
    u = untemplated sequence/alternate sequence
    p = chromosome:position

    | alt format   |
    | ------------ |
    | ru[p[        |
    | [p[ur        |
    | ]p]ur        |
    | ru]p]        |

    Returns:
        the chromosome and position of the mate breakend, the reference base and the untemplated sequence
    """
    # ru[p[ or ru]p]
    match = re.match(r'^(?P<ref>\w)(?P<useq>\w*)[\[\]](?P<chr>[^:]+):(?P<pos>\d+)[\[\]]$', alt)
    if match:
        return (match.group('chr'), int(match.group('pos')), match.group('ref'), match.group('useq'))
    # [p[ur or ]p]ur
    match = re.match(r'^[\[\]](?P<chr>[^:]+):(?P<pos>\d+)[\[\]](?P<useq>\w*)(?P<ref>\w)$', alt)
    if match:
        return (match.group('chr'), int(match.group('pos')), match.group('ref'), match.group('useq'))
    raise NotImplementedError('alt specification in unexpected format', alt)


def parse_info(info_field) -> Dict:
    """
    parse the INFO column of a vcf record

    Example:
        >>> parse_info('SVTYPE=DEL;END=2000;PRECISE')
        {'SVTYPE': 'DEL', 'END': 2000, 'PRECISE': True}
    """
    info: Dict = {}
    if info_field is None or pd.isnull(info_field):
        return info
    for pair in str(info_field).split(';'):
        if not pair:
            continue
        if '=' in pair:
            key, value = pair.split('=', 1)
            info[key] = value
        else:
            info[pair] = True

    # convert info types
    for key in info:
        if key in {'CIPOS', 'CIEND', 'CILEN'}:
            ci_start, ci_end = info[key].split(',')
            info[key] = (int(ci_start), int(ci_end))
        elif key in {'END', 'SVLEN'}:
            info[key] = int(str(info[key]).split(',')[0])
    return info


def parse_genes(value) -> List[str]:
    if value is None or value is True or pd.isnull(value):
        return []
    return [g for g in re.split(r'[;,|&\s]+', str(value)) if g and g != '.']


def convert_record(record: VcfRecordType) -> List[Dict]:
    """
    converts a vcf record to the standard row format (one row per alternate allele)

    Note:
        SVTYPE2 is reported for breakends by linked-read callers (ex. LongRanger) and gives the type of the event the
        breakend is a part of. It is kept as the alternate type of the variant
    """
    records = []

    for alt in record.alts if record.alts else [None]:
        info = record.info
        std_row: Dict = {}
        if record.id:
            std_row['id'] = record.id

        svtype = info.get('SVTYPE')
        if svtype is None and alt and alt.startswith('<'):
            svtype = alt
        if svtype is None and alt and ('[' in alt or ']' in alt):
            svtype = SVTYPE.BND
        if svtype is None and alt and record.ref and re.match(r'^[A-Z]+$', alt):
            size = len(alt) - len(record.ref)
            if size > 0:
                svtype = SVTYPE.INS
            elif size < 0:
                svtype = SVTYPE.DEL
        primary_type = convert_svtype(svtype)

        if primary_type == SVTYPE.BND and alt and alt not in {'<BND>', '<TRA>'}:
            chr2, end, _, _ = parse_bnd_alt(alt)
        else:
            chr2 = info.get('CHR2', record.chrom)
            end = record.stop
            if (
                primary_type == SVTYPE.DEL
                and 'END' not in info
                and alt
                and record.ref
                and re.match(r'^[A-Z]+$', alt)
            ):
                end = record.pos + len(record.ref) - len(alt)

        std_row.update(
            {
                'chrom1': record.chrom,
                'pos1': record.pos,
                'chrom2': chr2,
                'pos2': end,
                'primary_type': primary_type,
                'alternate_type': convert_svtype(info['SVTYPE2']) if 'SVTYPE2' in info else None,
            }
        )
        genes = []
        for field in GENE_INFO_FIELDS:
            genes.extend(parse_genes(info.get(field)))
        std_row['genes'] = genes
        std_row['data'] = {
            k: v
            for k, v in info.items()
            if k not in {'CHR2', 'SVTYPE', 'SVTYPE2', 'END', *GENE_INFO_FIELDS}
        }
        records.append(std_row)
    return records


def convert_pandas_rows_to_variants(df: pd.DataFrame) -> List[VcfRecordType]:
    rows = []
    for row in df.to_dict('records'):
        alts = row['ALT']
        rows.append(
            VcfRecordType(
                id=None if pd.isnull(row['ID']) else str(row['ID']),
                pos=int(row['POS']),
                info=parse_info(row['INFO']),
                chrom=str(row['CHROM']),
                ref=None if pd.isnull(row['REF']) else row['REF'],
                alts=[] if pd.isnull(alts) else str(alts).split(','),
            )
        )
    return rows


def _read_header_lines(fh) -> List[str]:
    header_lines = []
    line = '##'
    while line.startswith('##'):
        header_lines.append(line)
        line = fh.readline().strip()
    return header_lines[1:]


def pandas_vcf(input_file: str) -> Tuple[List[str], pd.DataFrame]:
    """
    Read a standard vcf file into a pandas dataframe
    """
    # read the comment/header information
    try:
        with open(input_file, 'r') as fh:
            header_lines = _read_header_lines(fh)
    except UnicodeDecodeError:
        with gzip.open(input_file, 'rt') as fh:
            header_lines = _read_header_lines(fh)
    # read the data
    df = pd.read_csv(
        input_file,
        sep='\t',
        skiprows=len(header_lines),
        dtype={
            '#CHROM': str,
            'CHROM': str,
            'POS': int,
            'ID': str,
            'INFO': str,
            'FORMAT': str,
            'REF': str,
            'ALT': str,
        },
        na_values=PANDAS_DEFAULT_NA_VALUES + ['.'],
        keep_default_na=False,
    )
    df = df.rename(columns={df.columns[0]: df.columns[0].replace('#', '')})
    required_columns = ['CHROM', 'INFO', 'POS', 'REF', 'ALT', 'ID']
    for col in required_columns:
        if col not in df.columns:
            raise KeyError(f'Missing required column: {col}')
    return header_lines, df


def convert_file(input_file: str, delimiter: str = '\t') -> List[VcfRecordType]:
    """process a VCF file

    Args:
        input_file: the input file name
        delimiter: unused, VCF files are always tab delimited
    """
    if delimiter != '\t':
        logger.warning(f'ignoring delimiter {repr(delimiter)}, VCF files are tab delimited')
    _, data = pandas_vcf(input_file)
    return convert_pandas_rows_to_variants(data)
