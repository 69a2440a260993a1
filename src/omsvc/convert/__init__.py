from typing import Dict, List, Optional

from shortuuid import uuid

from ..error import InvalidRecordError, InvalidVariantError
from ..util import logger
from ..variant import StructuralVariant, deduplicate
from .annotsv import convert_file as _read_annotsv
from .annotsv import convert_row as _parse_annotsv
from .bionano import convert_file as _read_bionano
from .bionano import convert_row as _parse_bionano
from .constants import DEFAULT_DELIMITER, SUPPORTED_TOOL
from .samplot import convert_file as _read_samplot
from .samplot import convert_row as _parse_samplot
from .vcf import convert_file as read_vcf
from .vcf import convert_record as _parse_vcf_record

READERS = {
    SUPPORTED_TOOL.BIONANO: _read_bionano,
    SUPPORTED_TOOL.ANNOTSV: _read_annotsv,
    SUPPORTED_TOOL.SAMPLOT: _read_samplot,
    SUPPORTED_TOOL.VCF: read_vcf,
}


def convert_tool_output(
    input_file: str,
    file_type: str,
    source: Optional[str] = None,
    delimiter: Optional[str] = None,
    collapse: bool = True,
    prefer_base_type: bool = False,
) -> List[StructuralVariant]:
    """
    Reads output from a given SV caller and converts it to structural variants. Also collapses duplicates

    Args:
        input_file: path to the caller output
        file_type (SUPPORTED_TOOL): the format of the file
        source: tag for the variants (ex. vcf-sniffles), defaults to the file type
        delimiter: column delimiter, defaults to the usual delimiter of the format
        collapse: remove duplicate calls
        prefer_base_type: compare breakends by their base type when identifying duplicates

    Raises:
        InvalidRecordError: a row could not be converted
    """
    file_type = SUPPORTED_TOOL.enforce(file_type)
    source = source or file_type
    if delimiter is None:
        delimiter = DEFAULT_DELIMITER[file_type]

    logger.info(f'reading: {input_file}')
    rows = READERS[file_type](input_file, delimiter=delimiter)
    logger.info(f'found {len(rows)} rows')

    result = []
    for row in rows:
        try:
            std_rows = _convert_tool_row(row, file_type)
            for std_row in std_rows:
                if not std_row.get('id'):
                    std_row['id'] = '{}-{}'.format(source, uuid())
                result.append(StructuralVariant(source=source, **std_row))
        except (KeyError, ValueError, TypeError, NotImplementedError, InvalidVariantError) as err:
            logger.error(f'Error in converting row {row}')
            raise InvalidRecordError(
                'row could not be converted to a structural variant: {}'.format(repr(err)),
                filename=input_file,
                row=row,
            ) from err
    logger.info(f'generated {len(result)} variants')
    if collapse:
        result = deduplicate(result, prefer_base_type=prefer_base_type)
    return result


def _convert_tool_row(row, file_type: str) -> List[Dict]:
    """
    converts a row parsed from an input file to the standard row format (the arguments of a StructuralVariant)
    """
    if file_type == SUPPORTED_TOOL.VCF:
        return _parse_vcf_record(row)
    elif file_type == SUPPORTED_TOOL.BIONANO:
        return [_parse_bionano(row)]
    elif file_type == SUPPORTED_TOOL.ANNOTSV:
        return [_parse_annotsv(row)]
    elif file_type == SUPPORTED_TOOL.SAMPLOT:
        return [_parse_samplot(row)]
    raise NotImplementedError('unsupported file type', file_type)
