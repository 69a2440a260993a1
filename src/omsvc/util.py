import errno
import logging
import os
import re
import tempfile
from glob import glob
from typing import Dict, List, Optional

import pandas as pd
from braceexpand import braceexpand

from .constants import NULL_VALUE

logger = logging.getLogger('omsvc')


def bash_expands(*expressions) -> List[str]:
    """
    expand a file glob expression, allowing bash-style brackets.

    Returns:
        list: a list of files

    Example:
        >>> bash_expands('./{test,doc}/*py')
        [...]
    """
    result = []
    for expression in expressions:
        eresult = []
        for name in braceexpand(expression):
            for fname in glob(name):
                eresult.append(fname)
        if not eresult:
            raise FileNotFoundError('The expression does not match any files', expression)
        result.extend(eresult)
    return [os.path.abspath(f) for f in result]


def filepath(path):
    try:
        file_list = bash_expands(path)
    except FileNotFoundError:
        raise TypeError('File does not exist', path)
    else:
        if not file_list:
            raise TypeError('File not found', path)
        elif len(file_list) > 1:
            raise TypeError('File pattern match multiple files and expected only one', path)
    return file_list[0]


NA_VALUES = ['', 'NA', 'N/A', 'NaN', 'nan', 'None', 'null', '.']


def read_delimited_file(
    filename: str, delimiter: str = '\t', header_prefix: Optional[str] = None
) -> List[Dict]:
    """
    read a delimited text file with a header into a list of rows. All values are read as strings and missing values
    are converted to None

    Args:
        filename: path to the input file
        delimiter: the column delimiter, may be a regular expression (ex. ``[,\\t]``)
        header_prefix: comment prefix marking the header line (ex. ``#h`` in smap files). When not given the first
            line not starting with ``##`` is the header
    """
    skip = 0
    names = None
    with open(filename, 'r') as fh:
        for line in fh:
            if header_prefix and line.startswith(header_prefix):
                names = [c.strip() for c in re.split(delimiter, line[len(header_prefix) :].strip())]
            elif not line.startswith('##' if not header_prefix else '#'):
                break
            skip += 1
    df = pd.read_csv(
        filename,
        sep=delimiter,
        skiprows=skip,
        header=None if names else 0,
        names=names,
        dtype=str,
        comment=None,
        engine='python' if len(delimiter) > 1 else 'c',
        keep_default_na=False,
        na_values=NA_VALUES,
    )
    df.columns = [str(c)[1:].strip() if str(c).startswith('#') else str(c).strip() for c in df.columns]
    return df.astype(object).where(df.notnull(), None).to_dict('records')


def log_arguments(args):
    """
    output the arguments to the console

    Args:
        args (Namespace): the namespace to print arguments for
    """
    logger.info('arguments')

    indent = ' '

    for arg, val in sorted(args.__dict__.items()):
        if isinstance(val, list):
            if len(val) <= 1:
                logger.info(f'{indent}{arg} = {val}')
                continue
            logger.info(f'{indent}{arg} = [')
            for v in val:
                logger.info(f'{indent * 2}{repr(v)}')
            logger.info(f'{indent}]')
        elif any([isinstance(val, typ) for typ in [str, int, float, bool, tuple]]) or val is None:
            logger.info(f'{indent}{arg} = {repr(val)}')
        else:
            logger.info(f'{indent}{arg} = {object.__repr__(val)}')


def mkdirp(dirname):
    """
    Make a directory or path of directories. Suppresses the error that is normally raised when the directory already exists
    """
    logger.info(f"creating output directory: '{dirname}'")
    try:
        os.makedirs(dirname)
    except OSError as exc:
        if exc.errno == errno.EEXIST and os.path.isdir(dirname):
            pass
        else:
            raise exc
    return dirname


def output_tabbed_file(rows: List, filename: str, header: Optional[List[str]] = None):
    """
    write a list of rows (dictionaries or objects with a flatten method) as a tab delimited file.

    The file is first written to a temporary file in the same directory and then moved into place so that
    an error while writing never leaves a partial file behind

    Args:
        rows: the rows to write
        filename: path to the output file
        header: the columns (in order) to output. If not given all columns found are output in sorted order
    """
    flat_rows: List[Dict] = []
    columns = set()
    for row in rows:
        if not isinstance(row, dict):
            row = row.flatten()
        flat_rows.append(row)
        if header is None:
            columns.update(row.keys())
    if header is None:
        header = sorted(columns)
    logger.info(f'writing: {filename}')
    df = pd.DataFrame(flat_rows, columns=header, dtype=object)
    df = df.where(df.notnull(), NULL_VALUE)

    dirname = os.path.dirname(os.path.abspath(filename))
    fd, temp_name = tempfile.mkstemp(dir=dirname, prefix='.', suffix='.tmp')
    try:
        with os.fdopen(fd, 'w') as fh:
            df.to_csv(fh, columns=header, index=False, sep='\t')
        os.replace(temp_name, filename)
    except BaseException:
        if os.path.exists(temp_name):
            os.remove(temp_name)
        raise
