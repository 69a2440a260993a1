#!python
import argparse
import logging
import platform
import sys
import time
from typing import List, Optional

from . import __version__
from . import config as _config
from . import util as _util
from .compare.constants import DEFAULTS
from .compare.main import main as compare_main
from .constants import SOURCE, float_fraction, non_negative_int, parse_svtypes
from .util import filepath

OTHER_INPUTS = [
    (SOURCE.ANNOTSV, ['-a', '--annotsv_input'], 'AnnotSV annotated variants file path (tsv)'),
    (SOURCE.SAMPLOT, ['-s', '--samplot_input'], 'samplot variants file path (tsv)'),
    (SOURCE.VCF_LONGRANGER, ['-vl', '--vcf_longranger_input'], 'LongRanger variants file path (vcf)'),
    (SOURCE.VCF_SNIFFLES, ['-vs', '--vcf_sniffles_input'], 'Sniffles variants file path (vcf)'),
]


def create_parser(argv):
    parser = argparse.ArgumentParser(
        formatter_class=_config.CustomHelpFormatter,
        add_help=False,
        description='compare structural variants called by optical mapping against the variants called by '
        'high-throughput sequencing pipelines',
    )
    required = parser.add_argument_group('required arguments')
    optional = parser.add_argument_group('optional arguments')
    optional.add_argument('-h', '--help', action='help', help='show this help message and exit')
    optional.add_argument(
        '-v',
        '--version',
        action='version',
        version='%(prog)s version ' + __version__,
        help='Outputs the version number',
    )
    optional.add_argument('--log', help='redirect stdout to a log file', default=None)
    optional.add_argument(
        '--log_level',
        help='level of logging to output',
        choices=['INFO', 'DEBUG'],
        default='INFO',
    )

    required.add_argument(
        '-b',
        '--bionano_input',
        required=True,
        type=filepath,
        help='bionano pipeline result file path (smap)',
    )
    for source, flags, help_msg in OTHER_INPUTS:
        optional.add_argument(*flags, type=filepath, default=None, help=help_msg)
    required.add_argument(
        '-o', '--output', required=True, help='path to the report file', metavar='FILEPATH'
    )

    optional.add_argument(
        '-t',
        '--variant_type',
        type=parse_svtypes,
        default=DEFAULTS.variant_type,
        help=DEFAULTS.define('variant_type'),
    )
    optional.add_argument(
        '-d',
        '--distance_variance',
        type=non_negative_int,
        default=DEFAULTS.distance_variance,
        help=DEFAULTS.define('distance_variance'),
    )
    optional.add_argument(
        '-mp',
        '--minimal_proportion',
        type=float_fraction,
        default=DEFAULTS.minimal_proportion,
        help=DEFAULTS.define('minimal_proportion'),
    )
    optional.add_argument(
        '-g',
        '--gene_intersection',
        action='store_true',
        default=DEFAULTS.gene_intersection,
        help=DEFAULTS.define('gene_intersection'),
    )
    optional.add_argument(
        '-svt',
        '--prefer_base_svtype',
        action='store_true',
        default=DEFAULTS.prefer_base_svtype,
        help=DEFAULTS.define('prefer_base_svtype'),
    )
    optional.add_argument(
        '--keep_duplicates',
        action='store_true',
        default=DEFAULTS.keep_duplicates,
        help=DEFAULTS.define('keep_duplicates'),
    )
    optional.add_argument(
        '--processes',
        type=non_negative_int,
        default=DEFAULTS.processes,
        help=DEFAULTS.define('processes'),
    )
    args = parser.parse_args(argv)

    # defaults read from the environment are not passed through the argument type
    if args.variant_type is not None:
        variant_types = [t for t in args.variant_type if t is not None]
        try:
            args.variant_type = parse_svtypes(','.join(variant_types)) if variant_types else None
        except argparse.ArgumentTypeError as err:
            parser.error(str(err))
    if args.distance_variance is not None and args.distance_variance < 0:
        parser.error('--distance_variance must be a non-negative integer')
    if args.minimal_proportion is not None and not 0 <= args.minimal_proportion <= 1:
        parser.error('--minimal_proportion must be a value between 0 and 1')
    if args.processes < 1:
        parser.error('--processes must be at least 1')
    args.other_inputs = [
        (source, getattr(args, flags[-1][2:]))
        for source, flags, _ in OTHER_INPUTS
        if getattr(args, flags[-1][2:]) is not None
    ]
    if not args.other_inputs:
        parser.error(
            'at least one variants file to compare against is required: {}'.format(
                ', '.join([flags[-1] for _, flags, _ in OTHER_INPUTS])
            )
        )
    return parser, args


def main(argv: Optional[List[str]] = None):
    """
    sets up the parser and checks the validity of command line args
    then reads the input files and writes the comparison report

    Args:
        argv: List of arguments, defaults to command line arguments
    """
    if argv is None:  # need to do at run time or patching will not behave as expected
        argv = sys.argv[1:]
    start_time = int(time.time())
    parser, args = create_parser(argv)

    log_conf = {
        'format': '{asctime} [{levelname}] {message}',
        'style': '{',
        'level': args.log_level,
    }

    original_logging_handlers = logging.root.handlers[:]
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    if args.log:  # redirect stdout AND stderr to a log file
        log_conf['filename'] = args.log
    logging.basicConfig(**log_conf)

    _util.logger.info(f'omsvc: {__version__}')
    _util.logger.info(f'hostname: {platform.node()}')
    _util.log_arguments(args)

    try:
        compare_main(
            base_input=args.bionano_input,
            other_inputs=args.other_inputs,
            output=args.output,
            distance_variance=args.distance_variance,
            minimal_proportion=args.minimal_proportion,
            variant_type=args.variant_type,
            gene_intersection=args.gene_intersection,
            prefer_base_svtype=args.prefer_base_svtype,
            keep_duplicates=args.keep_duplicates,
            processes=args.processes,
            start_time=start_time,
        )

        duration = int(time.time()) - start_time
        hours = duration - duration % 3600
        minutes = duration - hours - (duration - hours) % 60
        seconds = duration - hours - minutes
        _util.logger.info(
            'run time (hh/mm/ss): {}:{:02d}:{:02d}'.format(hours // 3600, minutes // 60, seconds)
        )
        _util.logger.info(f'run time (s): {duration}')
    finally:
        try:
            for handler in logging.root.handlers[:]:
                logging.root.removeHandler(handler)
            for handler in original_logging_handlers:
                logging.root.addHandler(handler)
        except Exception as err:
            print(err)


if __name__ == '__main__':
    main()
