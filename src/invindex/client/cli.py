"""
Command line entry point.

    invindex <num_mappers> <num_reducers> <manifest_path> [--output-dir DIR] [--metrics FILE]
"""

import argparse
import logging
import sys

from invindex.common.config import JobConfig, default_log_level, parse_count
from invindex.common.errors import ConfigurationError, WorkerError
from invindex.common.logging_setup import configure_logging
from invindex.coordinator.job_manager import build_index

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """Reports bad arguments as ConfigurationError instead of exiting with status 2"""

    def error(self, message):
        raise ConfigurationError(message)


def _count_argument(text):
    try:
        return parse_count(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog='invindex',
        description='Build a letter-partitioned inverted index with concurrent mapper and reducer threads'
    )
    parser.add_argument('num_mappers', type=_count_argument, help='Number of mapper threads')
    parser.add_argument('num_reducers', type=_count_argument, help='Number of reducer threads')
    parser.add_argument('manifest_path', help='File with the document count followed by one path per line')
    parser.add_argument('--output-dir', default='.',
                        help='Directory for the a.txt .. z.txt files (default: current directory)')
    parser.add_argument('--metrics', dest='metrics_path', help='Write run metrics as JSON to this file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log progress (INFO level)')
    parser.add_argument('--log-level', help='Explicit log level, overrides --verbose')
    return parser


def main(argv=None) -> int:
    """Run the indexer; returns the process exit status."""
    try:
        configure_logging(default_log_level())
        try:
            args = build_parser().parse_args(argv)
        except SystemExit as e:
            # --help prints usage and exits through argparse
            return e.code or 0

        if args.log_level:
            configure_logging(args.log_level)
        elif args.verbose:
            configure_logging('INFO')

        config = JobConfig(
            num_mappers=args.num_mappers,
            num_reducers=args.num_reducers,
            manifest_path=args.manifest_path,
            output_dir=args.output_dir,
            metrics_path=args.metrics_path
        ).validate()

        metrics = build_index(config)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    except WorkerError as e:
        logger.error(f"Indexing failed: {e}")
        return 1

    if config.metrics_path:
        metrics.save_to_file(config.metrics_path)
        logger.info(f"Metrics written to {config.metrics_path}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
