import argparse
import logging
import sys
from pathlib import Path

from apo2cdsp import __version__
from apo2cdsp.errors import FileAccessError, InputError, ParseError
from apo2cdsp.file_utils import read_file, validate_file_access, write_file
from apo2cdsp.parser import parse_filters, strip_preamp, to_json

logger = logging.getLogger("apo2cdsp")

DESCRIPTION = "Parse EqualizerAPO parametric EQ filter data and convert to JSON"
EPILOG = """examples:
  apo2cdsp filters.txt
  apo2cdsp filters.txt -o output.json
  apo2cdsp filters.txt --validate
  apo2cdsp filters.txt --quiet
"""


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"Error: {message}\nUse '{self.prog} --help' for more information\n")


def configure_logging(quiet=False):
    """Send progress lines to stdout and warnings or errors to stderr."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter = logging.Formatter("%(message)s")

    out_handler = logging.StreamHandler(sys.stdout)
    out_handler.setLevel(logging.DEBUG)
    out_handler.addFilter(lambda record: record.levelno < logging.WARNING)
    out_handler.setFormatter(formatter)

    err_handler = logging.StreamHandler(sys.stderr)
    err_handler.setLevel(logging.WARNING)
    err_handler.setFormatter(formatter)

    logger.addHandler(out_handler)
    logger.addHandler(err_handler)
    logger.setLevel(logging.WARNING if quiet else logging.INFO)


def build_parser():
    parser = ArgumentParser(
        prog="apo2cdsp",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input_file", help="EqualizerAPO ParametricEq export (.txt)")
    parser.add_argument(
        "-o", "--output",
        help="Output file path (default: input path without its extension)",
    )
    parser.add_argument("--validate", action="store_true",
                        help="Only validate the input file without creating output")
    parser.add_argument("--quiet", action="store_true", help="Suppress success messages")
    parser.add_argument("-v", "--version", action="version", version=f"apo2cdsp v{__version__}")
    return parser


def default_output_path(input_path):
    input_path = Path(input_path)
    return input_path.parent / input_path.stem


def process_file(input_path, output=None, validate=False):
    """Convert one EqualizerAPO export. Returns the parse result and the output path (None when validating)."""
    validate_file_access(input_path)

    raw_content = read_file(input_path)
    if not raw_content.strip():
        raise InputError("Input file contains only whitespace")

    result = parse_filters(strip_preamp(raw_content))

    if validate:
        return result, None

    output_path = Path(output) if output else default_output_path(input_path)
    write_file(output_path, to_json(result.data))
    return result, output_path


def main(argv=None):
    args = build_parser().parse_args(argv)

    configure_logging(args.quiet)

    try:
        result, output_path = process_file(args.input_file, args.output, args.validate)
    except (ParseError, FileAccessError, OSError) as e:
        logger.error(f"✗ Error processing file: {e}")
        return 1

    if output_path is None:
        logger.info(f"✓ Input file {args.input_file} is valid")
    else:
        logger.info(f"✓ Successfully converted {args.input_file} to {output_path}")
    logger.info(f"✓ Parsed {result.filter_count} filters in {result.processing_time_ms:.2f}ms")
    logger.info("✓ Generated settings for cDSP Parametric EQ")
    return 0
