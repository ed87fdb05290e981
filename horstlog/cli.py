"""horst-decode — decode horst capture logs into typed frame records."""

import logging
import sys
from argparse import ArgumentParser, ArgumentTypeError
from typing import Iterator

from horstlog.config import ConfigError, load_config
from horstlog.formatter import OUTPUT_FORMATS, get_formatter
from horstlog.reader import STDIN, DecodeResult, expand_paths, iter_results, read_file, tail_file

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [DECODER] %(levelname)s %(message)s"


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 1:
        raise ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="horst-decode",
        description="Decode horst output lines into typed captured-frame records.",
    )
    parser.add_argument(
        "files",
        nargs="+",
        help="horst output file path(s) or glob pattern(s); '-' reads stdin",
    )
    parser.add_argument(
        "--output",
        choices=OUTPUT_FORMATS,
        help="Output format (default from config: text)",
    )
    parser.add_argument(
        "--skip-invalid",
        action="store_true",
        default=None,
        help="Log and skip lines that fail to decode instead of stopping",
    )
    parser.add_argument(
        "--lines",
        type=_positive_int,
        help="Stop after N decoded records",
    )
    parser.add_argument(
        "--tail",
        action="store_true",
        help="Follow a file for new lines (like tail -f)",
    )
    parser.add_argument(
        "--config",
        help="Path to YAML config file (default: $HORST_CONFIG)",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def _results(paths: list[str], tail: bool, poll_interval: float) -> Iterator[DecodeResult]:
    if tail:
        yield from iter_results(tail_file(paths[0], poll_interval), source=paths[0])
        return
    for path in paths:
        logger.debug("Reading %s", path)
        yield from read_file(path)


def run(args) -> int:
    """Decode the requested inputs and print one formatted record per line."""
    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    log_level = (args.log_level or config.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    output = args.output or config.output
    skip_invalid = config.skip_invalid if args.skip_invalid is None else args.skip_invalid

    if args.tail and (len(args.files) > 1 or args.files[0] == STDIN):
        print("Error: --tail requires a single file", file=sys.stderr)
        return 1

    try:
        paths = expand_paths(args.files)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    formatter = get_formatter(output)
    count = 0
    for result in _results(paths, args.tail, config.poll_interval):
        where = f"{result.source}:{result.line_number}"
        if not result.ok:
            if not skip_invalid:
                print(f"Error: {where}: {result.error}", file=sys.stderr)
                return 1
            logger.warning("%s: skipped: %s", where, result.error)
            continue
        print(formatter(result.record))
        count += 1
        if args.lines and count >= args.lines:
            break

    logger.info("Decoded %d record(s) from %d input(s)", count, len(paths))
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        sys.exit(run(args))
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
