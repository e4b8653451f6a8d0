"""
Command-line interface for shortlink.

Usage:
    shortlink -s <url>    Shorten a long URL using the TinyURL API
    shortlink -u <url>    Unshorten a short URL to reveal its target
    shortlink -h          Show help
"""

import argparse
import json
import sys
from typing import List, Optional

from pydantic import ValidationError

from .config import load_config
from .service import ShortlinkService
from .common.logging_config import setup_logging


USAGE_ERROR = "Error: Invalid command or missing argument."


class ShortlinkArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with the full help text."""

    def error(self, message: str):
        self._print_message(f"{USAGE_ERROR}\n", sys.stderr)
        self._print_message(f"  ({message})\n\n", sys.stderr)
        self.print_help(sys.stderr)
        self.exit(1)


def positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0: {value!r}")
    return number


def build_parser(prog: str = "shortlink") -> ShortlinkArgumentParser:
    """Build the argument parser."""
    parser = ShortlinkArgumentParser(
        prog=prog,
        description="URL Shortener & Unshortener Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s -s https://example.com

  # Reveal where a short link points
  %(prog)s -u https://tinyurl.com/abc123

Notes:
  * Requires internet connectivity.
  * Settings can be given as SHORTLINK_* environment variables.
        """
    )

    operation = parser.add_mutually_exclusive_group()
    operation.add_argument(
        "-s",
        dest="shorten",
        metavar="URL",
        help="Shorten a long URL using the TinyURL API"
    )
    operation.add_argument(
        "-u",
        dest="unshorten",
        metavar="URL",
        help="Unshorten a short URL to reveal its target"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON"
    )

    parser.add_argument(
        "--timeout",
        type=positive_float,
        metavar="SECONDS",
        help="Overall timeout per request (default: 8, or SHORTLINK_TIMEOUT)"
    )

    parser.add_argument(
        "--connect-timeout",
        type=positive_float,
        metavar="SECONDS",
        help="Connection timeout (default: 5, or SHORTLINK_CONNECT_TIMEOUT)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        Process exit code
    """
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        parser.print_help()
        return 1

    args = parser.parse_args(argv)

    if args.shorten is None and args.unshorten is None:
        parser.error("one of -s or -u is required")

    overrides = {}
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.connect_timeout is not None:
        overrides["connect_timeout"] = args.connect_timeout

    try:
        config = load_config(**overrides)
    except ValidationError as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    logger = setup_logging(
        level="DEBUG" if args.verbose else config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    with ShortlinkService(config, logger=logger) as service:
        if args.shorten is not None:
            label = "Shortened URL"
            result = service.shorten(args.shorten)
        else:
            label = "Original URL"
            result = service.unshorten(args.unshorten)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(f"{label}: {result.payload}")

    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
