"""Command-line interface for grep-email."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from grepemail import __version__
from grepemail.config import ConfigError, ConfigManager
from grepemail.grep import grep
from grepemail.line_source import read_lines
from grepemail.matcher import make_predicate
from grepemail.models import EMAIL_FIELDS, GrepOptions

logger = logging.getLogger(__name__)

EXAMPLES = """\
examples:
  Show lines that contain at least 2 emails:
    %(prog)s --min-emails 2 file.txt

  Show lines that contain emails from gmail:
    %(prog)s --host-contains gmail.com file.txt
"""


def setup_logging(level: str = "WARNING") -> None:
    """Set up logging to standard error.

    Args:
        level: Name of the logging level
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
        force=True,
    )


def uint(value: str) -> int:
    """Argument type for non-negative integers."""
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more: {value!r}")
    return n


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="grep-email",
        description="Print lines having email address(es) (optionally of certain criteria) in them",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Files to read (default: standard input)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)"
    )

    filtering = parser.add_argument_group("filtering")
    filtering.add_argument(
        "--min-emails",
        type=uint,
        help="Minimum number of emails in a line (default: 1)"
    )
    filtering.add_argument(
        "--max-emails",
        type=int,
        help="Maximum number of emails in a line, -1 for no limit (default: -1)"
    )
    filtering.add_argument(
        "-i", "--ignore-case",
        action=argparse.BooleanOptionalAction,
        help="Case-insensitive contains/matches criteria"
    )

    criteria = parser.add_argument_group("email criteria")
    for name in EMAIL_FIELDS:
        criteria.add_argument(
            f"--{name}-contains",
            metavar="STR",
            help=f"Email {name} must contain STR"
        )
        criteria.add_argument(
            f"--{name}-not-contains",
            metavar="STR",
            help=f"Email {name} must not contain STR"
        )
        criteria.add_argument(
            f"--{name}-matches",
            metavar="REGEX",
            help=f"Email {name} must match REGEX"
        )

    output = parser.add_argument_group("output")
    output.add_argument(
        "-v", "--invert-match",
        action="store_true",
        default=None,
        help="Print lines that do not match"
    )
    output.add_argument(
        "-c", "--count",
        action="store_true",
        default=None,
        help="Print only the number of matching lines"
    )
    output.add_argument(
        "-n", "--line-number",
        action="store_true",
        default=None,
        help="Prefix each line with its line number"
    )
    output.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=None,
        help="Print nothing, exit with status 0 on the first match"
    )
    output.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        help="Highlight matching emails (default: auto)"
    )
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and grep.

    Args:
        argv: Command-line arguments, without the program name

    Returns:
        Exit code
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or "WARNING")

    criteria = {
        "min_emails": args.min_emails,
        "max_emails": args.max_emails,
        "ignore_case": args.ignore_case,
    }
    for name in EMAIL_FIELDS:
        for kind in ("contains", "not_contains", "matches"):
            key = f"{name}_{kind}"
            criteria[key] = getattr(args, key)
    output = {key: getattr(args, key) for key in GrepOptions.model_fields}

    try:
        config_manager = ConfigManager(args.config)
        config_manager.apply_overrides(criteria=criteria, output=output)
    except ConfigError as e:
        logger.error(str(e))
        return 2

    if not args.log_level:
        setup_logging(config_manager.log_level)

    predicate = make_predicate(config_manager.criteria)
    opened: List[Optional[str]] = []
    try:
        source = read_lines(args.files, opened=opened.append)
        return grep(source, predicate, config_manager.output, opened=opened)
    except KeyboardInterrupt:
        return 130
    except BrokenPipeError:
        # Python flushes stdout on exit; point it at devnull so that fails silently
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 1


def main():
    """Main entry point for the CLI."""
    sys.exit(run())


if __name__ == "__main__":
    main()
