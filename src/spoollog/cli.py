"""Command-line front end for spoollog.

Reports each message given on the command line, or each line read from
stdin, through the global logger and flushes the log file on exit.
"""

import argparse
import logging
import sys
from argparse import Namespace
from collections.abc import Iterable, Sequence
from dataclasses import replace
from pathlib import Path

from spoollog import registry
from spoollog.config import LoggerSettings, load_settings
from spoollog.exceptions import ConfigurationError, Status
from spoollog.logger import Logger
from spoollog.types import Stream

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REPORT_FAILED = 1
EXIT_CONFIG_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        argparse.ArgumentParser: The configured parser.

    """
    parser = argparse.ArgumentParser(
        prog="spoollog",
        description="Print messages and mirror them into a log file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Report two messages and append them to run.log
  %(prog)s --log-file run.log "starting" "done"

  # Pipe a command's output into a fresh, named log session
  make 2>&1 | %(prog)s --log-file build.log --truncate --session build

  # Print a time-stamped log file name
  %(prog)s --make-name nightly
        """,
    )
    parser.add_argument(
        "messages",
        nargs="*",
        help="Messages to report (read from stdin if none are given)",
    )
    parser.add_argument(
        "--config", type=Path, help="JSON configuration file"
    )
    parser.add_argument("--log-file", type=Path, help="Log file path")
    parser.add_argument(
        "--truncate",
        action="store_true",
        help="Replace the log file instead of appending to it",
    )
    parser.add_argument("--session", help="Name shown in the session header")
    parser.add_argument(
        "--queue-length",
        type=int,
        help="Number of queued messages that triggers a flush",
    )
    parser.add_argument(
        "--no-color", action="store_true", help="Disable colour output"
    )
    parser.add_argument(
        "--no-wrap", action="store_true", help="Do not break long lines"
    )
    parser.add_argument(
        "--width", type=int, help="Maximum line width (0 = terminal width)"
    )
    parser.add_argument("--indent", type=int, help="Indentation of each line")

    kind = parser.add_mutually_exclusive_group()
    kind.add_argument(
        "--error", action="store_true", help="Report messages as errors"
    )
    kind.add_argument(
        "--raw", action="store_true", help="Report messages unformatted"
    )
    parser.add_argument(
        "--make-name",
        nargs="?",
        const="",
        metavar="NAME",
        help="Print a log file name built from NAME and the current time",
    )
    return parser


def apply_arguments(
    settings: LoggerSettings, args: Namespace
) -> LoggerSettings:
    """Override settings with command-line options that were given."""
    options = settings.options
    if args.no_color:
        options = replace(options, colored=False)
    if args.no_wrap:
        options = replace(options, wrap_tty=False, wrap_file=False)
    if args.width is not None:
        options = replace(options, max_line_width_tty=args.width)
    if args.indent is not None:
        options = replace(options, indent=args.indent)

    settings = replace(settings, options=options)
    if args.log_file is not None:
        settings = replace(settings, log_file=args.log_file)
    if args.truncate:
        settings = replace(settings, append=False)
    if args.session is not None:
        settings = replace(settings, session_name=args.session)
    if args.queue_length is not None:
        settings = replace(settings, max_queue_length=args.queue_length)
    return settings


def _report(log: Logger, message: str, args: Namespace) -> Status:
    if args.raw:
        return log.report_raw(message, Stream.STDOUT)
    if args.error:
        return log.report_error(None, None, None, message)
    return log.report_message(None, None, None, message)


def run(args: Namespace, messages: Iterable[str]) -> int:
    """Report messages according to parsed arguments.

    Returns:
        Process exit status

    """
    try:
        settings = apply_arguments(load_settings(args.config), args)
        log = registry.build_global_logger(
            settings.log_file,
            settings.append,
            settings.options,
            settings.max_queue_length,
        )
    except (ConfigurationError, ValueError) as e:
        print(f"spoollog: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    failed = False
    if settings.session_name:
        status = log.prepare_log_file(settings.session_name)
        failed = status is Status.OP_FAILED

    for message in messages:
        status = _report(log, message, args)
        if status in (Status.OP_FAILED, Status.INVALID_USE):
            failed = True

    if log.flush() is Status.OP_FAILED:
        failed = True
    registry.delete_global_logger()
    logger.debug("Reported messages, failed=%s", failed)
    return EXIT_REPORT_FAILED if failed else EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line interface.

    Args:
        argv: Arguments without the program name, defaults to sys.argv

    Returns:
        Process exit status

    """
    args = create_parser().parse_args(argv)
    if args.make_name is not None:
        print(Logger.make_log_name(args.make_name or None))
        return EXIT_OK

    if args.messages:
        messages: Iterable[str] = args.messages
    else:
        messages = (line.rstrip("\n") for line in sys.stdin)
    return run(args, messages)
