"""Process-wide global logger.

The global logger is set up once through ``build_global_logger()`` and
used throughout the program, most conveniently through ``rep_raw()``,
``rep_msg()`` and ``rep_err()`` which fill in the caller's file, line and
function. ``delete_global_logger()`` flushes it; an ``atexit`` hook does
the same at interpreter exit.

CRITICAL: Building, replacing and deleting the global logger is NOT
thread safe. Do it before starting worker threads. Using the logger
itself from many threads is safe.
"""

import atexit
import inspect
import logging
import sys
from pathlib import Path

from spoollog.constants import DEFAULT_MAX_QUEUE_LENGTH
from spoollog.exceptions import Status
from spoollog.logger import Logger
from spoollog.sink import LogPath
from spoollog.types import FormattingOptions, Stream

logger = logging.getLogger(__name__)


class _RegistryState:
    """Container for the global logger slot.

    Attributes:
        logger: The global logger, ``None`` if it has not been built

    """

    def __init__(self) -> None:
        """Initialize an empty slot."""
        self.logger: Logger | None = None


_state = _RegistryState()


def build_global_logger(
    log_file: LogPath | None = None,
    append: bool = True,  # noqa: FBT001, FBT002
    options: FormattingOptions | None = None,
    max_queue_length: int = DEFAULT_MAX_QUEUE_LENGTH,
) -> Logger:
    """Create the global logger, replacing an existing one.

    The previous global logger is closed (and thus flushed) first.

    Args:
        log_file: Log file path, ``None`` to only print
        append: Append to an existing log file instead of replacing it
        options: Formatting options
        max_queue_length: Number of queued messages that triggers a flush

    Returns:
        The new global logger

    """
    if _state.logger is not None:
        delete_global_logger()
    _state.logger = Logger(log_file, append, options, max_queue_length)
    logger.debug("Built global logger (log file: %s)", log_file)
    return _state.logger


def delete_global_logger() -> Status:
    """Close and remove the global logger.

    Returns:
        ``Status.INVALID_USE`` if there is no global logger, else
        ``Status.OK``

    """
    if _state.logger is None:
        return Status.INVALID_USE
    old, _state.logger = _state.logger, None
    old.close()
    return Status.OK


def get_global_logger() -> Logger | None:
    """Return the global logger, ``None`` if it has not been built.

    Do not close the returned logger yourself; use
    ``delete_global_logger()``.
    """
    return _state.logger


def _cleanup_global_logger() -> None:
    """Flush the global logger at interpreter exit."""
    if _state.logger is not None:
        delete_global_logger()


atexit.register(_cleanup_global_logger)


def _caller_origin() -> tuple[str, int, str]:
    """Return file name, line and function of the ``rep_*`` caller."""
    frame = inspect.currentframe()
    try:
        # skip this helper and the rep_* function
        caller = frame.f_back.f_back if frame and frame.f_back else None
        if caller is None:
            return "<unknown>", 0, "<unknown>"
        return (
            Path(caller.f_code.co_filename).name,
            caller.f_lineno,
            caller.f_code.co_name,
        )
    finally:
        del frame


def rep_raw(message: str) -> Status | None:
    """Report a raw message through the global logger.

    Prints the message to stdout if there is no global logger.

    Returns:
        Status of ``Logger.report_raw``, ``None`` without a global logger

    """
    if _state.logger is not None:
        return _state.logger.report_raw(message, Stream.STDOUT)
    print(message, flush=True)
    return None


def rep_msg(message: str) -> Status | None:
    """Report a message with the caller's file, line and function.

    Prints ``[<file> | <line> | <function>]: <message>`` to stdout if
    there is no global logger.

    Returns:
        Status of ``Logger.report_message``, ``None`` without a global
        logger

    """
    file, line, function = _caller_origin()
    if _state.logger is not None:
        return _state.logger.report_message(file, line, function, message)
    print(f"[{file} | {line} | {function}]: {message}", flush=True)
    return None


def rep_err(message: str) -> Status | None:
    """Report an error with the caller's file, line and function.

    Prints ``ERROR [<file> | <line> | <function>]: <message>`` to stderr
    if there is no global logger.

    Returns:
        Status of ``Logger.report_error``, ``None`` without a global logger

    """
    file, line, function = _caller_origin()
    if _state.logger is not None:
        return _state.logger.report_error(file, line, function, message)
    print(
        f"ERROR [{file} | {line} | {function}]: {message}",
        file=sys.stderr,
        flush=True,
    )
    return None
