"""Thread-safe logger printing to the terminal and buffering into a file.

Messages come in three kinds:

- raw strings, printed and stored unchanged
- messages, formatted with their origin (file, line, function)
- errors, formatted like messages with an ERROR tag and printed to stderr

Each kind has three entry points:

- ``show_*`` prints the message to stdout or stderr
- ``log_*`` stores the message for the log file
- ``report_*`` does both

Stored messages are not written immediately. They are collected in a
queue which is flushed to the file once it holds ``max_queue_length``
messages, when ``flush()`` is called, when the log file changes, or when
the logger is closed. The first flush after a file is assigned writes a
session header.

Locking:
    Every public method acquires the instance lock exactly once. Methods
    named ``_*_locked`` expect the caller to hold the lock and never
    acquire it, so a flush triggered from inside ``log_*`` or
    ``set_log_file`` cannot deadlock. ``report_*`` holds the lock across
    printing and queueing, so concurrent reports never interleave.
"""

import logging
import sys
import threading
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import Self

from spoollog.constants import DEFAULT_MAX_QUEUE_LENGTH
from spoollog.exceptions import SinkError, Status
from spoollog.formatter import WidthProbe, compose_message
from spoollog.message_queue import MessageQueue
from spoollog.sink import FileSink, LogPath
from spoollog.terminal import get_terminal_width, make_date_time_string
from spoollog.types import FormattingOptions, Origin, Stream

logger = logging.getLogger(__name__)


def _check_queue_length(length: int) -> int:
    if length < 0:
        msg = f"max_queue_length must not be negative, got {length}"
        raise ValueError(msg)
    return length


class Logger:
    """Print messages to the terminal and mirror them into a log file.

    All operations work without a log file; those that would touch the
    file return ``Status.NO_LOG_FILE`` in that case.

    Example:
        >>> with Logger("run.log", append=False) as log:
        ...     log.report_message("main.py", 10, "main", "hello")
        ...     log.report_error(None, None, "load", "file not found")

    """

    def __init__(
        self,
        log_file: LogPath | None = None,
        append: bool = True,  # noqa: FBT001, FBT002
        options: FormattingOptions | None = None,
        max_queue_length: int = DEFAULT_MAX_QUEUE_LENGTH,
        width_probe: WidthProbe = get_terminal_width,
    ) -> None:
        """Initialize the logger.

        Args:
            log_file: Log file path, ``None`` to only print
            append: Append to an existing log file instead of replacing it
            options: Formatting options, defaults to ``FormattingOptions()``
            max_queue_length: Number of queued messages that triggers a flush
            width_probe: Terminal width probe for auto-detected widths

        """
        self._lock = threading.Lock()
        self._queue = MessageQueue()
        self._sink = FileSink(log_file, append)
        self._options = options or FormattingOptions()
        self._max_queue_length = _check_queue_length(max_queue_length)
        self._width_probe = width_probe

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> Status:
        """Flush remaining messages before the logger is discarded.

        Returns:
            Result of ``flush()``

        """
        return self.flush()

    # ----- log file -----

    @property
    def log_file(self) -> Path | None:
        """Current log file, ``None`` if none is set."""
        with self._lock:
            return self._sink.path

    @property
    def header_written(self) -> bool:
        """Whether the current session header is in the file."""
        with self._lock:
            return self._sink.header_written

    def set_log_file(
        self,
        log_file: LogPath | None,
        append: bool = True,  # noqa: FBT001, FBT002
    ) -> Status:
        """Switch to another log file.

        Pending messages are flushed to the old file first. The new file
        gets its own session header on the next flush.

        Args:
            log_file: New log file, ``None`` or ``""`` to stop file logging
            append: Append to an existing file instead of replacing it

        Returns:
            Result of flushing the old file, ``Status.OK`` if there was none

        """
        with self._lock:
            status = Status.OK
            if self._sink.configured:
                status = self._flush_locked()
            self._sink.retarget(log_file, append)
            logger.debug("Log file set to %s", self._sink.path)
            return status

    def prepare_log_file(self, session_name: str | None = None) -> Status:
        """Write the session header with an optional name.

        Only the first header of a session is written; the header that
        ``flush()`` writes implicitly has no name, so call this before the
        first flush to get a named header.

        Args:
            session_name: Name shown in the header

        Returns:
            ``Status.NO_LOG_FILE``, ``Status.OP_FAILED`` or ``Status.OK``

        """
        with self._lock:
            return self._prepare_locked(session_name)

    def flush(self) -> Status:
        """Write all queued messages to the log file.

        Returns:
            - ``Status.NO_LOG_FILE`` if no file is set
            - ``Status.OP_FAILED`` if a file operation failed
            - ``Status.OK`` otherwise, including an empty queue

        """
        with self._lock:
            return self._flush_locked()

    # ----- raw strings -----

    def report_raw(self, message: str, stream: int = Stream.STDOUT) -> Status:
        """Print a string and store it for the log file, both unchanged.

        Args:
            message: String to print and store
            stream: ``Stream.STDOUT`` or ``Stream.STDERR``

        Returns:
            ``Status.NO_LOG_FILE`` without a log file, the status of
            printing if it failed, else the result of storing

        """
        with self._lock:
            status = self._show_locked(message, stream)
            if not self._sink.configured:
                return Status.NO_LOG_FILE
            logged = self._log_locked(message)
            return logged if status is Status.OK else status

    def show_raw(self, message: str, stream: int = Stream.STDOUT) -> Status:
        """Print a string unchanged.

        Returns:
            ``Status.INVALID_USE`` for an unknown stream, else ``Status.OK``

        """
        with self._lock:
            return self._show_locked(message, stream)

    def log_raw(self, message: str) -> Status:
        """Store a string for the log file unchanged.

        Returns:
            ``Status.NO_LOG_FILE`` without a log file, the result of
            ``flush()`` if the queue was full, else ``Status.OK``

        """
        with self._lock:
            return self._log_locked(message)

    # ----- messages -----

    def report_message(
        self,
        file: str | None,
        line: int | None,
        function: str | None,
        message: str,
        options: FormattingOptions | None = None,
    ) -> Status:
        """Print a formatted message to stdout and store it for the file.

        Args:
            file: Name of the calling file
            line: Line number of the call
            function: Name of the calling function
            message: Message text
            options: Overrides the logger's formatting options

        Returns:
            ``Status.NO_LOG_FILE`` without a log file, else the result
            of storing the message

        """
        origin = Origin.of(file, line, function)
        with self._lock:
            self._show_locked(
                self._compose(origin, message, False, False, options),
                Stream.STDOUT,
            )
            return self._log_composed_locked(origin, message, False, options)

    def show_message(
        self,
        file: str | None,
        line: int | None,
        function: str | None,
        message: str,
        options: FormattingOptions | None = None,
    ) -> None:
        """Print a formatted message to stdout."""
        origin = Origin.of(file, line, function)
        with self._lock:
            self._show_locked(
                self._compose(origin, message, False, False, options),
                Stream.STDOUT,
            )

    def log_message(
        self,
        file: str | None,
        line: int | None,
        function: str | None,
        message: str,
        options: FormattingOptions | None = None,
    ) -> Status:
        """Store a formatted message for the log file."""
        origin = Origin.of(file, line, function)
        with self._lock:
            return self._log_composed_locked(origin, message, False, options)

    # ----- errors -----

    def report_error(
        self,
        file: str | None,
        line: int | None,
        function: str | None,
        message: str,
        options: FormattingOptions | None = None,
    ) -> Status:
        """Print a formatted error to stderr and store it for the file.

        Same as ``report_message`` but with an ERROR tag.
        """
        origin = Origin.of(file, line, function)
        with self._lock:
            self._show_locked(
                self._compose(origin, message, True, False, options),
                Stream.STDERR,
            )
            return self._log_composed_locked(origin, message, True, options)

    def show_error(
        self,
        file: str | None,
        line: int | None,
        function: str | None,
        message: str,
        options: FormattingOptions | None = None,
    ) -> None:
        """Print a formatted error to stderr."""
        origin = Origin.of(file, line, function)
        with self._lock:
            self._show_locked(
                self._compose(origin, message, True, False, options),
                Stream.STDERR,
            )

    def log_error(
        self,
        file: str | None,
        line: int | None,
        function: str | None,
        message: str,
        options: FormattingOptions | None = None,
    ) -> Status:
        """Store a formatted error for the log file."""
        origin = Origin.of(file, line, function)
        with self._lock:
            return self._log_composed_locked(origin, message, True, options)

    # ----- settings -----

    @property
    def max_queue_length(self) -> int:
        """Number of queued messages that triggers a flush.

        Changing it does not flush; the new limit is checked on the next
        stored message.
        """
        with self._lock:
            return self._max_queue_length

    @max_queue_length.setter
    def max_queue_length(self, length: int) -> None:
        with self._lock:
            self._max_queue_length = _check_queue_length(length)

    @property
    def options(self) -> FormattingOptions:
        """Formatting options used when a call does not pass its own."""
        with self._lock:
            return self._options

    @options.setter
    def options(self, options: FormattingOptions) -> None:
        with self._lock:
            self._options = options

    @property
    def pending(self) -> int:
        """Number of messages waiting for the next flush."""
        with self._lock:
            return len(self._queue)

    @staticmethod
    def make_log_name(
        name: str | None = None, now: datetime | None = None
    ) -> str:
        """Build a log file name of the form ``<name>_<date-time>.log``.

        The date-time part uses ``T`` between date and time and ``-``
        between time fields. The underscore is left out without a name.

        Args:
            name: Optional prefix
            now: Time used in the name, defaults to the current time

        Returns:
            The file name

        """
        stamp = make_date_time_string(now=now)
        stamp = stamp.replace(":", "-").replace("|", "T")
        if name:
            return f"{name}_{stamp}.log"
        return f"{stamp}.log"

    # ----- internals, caller holds the lock -----

    def _compose(
        self,
        origin: Origin,
        message: str,
        error: bool,  # noqa: FBT001
        to_file: bool,  # noqa: FBT001
        options: FormattingOptions | None,
    ) -> str:
        return compose_message(
            origin,
            message,
            error=error,
            to_file=to_file,
            options=options or self._options,
            width_probe=self._width_probe,
        )

    def _show_locked(self, text: str, stream: int) -> Status:
        try:
            target = Stream(stream)
        except ValueError:
            print(
                f"Logger.show_raw: Unknown stream: {stream}",
                file=sys.stderr,
                flush=True,
            )
            return Status.INVALID_USE
        print(text, file=target.resolve(), flush=True)
        return Status.OK

    def _log_composed_locked(
        self,
        origin: Origin,
        message: str,
        error: bool,  # noqa: FBT001
        options: FormattingOptions | None,
    ) -> Status:
        if not self._sink.configured:
            return Status.NO_LOG_FILE
        return self._log_locked(
            self._compose(origin, message, error, True, options)
        )

    def _log_locked(self, rendered: str) -> Status:
        if not self._sink.configured:
            return Status.NO_LOG_FILE
        if self._queue.push(rendered) >= self._max_queue_length:
            return self._flush_locked()
        return Status.OK

    def _prepare_locked(self, session_name: str | None = None) -> Status:
        if not self._sink.configured:
            return Status.NO_LOG_FILE
        try:
            self._sink.ensure_header(session_name)
        except SinkError as e:
            self._echo_failure(e)
            return Status.OP_FAILED
        return Status.OK

    def _flush_locked(self) -> Status:
        if not self._sink.configured:
            return Status.NO_LOG_FILE
        if not self._queue:
            return Status.OK

        # the queue is kept if the header fails, so nothing is lost yet
        status = self._prepare_locked()
        if status is not Status.OK:
            return status

        lines = self._queue.drain_all()
        try:
            self._sink.append_lines(lines)
        except SinkError as e:
            # drained messages are not re-queued
            self._echo_failure(e)
            logger.debug(
                "Dropped %d message(s) after failed write", len(lines)
            )
            return Status.OP_FAILED

        logger.debug(
            "Flushed %d message(s) to %s", len(lines), self._sink.path
        )
        return Status.OK

    @staticmethod
    def _echo_failure(error: SinkError) -> None:
        print(f"Logger: {error}", file=sys.stderr, flush=True)
        logger.debug("Log file operation failed: %s", error)
