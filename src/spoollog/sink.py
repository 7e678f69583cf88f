"""Log file access: session headers and appending message lines.

The sink never keeps a file handle open between calls. Every operation
opens the file, writes and closes it again.

Session header layout::

    <blank line, only when appending>
    -----------------------------
         <session name, optional>
         2026-10-16|12:30:45
    -----------------------------

The rules are ``max(19, len(session name)) + 10`` dashes wide.
"""

import logging
import os
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import TextIO

from spoollog.constants import (
    HEADER_MIN_TEXT_WIDTH,
    HEADER_PADDING,
    HEADER_RULE_CHAR,
    HEADER_TEXT_INDENT,
    LINE_TERMINATOR,
)
from spoollog.exceptions import FileOpenError, WriteError
from spoollog.terminal import make_date_time_string

logger = logging.getLogger(__name__)

LogPath = str | os.PathLike[str]


def build_header(
    session_name: str | None = None,
    append: bool = True,  # noqa: FBT001, FBT002
    now: datetime | None = None,
) -> list[str]:
    """Build the lines of a session header.

    Args:
        session_name: Optional name shown in the header
        append: Start with a blank line to separate from older sessions
        now: Time shown in the header, defaults to the current time

    Returns:
        Header lines without line terminators

    """
    text_width = max(HEADER_MIN_TEXT_WIDTH, len(session_name or ""))
    width = text_width + HEADER_PADDING
    rule = HEADER_RULE_CHAR * width
    lines = [""] if append else []
    lines.append(rule)
    if session_name:
        lines.append(HEADER_TEXT_INDENT + session_name)
    lines.append(HEADER_TEXT_INDENT + make_date_time_string(now=now))
    lines.append(rule)
    return lines


class FileSink:
    """Owns the log file path, write mode and session header state.

    Attributes:
        path: Log file path, ``None`` if no file is configured
        append: Append to an existing file instead of truncating it
        header_written: Whether the current session has its header

    """

    def __init__(
        self,
        path: LogPath | None = None,
        append: bool = True,  # noqa: FBT001, FBT002
    ) -> None:
        """Initialize the sink.

        Args:
            path: Log file path, ``None`` or ``""`` for no file
            append: Append to an existing file instead of truncating it

        """
        self.path: Path | None = None
        self.append = append
        self.header_written = False
        self.retarget(path, append)

    @property
    def configured(self) -> bool:
        """Whether a log file is set."""
        return self.path is not None

    def retarget(
        self,
        path: LogPath | None,
        append: bool = True,  # noqa: FBT001, FBT002
    ) -> None:
        """Switch to another log file and start a new session.

        The previous file is left untouched.

        Args:
            path: New log file path, ``None`` or ``""`` for no file
            append: Append to an existing file instead of truncating it

        """
        self.path = Path(path) if path else None
        self.append = append
        self.header_written = False

    def ensure_header(
        self, session_name: str | None = None, now: datetime | None = None
    ) -> None:
        """Write the session header unless it has been written already.

        Opens the file in append or truncate mode depending on
        ``append``. ``header_written`` is only set once the header is
        completely written, so a failed attempt is retried on the next
        call.

        Args:
            session_name: Optional name shown in the header
            now: Time shown in the header, defaults to the current time

        Raises:
            FileOpenError: If the file cannot be opened
            WriteError: If writing the header fails

        """
        if self.header_written or self.path is None:
            return
        mode = "a" if self.append else "w"
        header = build_header(session_name, self.append, now)
        self._write_lines(self.path, header, mode)
        self.header_written = True
        logger.debug("Wrote session header to %s", self.path)

    def append_lines(self, lines: Iterable[str]) -> None:
        """Append lines to the log file.

        Lines already handed to the OS stay in the file if a later write
        fails.

        Args:
            lines: Lines without line terminators

        Raises:
            FileOpenError: If the file cannot be opened
            WriteError: If writing fails

        """
        if self.path is None:
            return
        self._write_lines(self.path, lines, "a")

    @staticmethod
    def _open(path: Path, mode: str) -> TextIO:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            return path.open(mode, encoding="utf-8")
        except OSError as e:
            raise FileOpenError(
                e.strerror or str(e), target=str(path)
            ) from e

    def _write_lines(
        self, path: Path, lines: Iterable[str], mode: str
    ) -> None:
        handle = self._open(path, mode)
        try:
            with handle:
                for line in lines:
                    handle.write(line + LINE_TERMINATOR)
        except OSError as e:
            raise WriteError(e.strerror or str(e), target=str(path)) from e
        except UnicodeError as e:
            # text that cannot be encoded, e.g. lone surrogates from stdin
            raise WriteError(str(e), target=str(path)) from e
