"""Data types used by the formatter and the logger.

These are plain value types without IO; the logger copies them freely
between threads.
"""

import sys
from dataclasses import dataclass, fields
from enum import IntEnum
from typing import TextIO

from spoollog.constants import MAX_FIELD_VALUE


class Stream(IntEnum):
    """Standard output streams, numbered like their file descriptors."""

    STDOUT = 1
    STDERR = 2

    def resolve(self) -> TextIO:
        """Return the current ``sys`` stream for this selector.

        Looked up on every call so redirected streams are honoured.
        """
        if self is Stream.STDERR:
            return sys.stderr
        return sys.stdout


@dataclass(frozen=True)
class FormattingOptions:
    """Options that control how messages are rendered.

    Attributes:
        colored: Use ANSI colour codes on interactive terminals.
        log_date: Prefix file messages with the date.
        log_time: Prefix file messages with the time.
        wrap_tty: Break long lines printed to the terminal.
        wrap_file: Break long lines written to the log file.
        indent: Number of spaces in front of every line.
        max_line_width_tty: Terminal line width, 0 to auto-detect.
        max_line_width_file: File line width, 0 to use the terminal value.
        extra_indent: Align continuation lines with the message body.

    """

    colored: bool = True
    log_date: bool = True
    log_time: bool = True
    wrap_tty: bool = True
    wrap_file: bool = True
    indent: int = 0
    max_line_width_tty: int = 0
    max_line_width_file: int = 0
    extra_indent: bool = True

    def __post_init__(self) -> None:
        """Reject widths that do not fit an unsigned 16-bit field."""
        for field in fields(self):
            if field.type is not int:
                continue
            value = getattr(self, field.name)
            if not 0 <= value <= MAX_FIELD_VALUE:
                msg = (
                    f"{field.name} must be between 0 and {MAX_FIELD_VALUE}, "
                    f"got {value}"
                )
                raise ValueError(msg)

    @property
    def insert_timestamp(self) -> bool:
        """Whether file messages carry a timestamp."""
        return self.log_date or self.log_time


@dataclass(frozen=True)
class Origin:
    """Where a message comes from; every field is optional."""

    file: str | None = None
    line: int | None = None
    function: str | None = None

    @classmethod
    def of(
        cls, file: str | None, line: int | None, function: str | None
    ) -> "Origin":
        """Build an origin, treating empty strings as absent."""
        return cls(file or None, line, function or None)

    @property
    def is_empty(self) -> bool:
        """True if neither file nor function is known."""
        return self.file is None and self.function is None
