"""Terminal probing and timestamp helpers."""

import os
import shutil
from datetime import datetime
from typing import TextIO

from spoollog.constants import (
    DATE_FORMAT,
    DATE_TIME_SEPARATOR,
    FALLBACK_LINE_WIDTH,
    MAX_FIELD_VALUE,
    TIME_FORMAT,
)


def get_terminal_width() -> int:
    """Return the width of the controlling terminal in columns.

    Falls back to 80 columns if the size cannot be determined.
    """
    try:
        width = shutil.get_terminal_size(
            fallback=(FALLBACK_LINE_WIDTH, 24)
        ).columns
    except (AttributeError, ValueError, OSError):
        width = FALLBACK_LINE_WIDTH
    if width <= 0:
        return FALLBACK_LINE_WIDTH
    return min(width, MAX_FIELD_VALUE)


def is_interactive(stream: TextIO) -> bool:
    """Check whether ``stream`` is an interactive terminal.

    A stream counts as interactive if it reports ``isatty()`` and TERM is
    not ``dumb``.
    """
    try:
        is_tty = bool(getattr(stream, "isatty", lambda: False)())
    except (ValueError, OSError):
        # closed or detached stream
        is_tty = False
    return is_tty and os.environ.get("TERM", "") != "dumb"


def make_date_time_string(
    date: bool = True,  # noqa: FBT001, FBT002
    time: bool = True,  # noqa: FBT001, FBT002
    now: datetime | None = None,
) -> str:
    """Format the current local date and/or time.

    Only numeric fields are used so the result does not depend on the
    locale.

    Args:
        date: Include the date (``YYYY-MM-DD``)
        time: Include the time (``HH:MM:SS``)
        now: Point in time to format, defaults to the current time

    Returns:
        ``YYYY-MM-DD|HH:MM:SS``, one of its halves, or an empty string

    """
    now = now or datetime.now()
    parts = []
    if date:
        parts.append(now.strftime(DATE_FORMAT))
    if time:
        parts.append(now.strftime(TIME_FORMAT))
    return DATE_TIME_SEPARATOR.join(parts)
