"""Message rendering for terminal and file output.

``compose_message`` turns raw text plus origin metadata into the exact
string that is printed or queued. A rendered message looks like::

    (2026-10-16|12:30:45)  ERROR  [main.py | 42 | run()]: text that is too
                                                          long is wrapped

The parts in front of the text (indent, timestamp, error tag, origin tag)
form the prefix. Continuation lines are indented by the visible width of
the prefix so the text stays aligned, unless extra indentation is turned
off. The timestamp only appears in file output and colour codes only in
terminal output.
"""

from collections.abc import Callable
from datetime import datetime
from typing import TextIO

from spoollog.colors import (
    ERROR_PROPERTIES,
    FILE_PROPERTIES,
    LINE_PROPERTIES,
    RESET,
    TextProperties,
    shell_colour_code_for,
)
from spoollog.constants import (
    ERROR_TAG,
    FALLBACK_LINE_WIDTH,
    LINE_TERMINATOR,
    TAG_CLOSE,
    TAG_SEPARATOR,
)
from spoollog.terminal import get_terminal_width, make_date_time_string
from spoollog.types import FormattingOptions, Origin, Stream

WidthProbe = Callable[[], int]


class _PrefixBuilder:
    """Collect prefix parts while tracking their visible width.

    Escape sequences do not occupy columns, so they are excluded from
    ``visible_width``.
    """

    def __init__(self, colour_stream: TextIO | None) -> None:
        self._colour_stream = colour_stream
        self._parts: list[str] = []
        self.visible_width = 0

    def add(self, text: str) -> None:
        self._parts.append(text)
        self.visible_width += len(text)

    def add_painted(self, text: str, props: TextProperties) -> None:
        if self._colour_stream is None:
            self.add(text)
            return
        self._parts.append(shell_colour_code_for(props, self._colour_stream))
        self.add(text)
        self._parts.append(shell_colour_code_for(RESET, self._colour_stream))

    def build(self) -> str:
        return "".join(self._parts)


def resolve_max_line_width(
    options: FormattingOptions,
    to_file: bool,  # noqa: FBT001
    width_probe: WidthProbe = get_terminal_width,
) -> int:
    """Determine the maximum line width for a destination.

    Args:
        options: Formatting options
        to_file: Whether the message is destined for the log file
        width_probe: Returns the terminal width; only called when the
            configured width is 0

    Returns:
        Width in columns, including the indent

    """
    if to_file and options.wrap_file:
        return (
            options.max_line_width_file
            or options.max_line_width_tty
            or width_probe()
        )
    if not to_file and options.wrap_tty:
        return options.max_line_width_tty or width_probe()
    return FALLBACK_LINE_WIDTH


def clamp_extra_indent(extra_width: int, available: int) -> int:
    """Limit the alignment indent so continuation lines keep some room.

    If the prefix takes more than two thirds of the available width, the
    continuation lines are indented by one third instead.
    """
    if extra_width > available * 2 // 3:
        return available // 3
    return extra_width


def split_fixed(text: str, width: int) -> list[str]:
    """Split ``text`` into chunks of at most ``width`` characters.

    Returns an empty list for empty text. ``width`` is raised to 1 so every
    chunk consumes at least one character.
    """
    width = max(width, 1)
    return [
        text[start : start + width] for start in range(0, len(text), width)
    ]


def _build_prefix(
    origin: Origin,
    error: bool,  # noqa: FBT001
    to_file: bool,  # noqa: FBT001
    options: FormattingOptions,
    now: datetime | None,
) -> _PrefixBuilder:
    stream = Stream.STDERR if error else Stream.STDOUT
    colour_stream = (
        stream.resolve() if options.colored and not to_file else None
    )
    prefix = _PrefixBuilder(colour_stream)

    if options.indent:
        prefix.add(" " * options.indent)

    if to_file and options.insert_timestamp:
        stamp = make_date_time_string(options.log_date, options.log_time, now)
        prefix.add(f"({stamp}) ")

    if error:
        prefix.add_painted(ERROR_TAG, ERROR_PROPERTIES)

    if origin.is_empty:
        return prefix

    prefix.add("[")
    if origin.file is not None:
        prefix.add_painted(origin.file, FILE_PROPERTIES)
        if origin.line is not None:
            prefix.add(TAG_SEPARATOR)
            prefix.add_painted(str(origin.line), LINE_PROPERTIES)
        prefix.add(TAG_SEPARATOR if origin.function is not None else TAG_CLOSE)
    if origin.function is not None:
        prefix.add(f"{origin.function}(){TAG_CLOSE}")

    return prefix


def compose_message(
    origin: Origin | None,
    message: str,
    *,
    error: bool = False,
    to_file: bool = False,
    options: FormattingOptions | None = None,
    width_probe: WidthProbe = get_terminal_width,
    now: datetime | None = None,
) -> str:
    """Render a message for the terminal or the log file.

    Args:
        origin: Where the message comes from, ``None`` for no origin tag
        message: Raw text, may contain newlines
        error: Mark as error (adds the ERROR tag, targets stderr)
        to_file: Render for the log file (timestamp, no colour)
        options: Formatting options, defaults to ``FormattingOptions()``
        width_probe: Terminal width probe used when a width is set to 0
        now: Time used for the timestamp, defaults to the current time

    Returns:
        The rendered message, physical lines separated by ``"\\n"``

    """
    origin = origin or Origin()
    options = options or FormattingOptions()

    max_width = resolve_max_line_width(options, to_file, width_probe)
    # width left after the plain indent; never below one column
    available = max(max_width - options.indent, 1)

    prefix = _build_prefix(origin, error, to_file, options, now)
    extra_width = clamp_extra_indent(
        prefix.visible_width - options.indent, available
    )
    continuation = " " * options.indent
    if options.extra_indent:
        continuation += " " * extra_width

    logical_lines = message.split(LINE_TERMINATOR)
    wrap = options.wrap_file if to_file else options.wrap_tty

    if wrap:
        first_width = max(available - extra_width, 1)
        rest_width = first_width if options.extra_indent else available
        physical = [logical_lines[0][:first_width]]
        chunks = split_fixed(logical_lines[0][first_width:], rest_width)
        physical.extend(continuation + chunk for chunk in chunks)
        for line in logical_lines[1:]:
            chunks = split_fixed(line, rest_width)
            physical.extend(continuation + chunk for chunk in chunks)
            if not chunks:
                # empty lines stay empty, without trailing indentation
                physical.append("")
    else:
        physical = [logical_lines[0]]
        physical.extend(
            continuation + line if line else ""
            for line in logical_lines[1:]
        )

    return prefix.build() + LINE_TERMINATOR.join(physical)
