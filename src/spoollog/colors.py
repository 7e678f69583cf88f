"""ANSI/VT100 colour codes for terminal output.

``shell_colour_code`` is a pure encoder from ``TextProperties`` to an
escape sequence. ``shell_colour_code_for`` additionally checks that the
target stream is an interactive terminal and returns an empty string
otherwise, so callers can emit its result unconditionally.
"""

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import TextIO

from spoollog.constants import (
    ANSI_BG_BASE,
    ANSI_BG_BRIGHT_BASE,
    ANSI_DEFAULT_OFFSET,
    ANSI_ESCAPE,
    ANSI_FG_BASE,
    ANSI_FG_BRIGHT_BASE,
    ANSI_RESET_CODE,
)
from spoollog.terminal import is_interactive


class Colour(IntEnum):
    """Terminal colours, valued like their SGR offsets."""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    PURPLE = 5
    CYAN = 6
    WHITE = 7
    DEFAULT = ANSI_DEFAULT_OFFSET


class Modifier(IntFlag):
    """Text modifiers, combinable with ``|``."""

    NORMAL = 0
    BOLD = 1 << 0
    DIM = 1 << 1
    SLANT = 1 << 2
    UNDERLINE = 1 << 3
    BLINK = 1 << 4
    INVERSE = 1 << 5
    HIDDEN = 1 << 6
    STRIKE_OUT = 1 << 7


# SGR parameter for each modifier bit
_MODIFIER_CODES: dict[Modifier, int] = {
    Modifier.BOLD: 1,
    Modifier.DIM: 2,
    Modifier.SLANT: 3,
    Modifier.UNDERLINE: 4,
    Modifier.BLINK: 5,
    Modifier.INVERSE: 7,
    Modifier.HIDDEN: 8,
    Modifier.STRIKE_OUT: 9,
}


@dataclass(frozen=True)
class TextProperties:
    """Colour and style of a piece of terminal text.

    The default instance encodes a plain reset and can be used to clear
    previously applied properties.
    """

    foreground: Colour = Colour.DEFAULT
    high_intensity_fg: bool = False
    background: Colour = Colour.DEFAULT
    high_intensity_bg: bool = False
    modifier: Modifier = Modifier.NORMAL


RESET = TextProperties()
ERROR_PROPERTIES = TextProperties(Colour.RED, high_intensity_fg=True)
FILE_PROPERTIES = TextProperties(Colour.YELLOW)
LINE_PROPERTIES = TextProperties(Colour.GREEN)


def shell_colour_code(props: TextProperties) -> str:
    r"""Create an ANSI escape sequence for text properties.

    Every sequence starts with a reset so properties never accumulate.

    Args:
        props: Properties to encode

    Returns:
        Escape sequence, e.g. ``"\033[0;91m"`` for bright red

    """
    codes = [ANSI_RESET_CODE]
    codes.extend(
        code
        for flag, code in _MODIFIER_CODES.items()
        if flag in props.modifier
    )
    if props.foreground is not Colour.DEFAULT:
        base = ANSI_FG_BRIGHT_BASE if props.high_intensity_fg else ANSI_FG_BASE
        codes.append(base + props.foreground)
    if props.background is not Colour.DEFAULT:
        base = ANSI_BG_BRIGHT_BASE if props.high_intensity_bg else ANSI_BG_BASE
        codes.append(base + props.background)
    return f"{ANSI_ESCAPE}{';'.join(str(code) for code in codes)}m"


def shell_colour_code_for(props: TextProperties, stream: TextIO) -> str:
    """Create an escape sequence only if ``stream`` is a terminal.

    Args:
        props: Properties to encode
        stream: Stream the sequence would be written to

    Returns:
        Escape sequence, or an empty string for non-interactive streams

    """
    if not is_interactive(stream):
        return ""
    return shell_colour_code(props)
