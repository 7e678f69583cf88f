"""Constants shared across spoollog modules.

Defaults for queue sizing and output geometry, the session header layout,
and the ANSI escape parameters used by the colour encoder.
"""

from typing import Final

# Queue
DEFAULT_MAX_QUEUE_LENGTH: Final[int] = 10

# Output geometry
FALLBACK_LINE_WIDTH: Final[int] = 80
MAX_FIELD_VALUE: Final[int] = 0xFFFF  # options are unsigned 16-bit values
LINE_TERMINATOR: Final[str] = "\n"

# Session header
HEADER_MIN_TEXT_WIDTH: Final[int] = 19  # len("YYYY-MM-DD|HH:MM:SS")
HEADER_PADDING: Final[int] = 10
HEADER_TEXT_INDENT: Final[str] = " " * 5
HEADER_RULE_CHAR: Final[str] = "-"

# Message tags
ERROR_TAG: Final[str] = " ERROR  "
TAG_SEPARATOR: Final[str] = " | "
TAG_CLOSE: Final[str] = "]: "

# Timestamps
DATE_FORMAT: Final[str] = "%Y-%m-%d"
TIME_FORMAT: Final[str] = "%H:%M:%S"
DATE_TIME_SEPARATOR: Final[str] = "|"

# ANSI / VT100 SGR parameters
ANSI_ESCAPE: Final[str] = "\033["
ANSI_RESET_CODE: Final[int] = 0
ANSI_FG_BASE: Final[int] = 30
ANSI_FG_BRIGHT_BASE: Final[int] = 90
ANSI_BG_BASE: Final[int] = 40
ANSI_BG_BRIGHT_BASE: Final[int] = 100
ANSI_DEFAULT_OFFSET: Final[int] = 9

# Environment overrides
ENV_LOG_FILE: Final[str] = "SPOOLLOG_LOG_FILE"
ENV_NO_COLOR: Final[str] = "SPOOLLOG_NO_COLOR"
