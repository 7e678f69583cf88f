"""Thread-safe console logger with a buffered log file.

spoollog prints messages to stdout/stderr right away and mirrors them
into a log file through an in-memory queue:

- Formatted messages with origin tags (file, line, function)
- Line wrapping aligned to the message body
- ANSI colours on interactive terminals
- A session header at the start of every log file session
- A process-wide global logger with caller-aware helpers

Usage:
    >>> from spoollog import build_global_logger, rep_msg, delete_global_logger
    >>> build_global_logger("run.log", append=False)
    >>> rep_msg("starting up")
    >>> delete_global_logger()  # flushes the queue

Thread Safety:
    - All Logger methods are thread safe
    - build_global_logger()/delete_global_logger() are NOT; call them
      before starting worker threads
"""

from importlib.metadata import PackageNotFoundError, version

from spoollog.exceptions import (
    ConfigurationError,
    FileOpenError,
    SinkError,
    SpoolLogError,
    Status,
    WriteError,
)
from spoollog.formatter import compose_message
from spoollog.logger import Logger
from spoollog.registry import (
    build_global_logger,
    delete_global_logger,
    get_global_logger,
    rep_err,
    rep_msg,
    rep_raw,
)
from spoollog.types import FormattingOptions, Origin, Stream

try:
    __version__ = version("spoollog")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"

__all__ = [
    "ConfigurationError",
    "FileOpenError",
    "FormattingOptions",
    "Logger",
    "Origin",
    "SinkError",
    "SpoolLogError",
    "Status",
    "Stream",
    "WriteError",
    "build_global_logger",
    "compose_message",
    "delete_global_logger",
    "get_global_logger",
    "rep_err",
    "rep_msg",
    "rep_raw",
]
