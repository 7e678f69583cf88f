"""Status values and exception classes for spoollog operations."""

from enum import Enum


class Status(Enum):
    """Outcome of a logger operation.

    OK: The operation succeeded.
    NO_LOG_FILE: The operation is valid but no log file is configured.
    OP_FAILED: A file operation failed; details went to stderr.
    INVALID_USE: Unknown stream selector or empty global registry.
    """

    OK = "ok"
    NO_LOG_FILE = "no_log_file"
    OP_FAILED = "op_failed"
    INVALID_USE = "invalid_use"


class SpoolLogError(Exception):
    """Base exception for spoollog operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the target that failed.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class SinkError(SpoolLogError):
    """Raised when the log file cannot be accessed."""

    error_prefix = "Log file operation failed"


class FileOpenError(SinkError):
    """Raised when the log file cannot be opened."""

    error_prefix = "Could not open log file"


class WriteError(SinkError):
    """Raised when writing to the log file fails."""

    error_prefix = "Error writing to log file"


class ConfigurationError(SpoolLogError):
    """Raised when a configuration file is missing or malformed."""

    error_prefix = "Invalid configuration"
