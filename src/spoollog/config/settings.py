"""Loading logger settings from JSON files and the environment.

Settings are read from a JSON file (validated against the bundled schema)
and then overridden by environment variables:

    SPOOLLOG_LOG_FILE: Log file path, replaces ``log_file`` from the file
    SPOOLLOG_NO_COLOR: Any non-empty value turns colour output off

Example configuration::

    {
        "log_file": "~/logs/run.log",
        "append": false,
        "max_queue_length": 20,
        "session_name": "nightly",
        "output": {"indent": 2, "max_line_width_file": 120}
    }
"""

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import orjson

from spoollog.config.validator import ConfigValidator
from spoollog.constants import (
    DEFAULT_MAX_QUEUE_LENGTH,
    ENV_LOG_FILE,
    ENV_NO_COLOR,
)
from spoollog.exceptions import ConfigurationError
from spoollog.logger import Logger
from spoollog.types import FormattingOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoggerSettings:
    """Everything needed to construct a logger."""

    log_file: Path | None = None
    append: bool = True
    max_queue_length: int = DEFAULT_MAX_QUEUE_LENGTH
    session_name: str | None = None
    options: FormattingOptions = field(default_factory=FormattingOptions)


def settings_from_dict(data: dict[str, Any]) -> LoggerSettings:
    """Convert a validated configuration dictionary into settings.

    Args:
        data: Configuration matching the logger config schema

    Returns:
        Settings with defaults for missing keys

    """
    log_file = data.get("log_file")
    return LoggerSettings(
        log_file=Path(log_file).expanduser() if log_file else None,
        append=data.get("append", True),
        max_queue_length=data.get(
            "max_queue_length", DEFAULT_MAX_QUEUE_LENGTH
        ),
        session_name=data.get("session_name") or None,
        options=FormattingOptions(**data.get("output", {})),
    )


def apply_env_overrides(settings: LoggerSettings) -> LoggerSettings:
    """Apply ``SPOOLLOG_*`` environment variables on top of settings."""
    env_log_file = os.getenv(ENV_LOG_FILE)
    if env_log_file:
        settings = replace(settings, log_file=Path(env_log_file).expanduser())
    if os.getenv(ENV_NO_COLOR):
        settings = replace(
            settings, options=replace(settings.options, colored=False)
        )
    return settings


def load_settings(
    path: Path | None = None, validator: ConfigValidator | None = None
) -> LoggerSettings:
    """Load settings from a JSON file and the environment.

    Args:
        path: Configuration file, ``None`` for defaults only
        validator: Validator instance (created if not provided)

    Returns:
        Loaded settings

    Raises:
        ConfigurationError: If the file is missing, not valid JSON or
            does not match the schema

    """
    if path is None:
        return apply_env_overrides(LoggerSettings())

    try:
        data = orjson.loads(path.read_bytes())
    except OSError as e:
        raise ConfigurationError(e.strerror or str(e), target=str(path)) from e
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON: {e}"
        raise ConfigurationError(msg, target=str(path)) from e

    validator = validator or ConfigValidator()
    validator.validate(data, source=str(path))
    logger.debug("Loaded logger settings from %s", path)
    return apply_env_overrides(settings_from_dict(data))


def build_logger(settings: LoggerSettings) -> Logger:
    """Construct a logger from settings.

    If the settings name a session, the named header is written right
    away so the implicit header of the first flush does not replace it.
    """
    log = Logger(
        settings.log_file,
        settings.append,
        settings.options,
        settings.max_queue_length,
    )
    if settings.session_name and settings.log_file is not None:
        log.prepare_log_file(settings.session_name)
    return log
