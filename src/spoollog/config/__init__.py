"""Configuration loading for spoollog.

Usage:
    from spoollog.config import build_logger, load_settings

    settings = load_settings(Path("spoollog.json"))
    log = build_logger(settings)
"""

from spoollog.config.settings import (
    LoggerSettings,
    apply_env_overrides,
    build_logger,
    load_settings,
    settings_from_dict,
)
from spoollog.config.validator import ConfigValidator

__all__ = [
    "ConfigValidator",
    "LoggerSettings",
    "apply_env_overrides",
    "build_logger",
    "load_settings",
    "settings_from_dict",
]
