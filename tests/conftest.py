"""Pytest configuration and fixtures for spoollog tests."""

from datetime import datetime

import pytest

from spoollog import registry
from spoollog.constants import ENV_LOG_FILE, ENV_NO_COLOR
from spoollog.logger import Logger
from spoollog.types import FormattingOptions

WIDE_TERMINAL = 200


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch):
    """Remove spoollog environment overrides for every test."""
    monkeypatch.delenv(ENV_LOG_FILE, raising=False)
    monkeypatch.delenv(ENV_NO_COLOR, raising=False)


@pytest.fixture(autouse=True)
def reset_global_logger():
    """Make sure no test leaks a global logger into the next one."""
    yield
    if registry.get_global_logger() is not None:
        registry.delete_global_logger()


@pytest.fixture
def fixed_now() -> datetime:
    """Return a fixed point in time for timestamps."""
    return datetime(2026, 10, 16, 12, 30, 45)


@pytest.fixture
def plain_options() -> FormattingOptions:
    """Options without colour and wrapping, for exact string checks."""
    return FormattingOptions(colored=False, wrap_tty=False, wrap_file=False)


@pytest.fixture
def log(tmp_path) -> Logger:
    """Create a logger writing to a fresh file in tmp_path."""
    return Logger(
        tmp_path / "run.log",
        append=False,
        options=FormattingOptions(colored=False),
        width_probe=lambda: WIDE_TERMINAL,
    )
