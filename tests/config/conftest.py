"""Shared fixtures for config module tests.

This module provides common fixtures used across config tests:
- write_config: Writes a configuration dictionary as a JSON file
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import orjson
import pytest


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Return a helper that writes a config file and returns its path."""

    def _write(data: dict[str, Any]) -> Path:
        path = tmp_path / "spoollog.json"
        path.write_bytes(orjson.dumps(data))
        return path

    return _write
