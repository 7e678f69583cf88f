"""Tests for loading logger settings."""

from pathlib import Path

import pytest

from spoollog.config import (
    LoggerSettings,
    apply_env_overrides,
    build_logger,
    load_settings,
    settings_from_dict,
)
from spoollog.constants import ENV_LOG_FILE, ENV_NO_COLOR
from spoollog.exceptions import ConfigurationError
from spoollog.types import FormattingOptions


class TestSettingsFromDict:
    """Test conversion of config dictionaries."""

    def test_defaults(self):
        """Test an empty config gives default settings."""
        assert settings_from_dict({}) == LoggerSettings()

    def test_values(self):
        """Test every key is carried over."""
        settings = settings_from_dict(
            {
                "log_file": "logs/run.log",
                "append": False,
                "max_queue_length": 3,
                "session_name": "nightly",
                "output": {"indent": 2, "colored": False},
            }
        )
        assert settings.log_file == Path("logs/run.log")
        assert not settings.append
        assert settings.max_queue_length == 3
        assert settings.session_name == "nightly"
        assert settings.options == FormattingOptions(indent=2, colored=False)

    def test_home_directory_expanded(self, monkeypatch, tmp_path):
        """Test ~ in the log file path is expanded."""
        monkeypatch.setenv("HOME", str(tmp_path))
        settings = settings_from_dict({"log_file": "~/run.log"})
        assert settings.log_file == tmp_path / "run.log"


class TestEnvironmentOverrides:
    """Test SPOOLLOG_* environment variables."""

    def test_log_file_override(self, monkeypatch, tmp_path):
        """Test SPOOLLOG_LOG_FILE replaces the configured file."""
        monkeypatch.setenv(ENV_LOG_FILE, str(tmp_path / "env.log"))
        settings = apply_env_overrides(
            LoggerSettings(log_file=tmp_path / "file.log")
        )
        assert settings.log_file == tmp_path / "env.log"

    def test_no_color_override(self, monkeypatch):
        """Test SPOOLLOG_NO_COLOR turns colour off."""
        monkeypatch.setenv(ENV_NO_COLOR, "1")
        settings = apply_env_overrides(LoggerSettings())
        assert not settings.options.colored

    def test_empty_values_ignored(self, monkeypatch):
        """Test empty variables change nothing."""
        monkeypatch.setenv(ENV_LOG_FILE, "")
        monkeypatch.setenv(ENV_NO_COLOR, "")
        assert apply_env_overrides(LoggerSettings()) == LoggerSettings()


class TestLoadSettings:
    """Test reading configuration files."""

    def test_no_path(self):
        """Test defaults without a config file."""
        assert load_settings() == LoggerSettings()

    def test_valid_file(self, write_config):
        """Test a valid file is loaded."""
        path = write_config({"append": False, "max_queue_length": 5})
        settings = load_settings(path)
        assert not settings.append
        assert settings.max_queue_length == 5

    def test_env_wins_over_file(self, write_config, monkeypatch):
        """Test the environment is applied after the file."""
        monkeypatch.setenv(ENV_NO_COLOR, "yes")
        path = write_config({"output": {"colored": True}})
        assert not load_settings(path).options.colored

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ConfigurationError."""
        path = tmp_path / "missing.json"
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(path)
        assert exc_info.value.target == str(path)

    def test_invalid_json(self, tmp_path):
        """Test broken JSON raises ConfigurationError."""
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_settings(path)

    def test_schema_violation(self, write_config):
        """Test schema errors are reported with the file name."""
        path = write_config({"max_queue_length": "ten"})
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(path)
        assert str(path) in str(exc_info.value)


class TestBuildLogger:
    """Test logger construction from settings."""

    def test_builds_configured_logger(self, tmp_path):
        """Test the logger uses file, mode, queue length and options."""
        options = FormattingOptions(colored=False)
        log = build_logger(
            LoggerSettings(
                log_file=tmp_path / "a.log",
                append=False,
                max_queue_length=4,
                options=options,
            )
        )
        assert log.log_file == tmp_path / "a.log"
        assert log.max_queue_length == 4
        assert log.options == options
        assert not log.header_written

    def test_session_name_writes_header(self, tmp_path):
        """Test a named session writes its header immediately."""
        path = tmp_path / "a.log"
        log = build_logger(
            LoggerSettings(log_file=path, session_name="nightly")
        )
        assert log.header_written
        assert "     nightly" in path.read_text(encoding="utf-8")
