"""Tests for value types shared by the formatter and the logger."""

import sys

import pytest

from spoollog.types import FormattingOptions, Origin, Stream


class TestFormattingOptions:
    """Test FormattingOptions defaults and validation."""

    def test_defaults(self):
        """Test the default option set."""
        options = FormattingOptions()
        assert options.colored
        assert options.log_date
        assert options.log_time
        assert options.wrap_tty
        assert options.wrap_file
        assert options.extra_indent
        assert options.indent == 0
        assert options.max_line_width_tty == 0
        assert options.max_line_width_file == 0

    @pytest.mark.parametrize(
        ("log_date", "log_time", "expected"),
        [(True, True, True), (True, False, True), (False, False, False)],
    )
    def test_insert_timestamp(self, log_date, log_time, expected):
        """Test the timestamp is present if either half is enabled."""
        options = FormattingOptions(log_date=log_date, log_time=log_time)
        assert options.insert_timestamp is expected

    @pytest.mark.parametrize(
        "field", ["indent", "max_line_width_tty", "max_line_width_file"]
    )
    @pytest.mark.parametrize("value", [-1, 65536])
    def test_out_of_range_rejected(self, field, value):
        """Test integer options must fit an unsigned 16-bit value."""
        with pytest.raises(ValueError, match=field):
            FormattingOptions(**{field: value})

    def test_upper_bound_accepted(self):
        """Test the largest allowed value."""
        assert FormattingOptions(indent=65535).indent == 65535

    def test_frozen(self):
        """Test options cannot be mutated in place."""
        options = FormattingOptions()
        with pytest.raises(AttributeError):
            options.indent = 3  # type: ignore[misc]


class TestOrigin:
    """Test Origin helpers."""

    def test_of_drops_empty_strings(self):
        """Test empty strings count as absent."""
        origin = Origin.of("", 5, "")
        assert origin == Origin(None, 5, None)
        assert origin.is_empty

    def test_not_empty_with_function(self):
        """Test a function alone makes the origin non-empty."""
        assert not Origin.of(None, None, "main").is_empty


def test_stream_resolves_at_call_time(monkeypatch):
    """Test stream selectors follow redirected sys streams."""
    fake = object()
    monkeypatch.setattr(sys, "stderr", fake)
    assert Stream.STDERR.resolve() is fake
    assert Stream.STDOUT.resolve() is sys.stdout
