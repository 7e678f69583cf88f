"""Tests for ANSI colour code generation."""

import io
from unittest.mock import patch

from spoollog.colors import (
    ERROR_PROPERTIES,
    FILE_PROPERTIES,
    LINE_PROPERTIES,
    RESET,
    Colour,
    Modifier,
    TextProperties,
    shell_colour_code,
    shell_colour_code_for,
)


class TestShellColourCode:
    """Test the pure escape sequence encoder."""

    def test_reset(self):
        """Test default properties encode a bare reset."""
        assert shell_colour_code(RESET) == "\033[0m"

    def test_predefined_properties(self):
        """Test the properties used by the formatter."""
        assert shell_colour_code(ERROR_PROPERTIES) == "\033[0;91m"
        assert shell_colour_code(FILE_PROPERTIES) == "\033[0;33m"
        assert shell_colour_code(LINE_PROPERTIES) == "\033[0;32m"

    def test_background(self):
        """Test background colours in both intensities."""
        props = TextProperties(background=Colour.BLUE)
        assert shell_colour_code(props) == "\033[0;44m"
        props = TextProperties(background=Colour.BLUE, high_intensity_bg=True)
        assert shell_colour_code(props) == "\033[0;104m"

    def test_modifiers_come_before_colours(self):
        """Test combined modifiers and colours."""
        props = TextProperties(
            Colour.CYAN, modifier=Modifier.BOLD | Modifier.UNDERLINE
        )
        assert shell_colour_code(props) == "\033[0;1;4;36m"


class TestShellColourCodeFor:
    """Test the stream-aware variant."""

    def test_empty_for_non_terminal(self):
        """Test no escape codes are produced for files and pipes."""
        assert shell_colour_code_for(ERROR_PROPERTIES, io.StringIO()) == ""

    def test_code_for_terminal(self):
        """Test an interactive stream gets the full sequence."""
        with patch("spoollog.colors.is_interactive", return_value=True):
            code = shell_colour_code_for(ERROR_PROPERTIES, io.StringIO())
        assert code == "\033[0;91m"
