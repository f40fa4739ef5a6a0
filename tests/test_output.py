"""Tests for colors, command output and logging setup."""

import logging
import os
from io import StringIO
from unittest.mock import patch

from aerospace_utils.ansi import RESET, Code, color_enabled, paint, sgr
from aerospace_utils.logging_setup import LevelColorFormatter, get_logger
from aerospace_utils.output import Printer


def test_paint():
    """Test paint with one, several and no codes."""
    assert paint("hello", Code.RED) == "\x1b[31mhello\x1b[0m"
    assert paint("hello", Code.RED, Code.BOLD) == "\x1b[31;1mhello\x1b[0m"
    assert paint("hello") == "hello"


def test_sgr():
    assert sgr(Code.YELLOW, Code.DIM) == "\x1b[33;2m"
    assert sgr() == ""
    assert RESET == "\x1b[0m"


def test_color_enabled_respects_no_color():
    """Test that NO_COLOR environment variable disables colors."""
    with patch.dict(os.environ, {"NO_COLOR": "1", "FORCE_COLOR": "1"}, clear=False):
        assert color_enabled(StringIO()) is False


def test_color_enabled_flag_wins():
    """Test that the --no-color flag wins over FORCE_COLOR."""
    with patch.dict(os.environ, {"FORCE_COLOR": "1", "NO_COLOR": ""}, clear=False):
        assert color_enabled(StringIO(), no_color=True) is False


def test_color_enabled_respects_force_color():
    """Test that FORCE_COLOR environment variable forces colors."""
    with patch.dict(os.environ, {"FORCE_COLOR": "1", "NO_COLOR": ""}, clear=False):
        assert color_enabled(StringIO()) is True


def test_color_enabled_non_tty():
    """Test that non-TTY streams don't get colors by default."""
    with patch.dict(os.environ, {"NO_COLOR": "", "FORCE_COLOR": ""}, clear=False):
        assert color_enabled(StringIO()) is False


class TestPrinter:
    """Command output."""

    def test_plain(self):
        out, err = StringIO(), StringIO()
        printer = Printer(no_color=True, stream=out, err_stream=err)
        printer.key_value("current", 50)
        printer.key_value("default", None, indent=4)
        printer.path_line("path", "/tmp/x.toml")
        printer.error("Error: boom")
        assert out.getvalue() == "  current: 50\n    default: (not set)\n  path: /tmp/x.toml\n"
        assert err.getvalue() == "Error: boom\n"

    def test_colored(self):
        out = StringIO()
        with patch.dict(os.environ, {"FORCE_COLOR": "1", "NO_COLOR": ""}, clear=False):
            printer = Printer(stream=out, err_stream=StringIO())
        printer.success("done")
        printer.dry_run("Would set")
        assert out.getvalue() == f"{paint('done', Code.GREEN)}\n{paint('[dry-run] ', Code.YELLOW)}Would set\n"


class TestLogging:
    """Logging setup."""

    def test_component_loggers_share_the_package_logger(self):
        assert get_logger("state").parent is get_logger()
        assert get_logger().name == "aerospace_utils"

    def test_level_colors(self):
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)
        assert LevelColorFormatter("%(message)s", colored=True).format(record) == paint("careful", Code.YELLOW, Code.DIM)
        assert LevelColorFormatter("%(message)s", colored=False).format(record) == "careful"

    def test_info_is_not_colored(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "fine", None, None)
        assert LevelColorFormatter("%(message)s", colored=True).format(record) == "fine"
