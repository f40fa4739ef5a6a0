"""Logging configuration.

Modules log through children of the `aerospace_utils` logger. Records go to
stderr, colored by level on a terminal, and to a file when `--debug FILE` is
given. Debug mode is also enabled by the DEBUG environment variable.
"""

import logging
import os

from .ansi import RESET, Code, color_enabled, sgr

__all__ = ["ROOT_LOGGER", "LevelColorFormatter", "get_logger", "init_logger", "is_debug"]

ROOT_LOGGER = "aerospace_utils"

SCREEN_FORMAT = r"%(message)s"
DEBUG_SCREEN_FORMAT = r"%(name)28s - %(message)s // %(filename)s:%(lineno)d"
FILE_FORMAT = r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"

LEVEL_COLORS: dict[int, tuple[str, ...]] = {
    logging.WARNING: (Code.YELLOW, Code.DIM),
    logging.ERROR: (Code.RED, Code.DIM),
    logging.CRITICAL: (Code.RED, Code.BOLD),
}


class _Settings:
    debug = bool(os.environ.get("DEBUG"))


def is_debug() -> bool:
    """Return True in debug mode."""
    return _Settings.debug


class LevelColorFormatter(logging.Formatter):
    """Formatter coloring warnings and errors."""

    def __init__(self, fmt: str, colored: bool) -> None:
        super().__init__(fmt)
        self.colored = colored

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        codes = LEVEL_COLORS.get(record.levelno)
        if self.colored and codes:
            return f"{sgr(*codes)}{text}{RESET}"
        return text


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Configure the package logger, replacing any previous setup.

    Args:
        filename: Also log everything to this file
        force_debug: Enable debug mode
    """
    if force_debug:
        _Settings.debug = True

    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.DEBUG if is_debug() else logging.WARNING)
    root.propagate = False

    screen = logging.StreamHandler()
    screen.setFormatter(LevelColorFormatter(DEBUG_SCREEN_FORMAT if is_debug() else SCREEN_FORMAT, colored=color_enabled()))
    root.addHandler(screen)

    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root.addHandler(file_handler)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the logger for a component (the package logger if `name` is unset)."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)
