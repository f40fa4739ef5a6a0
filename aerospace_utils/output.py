"""Colored terminal output for command results.

Results go to stdout, warnings and errors to stderr. Logging is separate and
only reports what happens internally.
"""

import sys
from typing import Any, TextIO

from .ansi import Code, color_enabled, paint

__all__ = ["Printer"]

LABEL = (Code.CYAN,)
VALUE = (Code.GREEN,)
PATH = (Code.DIM,)
UNSET = (Code.YELLOW,)
SUCCESS = (Code.GREEN,)
WARNING = (Code.YELLOW,)
ERROR = (Code.RED,)


class Printer:
    """Prints command results, colored when the terminal allows it."""

    def __init__(self, no_color: bool = False, stream: TextIO | None = None, err_stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdout
        self.err_stream = err_stream or sys.stderr
        self.use_colors = color_enabled(self.stream, no_color=no_color)

    def style(self, text: Any, codes: tuple[str, ...]) -> str:
        """Return `text` with the given style, if colors are enabled."""
        text = str(text)
        return paint(text, *codes) if self.use_colors else text

    def print(self, *parts: str, end: str = "\n") -> None:
        """Print already formatted parts."""
        print(*parts, sep="", end=end, file=self.stream)

    def label(self, text: Any) -> str:
        return self.style(text, LABEL)

    def value(self, text: Any) -> str:
        return self.style(text, VALUE)

    def path(self, text: Any) -> str:
        return self.style(text, PATH)

    def unset(self, text: Any = "(not set)") -> str:
        return self.style(text, UNSET)

    def success(self, message: str) -> None:
        self.print(self.style(message, SUCCESS))

    def error(self, message: str) -> None:
        print(self.style(message, ERROR), file=self.err_stream)

    def dry_run(self, message: str) -> None:
        """Print what would be done."""
        self.print(self.style("[dry-run] ", WARNING), message)

    def header(self, title: str) -> None:
        self.print(self.style(title, (Code.BOLD, *LABEL)))

    def key_value(self, key: str, value: Any, indent: int = 2) -> None:
        """Print `key: value`, showing unset values distinctly."""
        shown = self.unset() if value is None else self.value(value)
        self.print(" " * indent, self.label(f"{key}: "), shown)

    def path_line(self, label: str, path: Any, indent: int = 2) -> None:
        self.print(" " * indent, self.label(f"{label}: "), self.path(path))
