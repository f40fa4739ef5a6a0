"""ANSI terminal colors.

Colors are written only when the target stream is a terminal, unless
overridden by the `--no-color` flag or the NO_COLOR / FORCE_COLOR
environment variables.
"""

import os
import sys
from enum import StrEnum
from typing import TextIO

__all__ = ["RESET", "Code", "color_enabled", "paint", "sgr"]

CSI = "\x1b["
RESET = f"{CSI}0m"


class Code(StrEnum):
    """SGR parameters used by the program."""

    BOLD = "1"
    DIM = "2"
    RED = "31"
    GREEN = "32"
    YELLOW = "33"
    CYAN = "36"


def color_enabled(stream: TextIO | None = None, no_color: bool = False) -> bool:
    """Tell whether colors should be written to `stream` (stderr by default).

    Precedence: `no_color`, then NO_COLOR, then FORCE_COLOR, then TTY detection.
    """
    if no_color or os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    target = sys.stderr if stream is None else stream
    isatty = getattr(target, "isatty", None)
    return bool(isatty and isatty())


def sgr(*codes: str) -> str:
    """Return the escape sequence selecting `codes`, or "" for none."""
    return f"{CSI}{';'.join(codes)}m" if codes else ""


def paint(text: str, *codes: str) -> str:
    """Wrap `text` in the given codes, followed by a reset."""
    if not codes:
        return text
    return f"{sgr(*codes)}{text}{RESET}"
