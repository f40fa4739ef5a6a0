"""Display backend base class."""

import asyncio
import shutil
from abc import ABC, abstractmethod
from logging import Logger

from ..models import DisplayInfo

__all__ = ["DisplayBackend", "main_display", "make_display_info"]


def make_display_info(index: int, name: str, width: int, height: int = 0, main: bool = False) -> DisplayInfo:
    """Build a DisplayInfo for the display at `index` in detection order."""
    return DisplayInfo(id=index, name=name, width=width, height=height, main=main)


def main_display(displays: list[DisplayInfo]) -> DisplayInfo | None:
    """Return the main display, or the first one if none is flagged."""
    for display in displays:
        if display["main"]:
            return display
    return displays[0] if displays else None


def flag_first_as_main(displays: list[DisplayInfo]) -> list[DisplayInfo]:
    """Mark the first display as main when the tool reported none."""
    if displays and not any(d["main"] for d in displays):
        displays[0]["main"] = True
    return displays


class DisplayBackend(ABC):
    """Platform specific display detection, based on an external tool.

    Subclasses set `name` (the executable) and `arguments`, and parse the
    tool output in `parse`.
    """

    name = "generic"
    arguments: tuple[str, ...] = ()

    @classmethod
    async def is_available(cls) -> bool:
        """Return True if the tool is installed."""
        return shutil.which(cls.name) is not None

    @abstractmethod
    def parse(self, output: str, log: Logger) -> list[DisplayInfo]:
        """Extract the active displays from the tool output."""

    async def get_displays(self, *, log: Logger) -> list[DisplayInfo]:
        """Run the tool and return the active displays.

        Failures are logged and give an empty list.
        """
        log.debug("Running %s %s", self.name, " ".join(self.arguments))
        try:
            proc = await asyncio.create_subprocess_exec(
                self.name,
                *self.arguments,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            output, stderr = await proc.communicate()
        except OSError as e:
            log.warning("Can't run %s: %s", self.name, e)
            return []

        if proc.returncode != 0:
            log.error("%s exited with %s: %s", self.name, proc.returncode, stderr.decode(errors="replace").strip())
            return []
        return self.parse(output.decode(errors="replace"), log)
