"""X11 display detection with xrandr."""

import re
from logging import Logger

from ..models import DisplayInfo
from .backend import DisplayBackend, flag_first_as_main, make_display_info

# "<name> connected [primary] <width>x<height>+<x>+<y> ..."
CONNECTED_PATTERN = re.compile(r"^(?P<name>\S+)\s+connected(?P<primary>\s+primary)?\s+(?P<width>\d+)x(?P<height>\d+)\+\d+\+\d+")


class XorgBackend(DisplayBackend):
    """Reads `xrandr --query`."""

    name = "xrandr"
    arguments = ("--query",)

    def parse(self, output: str, log: Logger) -> list[DisplayInfo]:
        """Parse the xrandr output.

        Only connected outputs with an active mode are kept, e.g.:

            eDP-1 connected primary 1920x1200+0+0 (normal ...) 302mm x 189mm
            DP-3 connected 3440x1440+1920+0 (normal ...) 797mm x 333mm
            DP-4 connected (normal ...)
            HDMI-2 disconnected (normal ...)

        The `primary` output is the main display, or the first one if no
        output is flagged.
        """
        displays: list[DisplayInfo] = []
        for match in map(CONNECTED_PATTERN.match, output.splitlines()):
            if match is None:
                continue
            display = make_display_info(
                len(displays),
                match["name"],
                int(match["width"]),
                int(match["height"]),
                main=match["primary"] is not None,
            )
            log.debug("xrandr: %s", display)
            displays.append(display)
        return flag_first_as_main(displays)
