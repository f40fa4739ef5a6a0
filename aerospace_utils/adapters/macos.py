"""macOS display detection with system_profiler."""

import json
import re
from logging import Logger

from ..models import DisplayInfo
from .backend import DisplayBackend, flag_first_as_main, make_display_info

RESOLUTION_PATTERN = re.compile(r"(\d+)\s*x\s*(\d+)")

# Looked up in order: the UI resolution (points) matches what AeroSpace uses
RESOLUTION_KEYS = ("_spdisplays_resolution", "spdisplays_resolution", "_spdisplays_pixels")


class MacOSBackend(DisplayBackend):
    """Reads `system_profiler SPDisplaysDataType -json`."""

    name = "system_profiler"
    arguments = ("SPDisplaysDataType", "-json")

    def parse(self, output: str, log: Logger) -> list[DisplayInfo]:
        """Parse the JSON report.

        Example (trimmed):
            {"SPDisplaysDataType": [{"_name": "Apple M1 Pro", "spdisplays_ndrvs": [
                {"_name": "Color LCD", "_spdisplays_resolution": "1512 x 982 @ 120.00Hz",
                 "spdisplays_main": "spdisplays_yes"},
                {"_name": "DELL U2722D", "_spdisplays_resolution": "2560 x 1440 @ 60.00Hz"}]}]}
        """
        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            log.error("Invalid system_profiler output: %s", e)
            return []

        displays: list[DisplayInfo] = []
        for gpu in data.get("SPDisplaysDataType", []):
            for screen in gpu.get("spdisplays_ndrvs", []):
                resolution = next((screen[key] for key in RESOLUTION_KEYS if key in screen), "")
                match = RESOLUTION_PATTERN.search(resolution)
                if not match:
                    log.debug("Skipping display without resolution: %s", screen.get("_name"))
                    continue
                display = make_display_info(
                    len(displays),
                    screen.get("_name", "Unknown"),
                    int(match.group(1)),
                    int(match.group(2)),
                    main=screen.get("spdisplays_main") == "spdisplays_yes",
                )
                log.debug("system_profiler: %s", display)
                displays.append(display)
        return flag_first_as_main(displays)
