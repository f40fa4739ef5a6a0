"""Display detection adapters.

Selects a platform backend (system_profiler on macOS, xrandr elsewhere) and
resolves the width of the monitor a command applies to.
"""

import sys
from logging import Logger

from ..constants import MAIN_MONITOR
from ..models import DisplayDetectionError, InvalidMonitorWidth, MonitorNotFound
from .backend import DisplayBackend, main_display
from .macos import MacOSBackend
from .xorg import XorgBackend

__all__ = ["DisplayBackend", "MacOSBackend", "XorgBackend", "get_backend_class", "resolve_monitor_width"]


def get_backend_class(platform: str = sys.platform) -> type[DisplayBackend]:
    """Return the display backend class for the platform."""
    if platform == "darwin":
        return MacOSBackend
    return XorgBackend


async def resolve_monitor_width(
    monitor: str,
    width_override: int | None,
    *,
    log: Logger,
    backend_class: type[DisplayBackend] | None = None,
) -> int:
    """Return the width, in pixels, of the target monitor.

    An explicit override always wins. Otherwise the displays are detected:
    "main" selects the primary display, any other name is matched case
    insensitively.

    Args:
        monitor: The monitor name, or "main"
        width_override: Width given on the command line
        log: Logger to use for this operation
        backend_class: Force a backend (autodetected if unset)

    Returns:
        The monitor width

    Raises:
        InvalidMonitorWidth: if the override is not positive
        DisplayDetectionError: if detection is unavailable or finds nothing
        MonitorNotFound: if no display has the requested name
    """
    if width_override is not None:
        if width_override <= 0:
            raise InvalidMonitorWidth(width_override)
        return width_override

    backend_class = backend_class or get_backend_class()
    if not await backend_class.is_available():
        msg = "display detection not available; use --monitor-width"
        raise DisplayDetectionError(msg)

    displays = await backend_class().get_displays(log=log)
    if not displays:
        msg = f"no displays found via {backend_class.name}; use --monitor-width"
        raise DisplayDetectionError(msg)

    if monitor == MAIN_MONITOR:
        display = main_display(displays)
        assert display is not None
        log.debug("Main display is %s (%dpx)", display["name"], display["width"])
        return display["width"]

    wanted = monitor.casefold()
    for display in displays:
        if display["name"].casefold() == wanted:
            return display["width"]

    raise MonitorNotFound(monitor, [d["name"] for d in displays])
