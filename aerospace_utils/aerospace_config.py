"""AeroSpace configuration file access.

Only the per-monitor outer gaps are edited, e.g.:

    [gaps]
    outer.left = [{ monitor.main = 300 }, { monitor."Dell U2722D" = 200 }, 24]
    outer.right = [{ monitor.main = 300 }, { monitor."Dell U2722D" = 200 }, 24]

The document is patched with tomlkit so comments, ordering and every other
value survive the rewrite.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .logging_setup import get_logger
from .models import ConfigFileError, ConfigSummary, MonitorGap, MonitorNotFoundInConfig
from .utils import read_text, write_atomic

if TYPE_CHECKING:
    from pathlib import Path

    from tomlkit import TOMLDocument

__all__ = ["AerospaceConfig", "parse_summary"]

SIDES = ("left", "right")


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return int(value)


def _scalar_gap(value: Any) -> int | None:
    """Return a scalar gap, or the last scalar of a per-monitor array."""
    if isinstance(value, list):
        for item in reversed(value):
            scalar = _scalar_gap(item)
            if scalar is not None:
                return scalar
        return None
    return _as_int(value)


def _monitor_gaps(value: Any) -> list[MonitorGap]:
    if not isinstance(value, list):
        return []
    gaps = []
    for item in value:
        if not isinstance(item, Mapping):
            continue
        monitor = item.get("monitor")
        if not isinstance(monitor, Mapping):
            continue
        for name, gap in monitor.items():
            gap_value = _as_int(gap)
            if gap_value is not None:
                gaps.append(MonitorGap(name=name, value=gap_value))
    return gaps


def parse_summary(data: Mapping[str, Any]) -> ConfigSummary:
    """Extract the gap settings of a parsed config.

    Args:
        data: The parsed TOML document

    Returns:
        The summary; missing values are left unset
    """
    summary = ConfigSummary()
    gaps = data.get("gaps")
    if not isinstance(gaps, Mapping):
        return summary

    inner = gaps.get("inner")
    if isinstance(inner, Mapping):
        summary.inner_horizontal = _scalar_gap(inner.get("horizontal"))
        summary.inner_vertical = _scalar_gap(inner.get("vertical"))

    outer = gaps.get("outer")
    if isinstance(outer, Mapping):
        summary.outer_top = _scalar_gap(outer.get("top"))
        summary.outer_bottom = _scalar_gap(outer.get("bottom"))
        summary.left_gaps = _monitor_gaps(outer.get("left"))
        summary.right_gaps = _monitor_gaps(outer.get("right"))
    return summary


def _update_side(document: TOMLDocument, side: str, monitor_name: str, gap: int) -> bool:
    """Set `gap` on every `monitor_name` entry of gaps.outer.<side>."""
    gaps = document.get("gaps")
    if not isinstance(gaps, Mapping):
        return False
    outer = gaps.get("outer")
    if not isinstance(outer, Mapping):
        return False
    entries = outer.get(side)
    if not isinstance(entries, list):
        return False

    updated = False
    for item in entries:
        if not isinstance(item, Mapping):
            continue
        monitor = item.get("monitor")
        if not isinstance(monitor, Mapping) or monitor_name not in monitor:
            continue
        monitor[monitor_name] = gap
        updated = True
    return updated


class AerospaceConfig:
    """Reads and patches the AeroSpace configuration file."""

    def __init__(self, path: Path) -> None:
        """Initialize the service.

        Args:
            path: Location of aerospace.toml
        """
        self.path = path
        self.log = get_logger("aerospace_config")
        self._content: str | None = None
        self._document: TOMLDocument | None = None

    def exists(self) -> bool:
        """Return True if the config file exists."""
        return self.path.exists()

    async def load(self) -> TOMLDocument:
        """Load and parse the config, once.

        Raises:
            ConfigFileError: if the file is missing, unreadable or invalid
        """
        if self._document is not None:
            return self._document
        try:
            content = await read_text(self.path)
        except OSError as e:
            msg = f"failed to read config file {self.path}: {e}"
            raise ConfigFileError(msg) from e
        if content is None:
            msg = f"config file not found: {self.path}"
            raise ConfigFileError(msg)

        self.log.info("Loading %s", self.path)
        try:
            self._document = tomlkit.parse(content)
        except TOMLKitError as e:
            self.log.critical("Problem reading %s: %s", self.path, e)
            msg = f"failed to parse config file {self.path}: {e}"
            raise ConfigFileError(msg) from e
        self._content = content
        return self._document

    async def summary(self) -> ConfigSummary:
        """Return the gap settings found in the config."""
        await self.load()
        assert self._content is not None
        return parse_summary(tomllib.loads(self._content))

    async def monitor_names(self) -> list[str]:
        """Return the monitor names having a left or right outer gap, in order."""
        summary = await self.summary()
        names: dict[str, None] = {}
        for gap in summary.left_gaps + summary.right_gaps:
            names.setdefault(gap.name)
        return list(names)

    async def set_monitor_gaps(self, monitor_name: str, gap: int) -> None:
        """Set the same left and right gap for a monitor.

        Raises:
            MonitorNotFoundInConfig: if neither side has an entry for the monitor
        """
        document = await self.load()
        updated = [_update_side(document, side, monitor_name, gap) for side in SIDES]
        if not any(updated):
            raise MonitorNotFoundInConfig(monitor_name)
        self.log.debug("Gaps of %s set to %d", monitor_name, gap)

    async def set_monitor_asymmetric_gaps(self, monitor_name: str, left_gap: int, right_gap: int) -> None:
        """Set distinct left and right gaps for a monitor.

        Raises:
            MonitorNotFoundInConfig: unless both sides have an entry for the monitor
        """
        document = await self.load()
        left_updated = _update_side(document, "left", monitor_name, left_gap)
        right_updated = _update_side(document, "right", monitor_name, right_gap)
        if not (left_updated and right_updated):
            raise MonitorNotFoundInConfig(monitor_name)
        self.log.debug("Gaps of %s set to left=%d right=%d", monitor_name, left_gap, right_gap)

    async def write(self) -> None:
        """Write the patched config back atomically.

        Raises:
            ConfigFileError: if nothing was loaded or writing fails
        """
        if self._document is None:
            msg = "no config loaded"
            raise ConfigFileError(msg)
        content = tomlkit.dumps(self._document)
        try:
            await write_atomic(self.path, content)
        except OSError as e:
            msg = f"failed to write config file {self.path}: {e}"
            raise ConfigFileError(msg) from e
        self._content = content
        self.log.info("Config written to %s", self.path)
