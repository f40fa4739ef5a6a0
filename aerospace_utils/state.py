"""Per-monitor workspace state.

The state file keeps, for every monitor name, the last applied percentage
(`current`), a sticky fallback (`default`) and a horizontal `shift`:

    [monitors.main]
    current = 60
    default = 60
    shift = 5

Two legacy layouts are still read and migrated to monitor "main" on the next
save: a bare integer, and a `[workspace]` table with `current`/`default`.
"""

from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING, Any

import tomli_w

from .constants import INITIAL_PERCENTAGE, MAIN_MONITOR
from .gaps import validate_percentage
from .logging_setup import get_logger
from .models import MonitorState, StateFileError, UnrecognizedStateFormat
from .utils import read_text, write_atomic

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

__all__ = ["WorkspaceState", "parse_state"]

_STATE_KEYS = ("current", "default", "shift")


def _parse_integer(table: dict[str, Any], key: str, path: Path) -> int | None:
    value = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnrecognizedStateFormat(path, f"'{key}' is not an integer")
    return value


def _parse_monitor(name: str, table: Any, path: Path) -> MonitorState:
    if not isinstance(table, dict):
        raise UnrecognizedStateFormat(path, f"monitor {name!r} is not a table")
    unknown = set(table) - set(_STATE_KEYS)
    if unknown:
        raise UnrecognizedStateFormat(path, f"unknown keys for monitor {name!r}: {', '.join(sorted(unknown))}")
    return MonitorState(**{key: _parse_integer(table, key, path) for key in _STATE_KEYS})


def parse_state(content: str, path: Path) -> tuple[dict[str, MonitorState], bool]:
    """Parse the state file content.

    Args:
        content: The raw file content
        path: The file path, for error messages

    Returns:
        The monitors mapping and whether a legacy layout was migrated

    Raises:
        UnrecognizedStateFormat: if the content matches no known layout
    """
    content = content.strip()
    if not content:
        return {}, False

    # Oldest layout: a single integer
    try:
        value = int(content)
    except ValueError:
        pass
    else:
        return {MAIN_MONITOR: MonitorState(current=value, default=value)}, True

    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise UnrecognizedStateFormat(path, str(e)) from e

    if "monitors" in data and set(data) == {"monitors"}:
        if not isinstance(data["monitors"], dict):
            raise UnrecognizedStateFormat(path, "'monitors' is not a table")
        return {name: _parse_monitor(name, table, path) for name, table in data["monitors"].items()}, False

    if "workspace" in data and set(data) == {"workspace"}:
        workspace = data["workspace"]
        if not isinstance(workspace, dict):
            raise UnrecognizedStateFormat(path, "'workspace' is not a table")
        legacy = MonitorState(
            current=_parse_integer(workspace, "current", path),
            default=_parse_integer(workspace, "default", path),
        )
        return {MAIN_MONITOR: legacy}, True

    raise UnrecognizedStateFormat(path, f"unexpected tables: {', '.join(sorted(data)) or '(none)'}")


class WorkspaceState:
    """Loads, queries and persists the per-monitor state file."""

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the state file (may not exist yet)
        """
        self.path = path
        self.log = get_logger("state")
        self.migrated = False
        self._monitors: dict[str, MonitorState] | None = None

    def exists(self) -> bool:
        """Return True if the state file exists."""
        return self.path.exists()

    async def load(self) -> None:
        """Load the state from disk, once.

        A missing or empty file is an empty state.

        Raises:
            UnrecognizedStateFormat: if the file layout is unknown
            StateFileError: if the file can't be read
        """
        if self._monitors is not None:
            return
        try:
            content = await read_text(self.path)
        except OSError as e:
            msg = f"failed to read state file {self.path}: {e}"
            raise StateFileError(msg) from e

        if content is None:
            self.log.debug("No state file at %s", self.path)
            self._monitors = {}
            return

        self._monitors, self.migrated = parse_state(content, self.path)
        if self.migrated:
            self.log.warning("Legacy state format found in %s, it will be migrated on next write", self.path)
        self.log.debug("Loaded state for %d monitor(s)", len(self._monitors))

    @property
    def monitors(self) -> Mapping[str, MonitorState]:
        """Return all monitor states."""
        assert self._monitors is not None, "state not loaded"
        return self._monitors

    def get_monitor_state(self, name: str) -> MonitorState:
        """Return the state of a monitor, creating an empty one if needed."""
        assert self._monitors is not None, "state not loaded"
        return self._monitors.setdefault(name, MonitorState())

    def resolve_percentage(self, monitor: str, explicit: int | None = None) -> int | None:
        """Return the percentage to apply to `monitor`.

        Priority: explicit > initial value (empty state) > current > default.

        The initial value only applies when the state holds no monitor at
        all: on an established installation an unknown monitor name gives
        None so the caller can report it.

        Args:
            monitor: The monitor name
            explicit: A percentage given by the user (returned unvalidated)

        Returns:
            The percentage, or None if nothing applies
        """
        if explicit is not None:
            return explicit
        if not self.monitors:
            return INITIAL_PERCENTAGE
        state = self.monitors.get(monitor)
        if state is None:
            return None
        if state.current is not None:
            return state.current
        return state.default

    def update_current(self, name: str, percentage: int, also_set_default: bool = False) -> None:
        """Record `percentage` as the current value of a monitor.

        The default is also set when requested, or when it was never set.

        Raises:
            InvalidPercentage: if the percentage is out of range
        """
        validate_percentage(percentage)
        state = self.get_monitor_state(name)
        state.current = percentage
        if also_set_default or state.default is None:
            state.default = percentage

    def get_shift(self, name: str) -> int:
        """Return the shift of a monitor (0 when unset)."""
        return self.get_monitor_state(name).shift or 0

    def set_shift(self, name: str, shift: int) -> None:
        """Set the shift of a monitor, 0 recenters it."""
        self.get_monitor_state(name).shift = shift or None

    def dumps(self) -> str:
        """Serialize the state to TOML."""
        monitors = {
            name: {key: value for key in _STATE_KEYS if (value := getattr(state, key)) is not None}
            for name, state in self.monitors.items()
            if not state.is_empty
        }
        return tomli_w.dumps({"monitors": monitors})

    async def save(self) -> None:
        """Write the state to disk atomically.

        Raises:
            StateFileError: if writing fails
        """
        try:
            await write_atomic(self.path, self.dumps())
        except OSError as e:
            msg = f"failed to write state file {self.path}: {e}"
            raise StateFileError(msg) from e
        self.migrated = False
        self.log.info("State written to %s", self.path)
