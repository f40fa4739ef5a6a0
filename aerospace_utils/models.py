"""Common types and errors."""

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import TypedDict


class DisplayInfo(TypedDict):
    """Display information as returned by the display adapters."""

    id: int
    name: str
    width: int
    height: int
    main: bool


@dataclass
class MonitorState:
    """Persisted per-monitor workspace state.

    Every field is optional, `None` meaning "unset".
    """

    current: int | None = None
    default: int | None = None
    shift: int | None = None

    @property
    def is_empty(self) -> bool:
        """Return True if no field is set."""
        return self.current is None and self.default is None and self.shift is None


@dataclass(frozen=True)
class ShiftedGaps:
    """Asymmetric gaps produced by a horizontal shift."""

    left_gap_pixels: int
    right_gap_pixels: int
    left_gap_percent: int
    right_gap_percent: int


@dataclass(frozen=True)
class MonitorGap:
    """A per-monitor gap value found in the AeroSpace config."""

    name: str
    value: int


@dataclass
class ConfigSummary:
    """Gap values extracted from the AeroSpace config."""

    inner_horizontal: int | None = None
    inner_vertical: int | None = None
    outer_top: int | None = None
    outer_bottom: int | None = None
    left_gaps: list[MonitorGap] = field(default_factory=list)
    right_gaps: list[MonitorGap] = field(default_factory=list)


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    ERROR = 1  # Command failed (validation, I/O, detection...)
    USAGE_ERROR = 2  # Invalid arguments (argparse)


class AerospaceUtilsError(Exception):
    """Base class for every error reported to the user."""


class InvalidPercentage(AerospaceUtilsError):
    """Percentage outside of the 1-100 range."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"percentage must be between 1 and 100 (got {value})")


class InvalidShift(AerospaceUtilsError):
    """Shift larger than the gap available on one side."""

    def __init__(self, shift: int, shift_pixels: int, gap: int) -> None:
        self.shift = shift
        self.shift_pixels = shift_pixels
        self.gap = gap
        super().__init__(
            f"shift of {shift}% ({shift_pixels}px) exceeds the available gap of {gap}px; "
            "use a smaller shift or decrease the workspace percentage first"
        )


class NoResolvablePercentage(AerospaceUtilsError):
    """No explicit percentage and nothing usable in the state."""

    def __init__(self, monitor: str) -> None:
        self.monitor = monitor
        super().__init__(
            f"no percentage specified and no current/default set for monitor {monitor!r}; "
            "run 'workspace use <percentage>' first"
        )


class NoCurrentPercentage(AerospaceUtilsError):
    """A relative change was requested but no current percentage is stored."""

    def __init__(self, monitor: str) -> None:
        self.monitor = monitor
        super().__init__(f"no current percentage set for monitor {monitor!r}; run 'workspace use' first")


class StateFileError(AerospaceUtilsError):
    """The state file could not be read or written."""


class UnrecognizedStateFormat(StateFileError):
    """The state file content matches no known layout."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"unrecognized state file format in {path}: {reason}")


class ConfigFileError(AerospaceUtilsError):
    """The AeroSpace config could not be read, parsed or written."""


class MonitorNotFoundInConfig(ConfigFileError):
    """The AeroSpace config has no per-monitor gap entry for the monitor."""

    def __init__(self, monitor: str) -> None:
        self.monitor = monitor
        super().__init__(f"monitor not found in config: {monitor}")


class InvalidMonitorWidth(AerospaceUtilsError):
    """Monitor width override is not positive."""

    def __init__(self, width: int) -> None:
        self.width = width
        super().__init__(f"monitor width must be positive (got {width})")


class DisplayDetectionError(AerospaceUtilsError):
    """Displays could not be detected."""


class MonitorNotFound(DisplayDetectionError):
    """No connected display matches the requested name."""

    def __init__(self, monitor: str, available: list[str]) -> None:
        self.monitor = monitor
        self.available = available
        super().__init__(f"monitor {monitor!r} not found; available: {', '.join(available)} (use --monitor-width to specify)")


class AerospaceNotFound(AerospaceUtilsError):
    """The aerospace binary is not in PATH."""


class ReloadError(AerospaceUtilsError):
    """`aerospace reload-config` failed."""
