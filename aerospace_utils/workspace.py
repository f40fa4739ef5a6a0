"""Workspace sizing commands.

Each `run_*` method implements one `workspace` sub-command:

- use: apply a percentage (explicit, or resolved from the state)
- adjust: change the current percentage by a relative amount
- shift: move the workspace left or right
- current: show the config gaps and the saved state
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .adapters import resolve_monitor_width
from .aerospace import AerospaceBinary
from .aerospace_config import AerospaceConfig
from .constants import DEFAULT_ADJUST_AMOUNT, DEFAULT_SHIFT_AMOUNT
from .gaps import calculate_gap_size, calculate_shifted_gaps, validate_percentage, validate_shift
from .logging_setup import get_logger
from .models import (
    AerospaceNotFound,
    AerospaceUtilsError,
    ConfigFileError,
    InvalidPercentage,
    InvalidShift,
    NoCurrentPercentage,
    NoResolvablePercentage,
    ReloadError,
    ShiftedGaps,
    StateFileError,
)
from .state import WorkspaceState

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .models import ConfigSummary, MonitorGap, MonitorState
    from .options import GlobalOptions
    from .output import Printer

__all__ = ["WorkspaceCommands", "describe_shift", "format_shifted_gaps"]


def format_shifted_gaps(gaps: ShiftedGaps) -> str:
    """Describe asymmetric gaps, e.g. "(left: 672px (35%), right: 288px (15%))"."""
    return (
        f"(left: {gaps.left_gap_pixels}px ({gaps.left_gap_percent}%), "
        f"right: {gaps.right_gap_pixels}px ({gaps.right_gap_percent}%))"
    )


def describe_shift(shift: int) -> str:
    """Describe a shift direction."""
    if shift == 0:
        return "centered"
    if shift > 0:
        return f"shifted {shift}% right"
    return f"shifted {-shift}% left"


class WorkspaceCommands:
    """Implements the workspace sub-commands."""

    def __init__(self, options: GlobalOptions, printer: Printer) -> None:
        self.options = options
        self.printer = printer
        self.log = get_logger("workspace")
        self.state = WorkspaceState(options.state_path)
        self.config = AerospaceConfig(options.config_path)

    @property
    def monitor(self) -> str:
        return self.options.monitor

    async def _monitor_width(self) -> int:
        width = await resolve_monitor_width(self.monitor, self.options.monitor_width, log=self.log)
        if self.options.verbose:
            self.printer.key_value("Monitor width", f"{width}px", indent=0)
        return width

    def _require_config(self) -> None:
        if not self.config.exists():
            msg = f"config file not found: {self.config.path}\nCreate it manually or run 'aerospace' to generate a default config"
            raise ConfigFileError(msg)

    def _print_paths(self) -> None:
        if self.options.verbose:
            self.printer.path_line("Config path", self.config.path, indent=0)
            self.printer.path_line("State path", self.state.path, indent=0)

    async def _reload(self) -> str:
        """Reload aerospace, returning a status suffix for the result line."""
        if self.options.no_reload:
            return " (reload skipped)"
        try:
            binary = AerospaceBinary.find()
        except AerospaceNotFound as e:
            self.log.warning("%s", e)
            return " (aerospace not found)"
        try:
            await binary.reload_config(log=self.log)
        except ReloadError as e:
            self.log.warning("%s", e)
            return f" (reload failed: {e})"
        return ""

    async def run_use(self, percentage: int | None = None, set_default: bool = False) -> None:
        """Set the workspace size as a percentage of the monitor width.

        Without a percentage, the current (or default) one of the monitor is
        used. A saved shift is kept when it still fits, otherwise it is reset.

        Raises:
            NoResolvablePercentage: if no percentage is given or saved
            InvalidPercentage: if the percentage is out of range
        """
        await self.state.load()
        resolved = self.state.resolve_percentage(self.monitor, percentage)
        if resolved is None:
            raise NoResolvablePercentage(self.monitor)
        validate_percentage(resolved)

        self._print_paths()
        width = await self._monitor_width()

        original_shift = self.state.get_shift(self.monitor)
        shift = original_shift
        shifted: ShiftedGaps | None = None
        if shift:
            try:
                validate_shift(width, resolved, shift)
            except InvalidShift:
                self.log.info("Shift of %d%% no longer fits at %d%%, recentering", shift, resolved)
                shift = 0
            else:
                shifted = calculate_shifted_gaps(width, resolved, shift)

        gap_size = 0
        if shifted is None:
            gap_size = calculate_gap_size(width, resolved)
            gap_msg = f"({gap_size}px gaps)"
        else:
            gap_msg = format_shifted_gaps(shifted)
        if shift != original_shift:
            gap_msg += " (shift reset)"

        if self.options.dry_run:
            self.printer.dry_run(f"Would set {self.monitor} to {resolved}% {gap_msg}")
            return

        self._require_config()
        if shifted is None:
            await self.config.set_monitor_gaps(self.monitor, gap_size)
        else:
            await self.config.set_monitor_asymmetric_gaps(self.monitor, shifted.left_gap_pixels, shifted.right_gap_pixels)
        await self.config.write()

        self.state.update_current(self.monitor, resolved, also_set_default=set_default)
        if shift != original_shift:
            self.state.set_shift(self.monitor, 0)
        await self.state.save()

        reload_status = await self._reload()
        default_suffix = ", set as default" if set_default else ""
        self.printer.success(f"Set {self.monitor} to {resolved}% {gap_msg}{default_suffix}{reload_status}")

    async def run_adjust(self, amount: int = DEFAULT_ADJUST_AMOUNT) -> None:
        """Change the workspace size percentage by a relative amount.

        Positive values grow the workspace (smaller gaps).

        Raises:
            NoCurrentPercentage: if no current percentage is saved
            InvalidPercentage: if the adjusted percentage is out of range
        """
        await self.state.load()
        saved = self.state.monitors.get(self.monitor)
        if saved is None or saved.current is None:
            raise NoCurrentPercentage(self.monitor)

        new_percentage = saved.current + amount
        try:
            validate_percentage(new_percentage)
        except InvalidPercentage as e:
            msg = f"adjusted percentage {new_percentage} is invalid: {e}"
            raise AerospaceUtilsError(msg) from e

        self.log.info("Adjusting %s from %d%% by %+d to %d%%", self.monitor, saved.current, amount, new_percentage)
        await self.run_use(new_percentage)

    async def run_shift(self, amount: int = DEFAULT_SHIFT_AMOUNT) -> None:
        """Shift the workspace left (negative) or right (positive).

        A zero amount recenters the workspace.

        Raises:
            NoCurrentPercentage: if no current percentage is saved
            InvalidShift: if the shift exceeds the available gap
        """
        await self.state.load()
        saved = self.state.monitors.get(self.monitor)
        if saved is None or saved.current is None:
            raise NoCurrentPercentage(self.monitor)
        percentage = saved.current
        validate_percentage(percentage)

        self._print_paths()
        width = await self._monitor_width()
        validate_shift(width, percentage, amount)
        shifted = calculate_shifted_gaps(width, percentage, amount)
        gap_msg = format_shifted_gaps(shifted)

        if self.options.dry_run:
            self.printer.dry_run(f"Would set {self.monitor} to {percentage}% {gap_msg}")
            return

        self._require_config()
        await self.config.set_monitor_asymmetric_gaps(self.monitor, shifted.left_gap_pixels, shifted.right_gap_pixels)
        await self.config.write()

        self.state.set_shift(self.monitor, amount)
        await self.state.save()

        reload_status = await self._reload()
        self.printer.success(f"Set {self.monitor} to {percentage}% {gap_msg} ({describe_shift(amount)}){reload_status}")

    async def run_current(self) -> None:
        """Show the gap configuration and the saved state.

        Read errors are reported inline so both sections are always shown.
        """
        self.printer.header("Config")
        self.printer.path_line("path", self.config.path)
        if self.config.exists():
            try:
                self._print_config_summary(await self.config.summary())
            except ConfigFileError as e:
                self.printer.error(f"  Error loading config: {e}")
        else:
            self.printer.print("  ", self.printer.unset("(file not found)"))

        self.printer.print()

        self.printer.header("State")
        self.printer.path_line("path", self.state.path)
        if self.state.exists():
            try:
                await self.state.load()
            except StateFileError as e:
                self.printer.error(f"  Error loading state: {e}")
            else:
                self._print_monitors(self.state.monitors)
        else:
            self.printer.print("  ", self.printer.unset("(file not found)"))

    def _print_monitor_gaps(self, title: str, gaps: list[MonitorGap]) -> None:
        if not gaps:
            return
        self.printer.print("  ", self.printer.label(title))
        for gap in gaps:
            self.printer.print("    ", self.printer.label(f"{gap.name}: "), self.printer.value(gap.value))

    def _print_config_summary(self, summary: ConfigSummary) -> None:
        self.printer.print("  ", self.printer.label("Inner gaps:"))
        self.printer.key_value("horizontal", summary.inner_horizontal, indent=4)
        self.printer.key_value("vertical", summary.inner_vertical, indent=4)
        self.printer.print("  ", self.printer.label("Outer gaps:"))
        self.printer.key_value("top", summary.outer_top, indent=4)
        self.printer.key_value("bottom", summary.outer_bottom, indent=4)
        self._print_monitor_gaps("Left (per-monitor):", summary.left_gaps)
        self._print_monitor_gaps("Right (per-monitor):", summary.right_gaps)

    def _print_monitors(self, monitors: Mapping[str, MonitorState]) -> None:
        if not monitors:
            self.printer.print("  ", self.printer.unset("(no monitors configured)"))
            return
        for name, state in sorted(monitors.items()):
            self.printer.print("  ", self.printer.label(f"{name}:"))
            self.printer.key_value("current", state.current, indent=4)
            self.printer.key_value("default", state.default, indent=4)
            self.printer.key_value("shift", state.shift or 0, indent=4)
