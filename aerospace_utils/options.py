"""Options shared by every command."""

from dataclasses import dataclass, field
from pathlib import Path

from .constants import CONFIG_FILE, MAIN_MONITOR, STATE_FILE
from .utils import expand_path

__all__ = ["GlobalOptions"]


@dataclass
class GlobalOptions:
    """Global command line options."""

    config_path: Path = field(default_factory=lambda: CONFIG_FILE)
    state_path: Path = field(default_factory=lambda: STATE_FILE)
    monitor: str = MAIN_MONITOR
    monitor_width: int | None = None  # detected when unset
    no_reload: bool = False
    dry_run: bool = False
    verbose: bool = False
    no_color: bool = False

    @classmethod
    def from_args(
        cls,
        config_path: str | None = None,
        state_path: str | None = None,
        **kwargs: object,
    ) -> "GlobalOptions":
        """Build the options, expanding `~` and variables in explicit paths."""
        options = cls(**kwargs)  # type: ignore[arg-type]
        if config_path:
            options.config_path = expand_path(config_path)
        if state_path:
            options.state_path = expand_path(state_path)
        return options
