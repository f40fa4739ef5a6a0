"""Shared constants for aerospace-utils."""

import os
from pathlib import Path

__all__ = [
    "AEROSPACE_BINARY",
    "CONFIG_FILE",
    "DEFAULT_ADJUST_AMOUNT",
    "DEFAULT_SHIFT_AMOUNT",
    "INITIAL_PERCENTAGE",
    "MAIN_MONITOR",
    "MAX_PERCENTAGE",
    "MIN_PERCENTAGE",
    "STATE_FILE",
]

# Config file paths - use XDG_CONFIG_HOME with fallback to ~/.config
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "aerospace" / "aerospace.toml"
STATE_FILE = _xdg_config_home / "aerospace" / "aerospace-utils-state.toml"

AEROSPACE_BINARY = "aerospace"

# Sentinel monitor name for the primary display
MAIN_MONITOR = "main"

# Percentage bounds (inclusive)
MIN_PERCENTAGE = 1
MAX_PERCENTAGE = 100

# Applied when the state store is completely empty (first run)
INITIAL_PERCENTAGE = 60

# Command defaults
DEFAULT_ADJUST_AMOUNT = 5
DEFAULT_SHIFT_AMOUNT = 0
