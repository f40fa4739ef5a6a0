"""Gap and shift arithmetic.

Converts a workspace-width percentage (and an optional horizontal shift) into
outer gap sizes in pixels. Everything here is pure: no I/O, no logging.
"""

import math

from .constants import MAX_PERCENTAGE, MIN_PERCENTAGE
from .models import InvalidPercentage, InvalidShift, ShiftedGaps

__all__ = [
    "calculate_gap_size",
    "calculate_shifted_gaps",
    "round_half_away",
    "shift_to_pixels",
    "validate_percentage",
    "validate_shift",
]


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero.

    The builtin `round` rounds ties to even, which would give 2 for 2.5.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def validate_percentage(percentage: int) -> None:
    """Ensure the percentage lies in the 1-100 range.

    Raises:
        InvalidPercentage: if it does not
    """
    if not MIN_PERCENTAGE <= percentage <= MAX_PERCENTAGE:
        raise InvalidPercentage(percentage)


def calculate_gap_size(monitor_width: int, percentage: int) -> int:
    """Compute the gap on each side so the workspace uses `percentage` of the width.

    Formula: gap = monitor_width * ((100 - percentage) / 100) / 2

    Args:
        monitor_width: Monitor width in pixels
        percentage: Workspace percentage, already validated

    Returns:
        The gap size in pixels
    """
    fraction = (100 - percentage) / 100
    return round_half_away(monitor_width * fraction / 2)


def shift_to_pixels(monitor_width: int, shift_percent: int) -> int:
    """Convert a signed shift in percentage points to pixels."""
    return round_half_away(monitor_width * shift_percent / 100)


def validate_shift(monitor_width: int, percentage: int, shift_percent: int) -> None:
    """Ensure a shift fits within the gap available at `percentage`.

    Raises:
        InvalidShift: if one side would become negative
    """
    base_gap = calculate_gap_size(monitor_width, percentage)
    shift_pixels = shift_to_pixels(monitor_width, abs(shift_percent))
    if shift_pixels > base_gap:
        raise InvalidShift(shift_percent, shift_pixels, base_gap)


def calculate_shifted_gaps(monitor_width: int, percentage: int, shift_percent: int) -> ShiftedGaps:
    """Compute left/right gaps for a workspace moved by `shift_percent`.

    A positive shift moves the workspace to the right: the left gap grows and
    the right gap shrinks by the same amount, keeping the workspace width.
    The shift must have been checked with `validate_shift` first.

    Args:
        monitor_width: Monitor width in pixels (> 0)
        percentage: Workspace percentage, already validated
        shift_percent: Signed shift in percentage points

    Returns:
        The gaps in pixels, with their rounded percentage of the width
    """
    base_gap = calculate_gap_size(monitor_width, percentage)
    shift_pixels = shift_to_pixels(monitor_width, shift_percent)
    left = base_gap + shift_pixels
    right = base_gap - shift_pixels
    return ShiftedGaps(
        left_gap_pixels=left,
        right_gap_pixels=right,
        left_gap_percent=round_half_away(left * 100 / monitor_width),
        right_gap_percent=round_half_away(right * 100 / monitor_width),
    )
