"""aerospace-utils - size the AeroSpace workspace with per-monitor outer gaps.

The workspace width is expressed as a percentage of the monitor width; the
remaining space is split into left and right outer gaps, optionally shifted
to one side. Applied values are remembered per monitor in a small state file.
"""
