"""
Configuration & Global Constants
================================
This module serves as the central registry for the constants that shape
the time axis, the playback cadence and the abstract map plane.

Why is this file needed?
------------------------
The year range and the tick cadence are read by the model, the
controller and the widgets. Keeping them here prevents the numbers from
drifting apart between layers.

Exports:
    MIN_YEAR, MAX_YEAR (int): Closed range of the timeline.
    DEFAULT_YEAR (int): Year shown when the view opens.
    TICK_INTERVAL_MS (int): Milliseconds of wall time per simulated year.
"""

# Time axis
MIN_YEAR: int = 1644
MAX_YEAR: int = 2024
DEFAULT_YEAR: int = 1746
YEAR_STEP: int = 1

# Playback
TICK_INTERVAL_MS: int = 50

# Abstract map plane (x right, y down)
VIEWBOX_WIDTH: float = 600.0
VIEWBOX_HEIGHT: float = 700.0

# Presentation thresholds
ACTIVE_THRESHOLD: float = 0.5
EDGE_ARC_LIFT: float = 50.0
PULSE_RING_SCALE: float = 20.0
HUB_RING_SCALE: float = 15.0
