"""
Time Axis Helpers
=================
Validation and clamping of year values against the fixed timeline.

Query functions validate (a bad year is a caller bug); the playback
controller clamps (a scrubbed year is user input).
"""
from __future__ import annotations

import math
import numbers

from diffusionmap.config import MIN_YEAR, MAX_YEAR
from diffusionmap.model.errors import InvalidTime


def _as_int(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidTime(value, MIN_YEAR, MAX_YEAR)
    if not math.isfinite(value):
        raise InvalidTime(value, MIN_YEAR, MAX_YEAR)
    if int(value) != value:
        raise InvalidTime(value, MIN_YEAR, MAX_YEAR)
    return int(value)


def validate_year(value: object) -> int:
    """Return value as an int year, or raise InvalidTime if it is not on the timeline."""
    year = _as_int(value)
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidTime(value, MIN_YEAR, MAX_YEAR)
    return year


def clamp_year(value: object) -> int:
    """
    Clamp a year into [MIN_YEAR, MAX_YEAR].

    Fractional values are truncated towards the range before clamping;
    only non-numeric input raises.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidTime(value, MIN_YEAR, MAX_YEAR)
    if math.isnan(value):
        raise InvalidTime(value, MIN_YEAR, MAX_YEAR)
    if value <= MIN_YEAR:
        return MIN_YEAR
    if value >= MAX_YEAR:
        return MAX_YEAR
    return int(value)


def wrap_year(value: int) -> int:
    """Years past MAX_YEAR loop back to MIN_YEAR."""
    return MIN_YEAR if value > MAX_YEAR else value


def timeline_fraction(year: int) -> float:
    """Position of year along the timeline, 0.0 at MIN_YEAR and 1.0 at MAX_YEAR."""
    return (year - MIN_YEAR) / (MAX_YEAR - MIN_YEAR)
