"""
Roof geometry helpers.

Converts what callers actually have (tape measurements, satellite areas in
square meters, pitch in degrees) into the roof squares the estimator prices.
"""

import math

from .engine import ceil_units, round_half_up

SQ_FT_PER_SQ_METER = 10.7639
SQ_FT_PER_SQUARE = 100.0

# Pitch adds ~10% area per 12/12 of slope on the flat footprint
PITCH_AREA_FACTOR = 0.1

_COMPASS = (
    (22.5, "North"),
    (67.5, "Northeast"),
    (112.5, "East"),
    (157.5, "Southeast"),
    (202.5, "South"),
    (247.5, "Southwest"),
    (292.5, "West"),
    (337.5, "Northwest"),
)


def roof_area_from_dimensions(length_ft: float, width_ft: float, pitch: float = 0.0) -> int:
    """Footprint length x width with a pitch allowance, in whole sq ft."""
    multiplier = 1 + (pitch / 12.0) * PITCH_AREA_FACTOR
    return round_half_up(length_ft * width_ft * multiplier)


def squares_from_area(area_sq_ft: float) -> int:
    """Roofing squares, always rounded up."""
    return ceil_units(area_sq_ft / SQ_FT_PER_SQUARE)


def square_meters_to_square_feet(area_m2: float) -> float:
    return area_m2 * SQ_FT_PER_SQ_METER


def pitch_ratio_from_degrees(pitch_degrees: float) -> int:
    """Rise per 12" of run, e.g. 18.4 degrees -> 4 (a 4/12 roof)."""
    return round_half_up(math.tan(math.radians(pitch_degrees)) * 12)


def orientation_from_azimuth(azimuth_degrees: float) -> str:
    """8-point compass direction a roof plane faces."""
    azimuth = azimuth_degrees % 360
    if azimuth >= 337.5:
        return "North"
    for upper, name in _COMPASS:
        if azimuth < upper:
            return name
    return "Unknown"
