"""
Geometry helper tests: tape measurements and satellite data to roof squares.
"""

import pytest

from roofmaster.estimator.geometry import (
    orientation_from_azimuth,
    pitch_ratio_from_degrees,
    roof_area_from_dimensions,
    square_meters_to_square_feet,
    squares_from_area,
)


def test_flat_roof_area_is_footprint():
    assert roof_area_from_dimensions(40, 30) == 1200


def test_pitch_adds_area():
    # 40 x 30 at 6/12: 1200 x 1.05
    assert roof_area_from_dimensions(40, 30, 6) == 1260
    # 12/12 adds a full 10%
    assert roof_area_from_dimensions(50, 20, 12) == 1100


@pytest.mark.parametrize("area,squares", [
    (1200, 12),
    (1201, 13),
    (1260, 13),
    (50, 1),
    (0, 0),
])
def test_squares_round_up(area, squares):
    assert squares_from_area(area) == squares


def test_square_meters_conversion():
    assert square_meters_to_square_feet(100) == pytest.approx(1076.39)
    assert squares_from_area(square_meters_to_square_feet(150)) == 17


@pytest.mark.parametrize("degrees,ratio", [
    (0, 0),
    (18.43, 4),
    (26.57, 6),
    (45, 12),
])
def test_pitch_ratio(degrees, ratio):
    assert pitch_ratio_from_degrees(degrees) == ratio


@pytest.mark.parametrize("azimuth,direction", [
    (0, "North"),
    (22.4, "North"),
    (22.5, "Northeast"),
    (90, "East"),
    (180, "South"),
    (225, "Southwest"),
    (270, "West"),
    (315, "Northwest"),
    (337.5, "North"),
    (359.9, "North"),
    (360, "North"),
    (-90, "West"),
])
def test_orientation(azimuth, direction):
    assert orientation_from_azimuth(azimuth) == direction
