"""Tests for Coordinate value type."""

from contextlib import nullcontext as does_not_raise
from typing import Any

import pytest
from parametrization import Parametrization as P

from geohashgrid import Coordinate
from geohashgrid._exceptions import CoordinateOutOfRangeError


@P.parameters("longitude", "latitude", "expectation")  # type: ignore
@P.case("Valid", -0.1, 51.5, does_not_raise())  # type: ignore
@P.case("Lower corner", -180.0, -90.0, does_not_raise())  # type: ignore
@P.case("Upper corner", 180.0, 90.0, does_not_raise())  # type: ignore
@P.case("Longitude too big", 181.0, 0.0, pytest.raises(CoordinateOutOfRangeError))  # type: ignore
@P.case("Longitude too small", -200.0, 51.5, pytest.raises(CoordinateOutOfRangeError))  # type: ignore
@P.case("Latitude too big", 0.0, 90.5, pytest.raises(CoordinateOutOfRangeError))  # type: ignore
@P.case("Latitude too small", 0.0, -91.0, pytest.raises(CoordinateOutOfRangeError))  # type: ignore
@P.case("NaN longitude", float("nan"), 0.0, pytest.raises(CoordinateOutOfRangeError))  # type: ignore
def test_validate_range(longitude: float, latitude: float, expectation: Any) -> None:
    """Test if coordinate range is validated on creation."""
    with expectation:
        Coordinate(longitude=longitude, latitude=latitude)


def test_range_error_is_value_error() -> None:
    """Test if range violation can be caught as ValueError."""
    with pytest.raises(ValueError, match="Longitude"):
        Coordinate(longitude=181.0, latitude=0.0)


def test_coordinate_is_immutable() -> None:
    """Test if coordinate values cannot be reassigned."""
    coordinate = Coordinate(longitude=1.0, latitude=2.0)
    with pytest.raises(AttributeError):
        coordinate.longitude = 3.0  # type: ignore[misc]


def test_distance() -> None:
    """Test haversine distance between two close points."""
    a = Coordinate(longitude=-9.10, latitude=51.5)
    b = Coordinate(longitude=-9.11, latitude=51.6)

    assert a.distance_in_meters(b) == pytest.approx(11140.9, abs=0.1)
    assert b.distance_in_meters(a) == pytest.approx(a.distance_in_meters(b))
    assert a.distance_in_meters(a) == 0


def test_to_geometry() -> None:
    """Test if coordinate is converted to a shapely point in x, y order."""
    point = Coordinate(longitude=-0.1, latitude=51.5).to_geometry()
    assert point.x == -0.1
    assert point.y == 51.5
