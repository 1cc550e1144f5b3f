"""Geographic coordinate value type."""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from geohashgrid._constants import EARTH_RADIUS_METERS, LATITUDE_RANGE, LONGITUDE_RANGE
from geohashgrid._exceptions import CoordinateOutOfRangeError

if TYPE_CHECKING:  # pragma: no cover
    from shapely.geometry import Point

__all__ = ["Coordinate"]


@dataclass(frozen=True)
class Coordinate:
    """
    WGS84 point expressed in degrees.

    Longitude has to be in the range [-180, 180] and latitude in the range [-90, 90].
    Values outside of these ranges raise `CoordinateOutOfRangeError` on construction.

    Examples:
        >>> from geohashgrid import Coordinate
        >>> Coordinate(longitude=-0.1, latitude=51.5)
        Coordinate(longitude=-0.1, latitude=51.5)
    """

    longitude: float
    latitude: float

    def __post_init__(self) -> None:
        """Validate coordinate on creation."""
        self.validate_range()

    def validate_range(self) -> None:
        """Raise `CoordinateOutOfRangeError` if any of the axes is out of its range."""
        if not LONGITUDE_RANGE[0] <= self.longitude <= LONGITUDE_RANGE[1]:
            raise CoordinateOutOfRangeError(
                f"Longitude {self.longitude} must be between"
                f" {LONGITUDE_RANGE[0]} and {LONGITUDE_RANGE[1]}"
            )
        if not LATITUDE_RANGE[0] <= self.latitude <= LATITUDE_RANGE[1]:
            raise CoordinateOutOfRangeError(
                f"Latitude {self.latitude} must be between"
                f" {LATITUDE_RANGE[0]} and {LATITUDE_RANGE[1]}"
            )

    def distance_in_meters(self, other: "Coordinate") -> float:
        """
        Great-circle distance to another coordinate using the haversine formula.

        Args:
            other (Coordinate): Second point.

        Returns:
            float: Distance in meters on a sphere with the mean Earth radius.
        """
        self_latitude = math.radians(self.latitude)
        other_latitude = math.radians(other.latitude)
        delta_latitude = other_latitude - self_latitude
        delta_longitude = math.radians(other.longitude - self.longitude)

        sin_half_latitude = math.sin(0.5 * delta_latitude)
        sin_half_longitude = math.sin(0.5 * delta_longitude)

        x = (
            sin_half_latitude * sin_half_latitude
            + sin_half_longitude
            * sin_half_longitude
            * math.cos(self_latitude)
            * math.cos(other_latitude)
        )
        arc = 2 * math.atan2(math.sqrt(x), math.sqrt(1 - x))
        return EARTH_RADIUS_METERS * arc

    def to_geometry(self) -> "Point":
        """Convert coordinate to a shapely Point."""
        from shapely.geometry import Point

        return Point(self.longitude, self.latitude)
