"""Axis aligned bounding box built from coordinates."""

import warnings
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from geohashgrid._exceptions import AntimeridianWarning, EmptyBoundingBoxError
from geohashgrid.coordinate import Coordinate

if TYPE_CHECKING:  # pragma: no cover
    from shapely.geometry import Polygon
    from shapely.geometry.base import BaseGeometry

__all__ = ["BoundingBox"]


@dataclass
class BoundingBox:
    """
    Rectangle defined by minimal and maximal coordinates.

    Boxes crossing the 180th meridian are not supported: intersection tests compare raw
    longitudes without wrapping.
    """

    min: Coordinate
    max: Coordinate

    @classmethod
    def enclosing(cls, *coordinates: Coordinate) -> "BoundingBox":
        """
        Create the smallest bounding box enclosing all given coordinates.

        Args:
            *coordinates (Coordinate): At least one coordinate.

        Raises:
            EmptyBoundingBoxError: If no coordinates are passed.

        Returns:
            BoundingBox: Enclosing bounding box.
        """
        if not coordinates:
            raise EmptyBoundingBoxError("Cannot create a bounding box without coordinates")

        for coordinate in coordinates:
            coordinate.validate_range()

        bounding_box = cls(
            min=Coordinate(
                longitude=min(c.longitude for c in coordinates),
                latitude=min(c.latitude for c in coordinates),
            ),
            max=Coordinate(
                longitude=max(c.longitude for c in coordinates),
                latitude=max(c.latitude for c in coordinates),
            ),
        )

        if bounding_box.width > 180:
            warnings.warn(
                "Bounding box spans more than 180 degrees of longitude."
                " Boxes crossing the antimeridian are not supported.",
                AntimeridianWarning,
                stacklevel=2,
            )

        return bounding_box

    @classmethod
    def from_geometry(cls, geometry: "BaseGeometry") -> "BoundingBox":
        """Create a bounding box from the bounds of a shapely geometry."""
        minx, miny, maxx, maxy = geometry.bounds
        return cls.enclosing(
            Coordinate(longitude=minx, latitude=miny), Coordinate(longitude=maxx, latitude=maxy)
        )

    @property
    def width(self) -> float:
        """Longitude span in degrees."""
        return self.max.longitude - self.min.longitude

    @property
    def height(self) -> float:
        """Latitude span in degrees."""
        return self.max.latitude - self.min.latitude

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Bounds in the shapely order: minx, miny, maxx, maxy."""
        return (self.min.longitude, self.min.latitude, self.max.longitude, self.max.latitude)

    def encompass(self, coordinate: Coordinate) -> None:
        """Widen the bounding box in place so it contains the given coordinate."""
        coordinate.validate_range()
        self.min = Coordinate(
            longitude=min(self.min.longitude, coordinate.longitude),
            latitude=min(self.min.latitude, coordinate.latitude),
        )
        self.max = Coordinate(
            longitude=max(self.max.longitude, coordinate.longitude),
            latitude=max(self.max.latitude, coordinate.latitude),
        )

    def center(self) -> Coordinate:
        """Middle point of the bounding box."""
        return Coordinate(
            longitude=0.5 * (self.min.longitude + self.max.longitude),
            latitude=0.5 * (self.min.latitude + self.max.latitude),
        )

    def contains(self, coordinate: Coordinate) -> bool:
        """Check if coordinate lies within the box, edges included."""
        return (
            self.min.longitude <= coordinate.longitude <= self.max.longitude
            and self.min.latitude <= coordinate.latitude <= self.max.latitude
        )

    def intersects(self, other: "BoundingBox") -> bool:
        """Check if two boxes overlap. Touching edges count as an intersection."""
        return not (
            self.max.longitude < other.min.longitude
            or self.max.latitude < other.min.latitude
            or self.min.longitude > other.max.longitude
            or self.min.latitude > other.max.latitude
        )

    def union(self, other: "BoundingBox") -> "BoundingBox":
        """Smallest bounding box containing both boxes."""
        return BoundingBox.enclosing(self.min, self.max, other.min, other.max)

    def intersection(self, other: "BoundingBox") -> Optional["BoundingBox"]:
        """
        Overlapping part of two boxes.

        Returns:
            Optional[BoundingBox]: Shared box or `None` if boxes don't intersect.
        """
        if not self.intersects(other):
            return None

        return BoundingBox(
            min=Coordinate(
                longitude=max(self.min.longitude, other.min.longitude),
                latitude=max(self.min.latitude, other.min.latitude),
            ),
            max=Coordinate(
                longitude=min(self.max.longitude, other.max.longitude),
                latitude=min(self.max.latitude, other.max.latitude),
            ),
        )

    def to_geometry(self) -> "Polygon":
        """Convert bounding box to a shapely Polygon."""
        from shapely.geometry import box

        return box(*self.bounds)
