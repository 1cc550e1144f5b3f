"""Common components for tests."""

from geohashgrid import BoundingBox, Coordinate

__all__ = [
    "iterator_bounding_box",
    "london_coordinate",
    "london_bounding_box",
]


def london_coordinate() -> Coordinate:
    """Coordinate in central London."""
    return Coordinate(longitude=-0.1, latitude=51.5)


def iterator_bounding_box() -> BoundingBox:
    """Small box in east London covered by four 20-bit cells."""
    return BoundingBox.enclosing(
        Coordinate(longitude=0.09991, latitude=51.49996),
        Coordinate(longitude=0.10059, latitude=51.50028),
    )


def london_bounding_box() -> BoundingBox:
    """Box around Greater London."""
    return BoundingBox.enclosing(
        Coordinate(longitude=-0.5103751, latitude=51.2867601),
        Coordinate(longitude=0.3340155, latitude=51.6918741),
    )
