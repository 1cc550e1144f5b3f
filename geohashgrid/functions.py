"""
Functions module.

Contains helper functions working directly on geohash strings and coordinates.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from geohashgrid._constants import (
    BASE32_CHARACTERS,
    BITS_PER_CHARACTER,
    LATITUDE_RANGE,
    LONGITUDE_RANGE,
    WGS84_CRS,
)
from geohashgrid._exceptions import CoordinateOutOfRangeError
from geohashgrid._interleave import interleave_bits_array
from geohashgrid.bounding_box import BoundingBox
from geohashgrid.cell_iterator import CellIterator
from geohashgrid.coordinate import Coordinate
from geohashgrid.geohash_cell import GeohashCell
from geohashgrid.precision import Precision

if TYPE_CHECKING:  # pragma: no cover
    import numpy.typing as npt
    from geopandas import GeoDataFrame

__all__ = [
    "cells_to_geodataframe",
    "cover_bounding_box",
    "decode",
    "encode",
    "encode_many",
    "geohash_bounds",
    "geohash_neighbors",
]


def encode(longitude: float, latitude: float, precision: int = 12) -> str:
    """
    Encode a point into a geohash string.

    Args:
        longitude (float): Longitude in degrees.
        latitude (float): Latitude in degrees.
        precision (int, optional): Number of geohash characters, between 1 and 12.
            Defaults to 12.

    Returns:
        str: Geohash string.

    Examples:
        >>> from geohashgrid import encode
        >>> encode(-0.1, 51.5, precision=11)
        'gcpuvxr1jzf'
    """
    cell = GeohashCell.from_coordinate(
        Coordinate(longitude=longitude, latitude=latitude), Precision.characters(precision)
    )
    return cell.to_string()


def encode_many(
    longitudes: "npt.ArrayLike", latitudes: "npt.ArrayLike", precision: int = 12
) -> list[str]:
    """
    Encode many points into geohash strings at once.

    Bits of all points are computed on numpy arrays. Results are the same as calling `encode`
    for every point separately.

    Args:
        longitudes (npt.ArrayLike): Longitudes in degrees.
        latitudes (npt.ArrayLike): Latitudes in degrees. Must have the same shape as longitudes.
        precision (int, optional): Number of geohash characters, between 1 and 12.
            Defaults to 12.

    Raises:
        ValueError: If longitudes and latitudes have different shapes.
        CoordinateOutOfRangeError: If any of the coordinates is outside of the valid range.
        PrecisionOutOfRangeError: If the precision is outside of the valid range.

    Returns:
        list[str]: Geohash strings in the order of the flattened input.

    Examples:
        >>> from geohashgrid import encode_many
        >>> encode_many([-0.1, 0.1], [51.5, 51.5], precision=8)
        ['gcpuvxr1', 'u10hfr2c']
    """
    cell_precision = Precision.characters(precision)
    cell_precision.validate_range()

    longitude_array = np.asarray(longitudes, dtype=np.float64)
    latitude_array = np.asarray(latitudes, dtype=np.float64)
    if longitude_array.shape != latitude_array.shape:
        raise ValueError(
            f"Longitudes {longitude_array.shape} and latitudes {latitude_array.shape}"
            " must have the same shape"
        )

    max_binary_value = cell_precision.max_binary_value()
    longitude_bits = _float_array_to_bits(
        longitude_array.ravel(), LONGITUDE_RANGE, max_binary_value, "Longitude"
    )
    latitude_bits = _float_array_to_bits(
        latitude_array.ravel(), LATITUDE_RANGE, max_binary_value, "Latitude"
    )
    if cell_precision.is_odd_characters():
        latitude_bits &= ~np.uint64(1)

    words = interleave_bits_array(latitude_bits, longitude_bits)

    total_binary_precision = 2 * cell_precision.binary_precision()
    alphabet = np.array(list(BASE32_CHARACTERS))
    shifts = [
        total_binary_precision - BITS_PER_CHARACTER * index for index in range(1, precision + 1)
    ]
    characters = [alphabet[(words >> np.uint64(shift)) & np.uint64(0x1F)] for shift in shifts]
    return ["".join(geohash_characters) for geohash_characters in zip(*characters)]


def _float_array_to_bits(
    values: "npt.NDArray[np.float64]",
    value_range: tuple[float, float],
    max_binary_value: float,
    axis_name: str,
) -> "npt.NDArray[np.uint64]":
    range_min, range_max = value_range
    out_of_range = ~((values >= range_min) & (values <= range_max))
    if out_of_range.any():
        raise CoordinateOutOfRangeError(
            f"{axis_name} {values[out_of_range][0]} must be between {range_min} and {range_max}"
        )
    fraction = (values - range_min) / (range_max - range_min)
    # upper edge of the range belongs to the last cell
    return np.minimum(fraction * max_binary_value, max_binary_value - 1).astype(np.uint64)



def decode(geohash: str) -> tuple[float, float]:
    """
    Decode a geohash string into the center point of the cell.

    Returns:
        tuple[float, float]: Longitude and latitude of the cell center.
    """
    center = GeohashCell.from_string(geohash).center()
    return center.longitude, center.latitude


def geohash_bounds(geohash: str) -> tuple[float, float, float, float]:
    """
    Decode a geohash string into the bounds of the cell.

    Returns:
        tuple[float, float, float, float]: Bounds in the shapely order: minx, miny, maxx, maxy.
    """
    return GeohashCell.from_string(geohash).bounding_box().bounds


def geohash_neighbors(geohash: str) -> dict[str, str]:
    """
    Compute eight neighbours of a geohash (n, ne, e, se, s, sw, w, nw).

    Examples:
        >>> from geohashgrid import geohash_neighbors
        >>> geohash_neighbors("u10hfr2c")["e"]
        'u10hfr31'
    """
    return {
        direction: cell.to_string()
        for direction, cell in GeohashCell.from_string(geohash).neighbors().items()
    }


def cover_bounding_box(bounding_box: BoundingBox, bit_precision: int) -> list[GeohashCell]:
    """
    List all cells at a given bit precision intersecting a bounding box.

    Args:
        bounding_box (BoundingBox): Queried area.
        bit_precision (int): Number of bits per axis, between 1 and 32.

    Returns:
        list[GeohashCell]: Cells in row-major order, from south-west to north-east.
    """
    return list(CellIterator(bounding_box, bit_precision))


def cells_to_geodataframe(cells: Iterable[GeohashCell]) -> "GeoDataFrame":
    """
    Transform geohash cells into a GeoDataFrame.

    Result contains `geohash` and `bits` columns and the cell polygons in the WGS84 CRS.
    """
    import geopandas as gpd

    cells = list(cells)
    return gpd.GeoDataFrame(
        data={
            "geohash": [cell.to_string() for cell in cells],
            "bits": [cell.bits for cell in cells],
        },
        geometry=[cell.to_geometry() for cell in cells],
        crs=WGS84_CRS,
    )
