"""
GeohashGrid.

GeohashGrid is a Python library for encoding coordinates into geohash cells, decoding them back,
finding neighbouring cells and listing all cells covering a bounding box.
"""

from geohashgrid.bounding_box import BoundingBox
from geohashgrid.cell_iterator import CellIterator
from geohashgrid.coordinate import Coordinate
from geohashgrid.functions import (
    cells_to_geodataframe,
    cover_bounding_box,
    decode,
    encode,
    encode_many,
    geohash_bounds,
    geohash_neighbors,
)
from geohashgrid.geohash_cell import GeohashCell, Neighbor
from geohashgrid.precision import Precision

__app_name__ = "GeohashGrid"
__version__ = "0.1.0"

__all__ = [
    "BoundingBox",
    "CellIterator",
    "Coordinate",
    "GeohashCell",
    "Neighbor",
    "Precision",
    "cells_to_geodataframe",
    "cover_bounding_box",
    "decode",
    "encode",
    "encode_many",
    "geohash_bounds",
    "geohash_neighbors",
]
