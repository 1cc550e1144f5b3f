"""Iterator over geohash cells covering a bounding box."""

import logging
from collections.abc import Iterator
from typing import Optional

from geohashgrid.bounding_box import BoundingBox
from geohashgrid.geohash_cell import GeohashCell, Neighbor
from geohashgrid.precision import Precision

__all__ = ["CellIterator"]

logger = logging.getLogger(__name__)


class CellIterator(Iterator[GeohashCell]):
    """
    Iterates over all cells at a given bit precision intersecting a bounding box.

    Cells are returned row by row, from west to east within a row and from south to north
    between rows. Every intersecting cell is returned exactly once, except for cells that only
    touch the western or southern edge of the box, since iteration starts at the cell containing
    the minimum corner.

    Iterator cannot be restarted, create a new one to traverse the box again.
    Bounding boxes crossing the 180th meridian are not supported.

    Examples:
        >>> from geohashgrid import BoundingBox, CellIterator, Coordinate
        >>> bounding_box = BoundingBox.enclosing(
        ...     Coordinate(longitude=0.09991, latitude=51.49996),
        ...     Coordinate(longitude=0.10059, latitude=51.50028),
        ... )
        >>> [str(cell) for cell in CellIterator(bounding_box, bit_precision=20)]
        ['u10hfr2c', 'u10hfr31', 'u10hfr2f', 'u10hfr34']
    """

    def __init__(self, bounding_box: BoundingBox, bit_precision: int) -> None:
        """
        Initialize CellIterator.

        Args:
            bounding_box (BoundingBox): Queried area.
            bit_precision (int): Number of bits per axis of returned cells. Has to be
                between 1 and 32.

        Raises:
            PrecisionOutOfRangeError: If bit precision is outside of the valid range.
        """
        self.bounding_box = bounding_box
        self.latitude_baseline = GeohashCell.from_coordinate(
            bounding_box.min, Precision.bits(bit_precision)
        )
        self.current: Optional[GeohashCell] = self.latitude_baseline

    @property
    def exhausted(self) -> bool:
        """Whether all cells have been returned."""
        return self.current is None

    def __iter__(self) -> "CellIterator":
        return self

    def __next__(self) -> GeohashCell:
        if self.current is None:
            raise StopIteration

        cell = self.current
        self._advance()
        return cell

    def _advance(self) -> None:
        # advance eastward until out of the bounds, then start a new row northward
        if self.current is None:
            return

        current_box = self.current.bounding_box()
        east_cell = self.current.neighbor(Neighbor.east)
        east_box = east_cell.bounding_box()
        # neighbours wrap around at the edges, a wrapped cell ends the row
        if east_box.min.longitude > current_box.min.longitude and self.bounding_box.intersects(
            east_box
        ):
            self.current = east_cell
            return

        logger.debug("Finished row starting at cell %s.", self.latitude_baseline)
        baseline_box = self.latitude_baseline.bounding_box()
        north_cell = self.latitude_baseline.neighbor(Neighbor.north)
        north_box = north_cell.bounding_box()
        if north_box.min.latitude > baseline_box.min.latitude and self.bounding_box.intersects(
            north_box
        ):
            self.latitude_baseline = north_cell
            self.current = north_cell
        else:
            logger.debug("No more rows intersecting %s.", self.bounding_box.bounds)
            self.current = None
