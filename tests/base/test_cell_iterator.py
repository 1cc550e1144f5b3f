"""Tests for bounding box coverage iterator."""

import logging
import math

import pytest
from parametrization import Parametrization as P

from geohashgrid import BoundingBox, CellIterator, Coordinate, GeohashCell, Precision
from geohashgrid._exceptions import PrecisionOutOfRangeError
from geohashgrid._interleave import interleave_bits
from tests.base.conftest import iterator_bounding_box, london_bounding_box


def _all_intersecting_cells(bounding_box: BoundingBox, bits: int) -> set[GeohashCell]:
    precision = Precision.bits(bits)
    cells = (
        GeohashCell(bits=interleave_bits(latitude_bits, longitude_bits), precision=precision)
        for latitude_bits in range(1 << bits)
        for longitude_bits in range(1 << bits)
    )
    return {cell for cell in cells if _is_covered(bounding_box, cell.bounding_box())}


def _is_covered(bounding_box: BoundingBox, cell_box: BoundingBox) -> bool:
    # cells only touching the western or southern edge are skipped
    return (
        bounding_box.intersects(cell_box)
        and cell_box.max.longitude > bounding_box.min.longitude
        and cell_box.max.latitude > bounding_box.min.latitude
    )


def _box(minx: float, miny: float, maxx: float, maxy: float) -> BoundingBox:
    return BoundingBox(
        min=Coordinate(longitude=minx, latitude=miny),
        max=Coordinate(longitude=maxx, latitude=maxy),
    )


def test_iterator() -> None:
    """Test if iterator returns known cells in order and stops."""
    iterator = CellIterator(iterator_bounding_box(), 20)
    assert next(iterator).to_string() == "u10hfr2c"
    assert next(iterator).to_string() == "u10hfr31"
    assert next(iterator).to_string() == "u10hfr2f"
    assert next(iterator).to_string() == "u10hfr34"
    assert iterator.exhausted
    with pytest.raises(StopIteration):
        next(iterator)
    with pytest.raises(StopIteration):
        next(iterator)


def test_iterator_is_reproducible() -> None:
    """Test if new iterators with the same parameters return the same cells."""
    first_run = list(CellIterator(london_bounding_box(), 12))
    second_run = list(CellIterator(london_bounding_box(), 12))
    assert first_run == second_run
    assert len(first_run) > 1


def test_exhausted_iterator_stays_exhausted() -> None:
    """Test if iterating again over an exhausted iterator returns nothing."""
    iterator = CellIterator(iterator_bounding_box(), 20)
    assert len(list(iterator)) == 4
    assert list(iterator) == []


@P.parameters("bounding_box", "bits")  # type: ignore
@P.case("Single cell", _box(1.0, 1.0, 1.1, 1.1), 6)  # type: ignore
@P.case("Europe", _box(-10.1, 35.3, 30.2, 70.7), 6)  # type: ignore
@P.case("Southern hemisphere", _box(-75.3, -55.9, -34.1, -20.2), 5)  # type: ignore
@P.case("Equator crossing", _box(-0.7, -0.7, 0.7, 0.7), 7)  # type: ignore
@P.case("Point", _box(21.01, 52.23, 21.01, 52.23), 7)  # type: ignore
@P.case("Eastern edge", _box(170.3, 10.3, 180.0, 20.3), 6)  # type: ignore
@P.case("Northern edge", _box(10.3, 80.3, 20.3, 90.0), 6)  # type: ignore
@P.case("Whole world", _box(-180.0, -90.0, 180.0, 90.0), 3)  # type: ignore
@P.case("Coarse precision", _box(-100.3, -40.3, 100.3, 40.3), 1)  # type: ignore
@P.case("Aligned corner", _box(0.0, 0.0, 10.0, 10.0), 3)  # type: ignore
@P.case("Aligned edges", _box(-45.0, -22.5, 45.0, 22.5), 3)  # type: ignore
@P.case("Aligned west edge", _box(-45.0, 10.3, 20.3, 30.3), 4)  # type: ignore
def test_iterator_coverage(bounding_box: BoundingBox, bits: int) -> None:
    """Test if iterator returns every covered cell exactly once."""
    cells = list(CellIterator(bounding_box, bits))

    assert len(cells) == len(set(cells))
    assert set(cells) == _all_intersecting_cells(bounding_box, bits)
    assert all(cell.precision == Precision.bits(bits) for cell in cells)


def test_iterator_row_major_order() -> None:
    """Test if cells go eastward within a row and northward between rows."""
    cells = list(CellIterator(london_bounding_box(), 14))
    boxes = [cell.bounding_box() for cell in cells]

    for previous_box, next_box in zip(boxes, boxes[1:]):
        if next_box.min.latitude == previous_box.min.latitude:
            assert next_box.min.longitude > previous_box.min.longitude
        else:
            assert next_box.min.latitude > previous_box.min.latitude
            assert next_box.min.longitude == boxes[0].min.longitude


@pytest.mark.parametrize("bits", [4, 8, 12, 16])  # type: ignore
def test_iterator_terminates(bits: int) -> None:
    """Test if number of returned cells is bounded by the box area."""
    bounding_box = london_bounding_box()
    cell_box = GeohashCell.from_coordinate(bounding_box.min, Precision.bits(bits)).bounding_box()
    max_columns = math.ceil(bounding_box.width / cell_box.width) + 2
    max_rows = math.ceil(bounding_box.height / cell_box.height) + 2

    iterator = CellIterator(bounding_box, bits)
    for _ in range(max_columns * max_rows):
        if next(iterator, None) is None:
            break
    assert iterator.exhausted


def test_iterator_does_not_modify_bounding_box() -> None:
    """Test if iterated box stays unchanged."""
    bounding_box = iterator_bounding_box()
    bounds_before = bounding_box.bounds
    list(CellIterator(bounding_box, 20))
    assert bounding_box.bounds == bounds_before


@pytest.mark.parametrize("bits", [0, 33])  # type: ignore
def test_iterator_precision_out_of_range(bits: int) -> None:
    """Test if invalid bit precision is rejected on construction."""
    with pytest.raises(PrecisionOutOfRangeError):
        CellIterator(iterator_bounding_box(), bits)


def test_iterator_logs_finished_rows(caplog: pytest.LogCaptureFixture) -> None:
    """Test if iterator reports finished rows and exhaustion in debug logs."""
    logging.disable(logging.NOTSET)
    caplog.set_level(logging.DEBUG, logger="geohashgrid.cell_iterator")

    list(CellIterator(iterator_bounding_box(), 20))

    messages = [record.getMessage() for record in caplog.records]
    assert "Finished row starting at cell u10hfr2c." in messages
    assert "Finished row starting at cell u10hfr2f." in messages
    assert any(message.startswith("No more rows intersecting") for message in messages)


@P.parameters("bounding_box", "bits", "expected_cells")  # type: ignore
@P.case("Aligned corner", _box(0.0, 0.0, 10.0, 10.0), 3, [(0.0, 0.0, 45.0, 22.5)])  # type: ignore
@P.case(  # type: ignore
    "Aligned edges",
    _box(-45.0, -22.5, 0.0, 0.0),
    3,
    [
        (-45.0, -22.5, 0.0, 0.0),
        (0.0, -22.5, 45.0, 0.0),
        (-45.0, 0.0, 0.0, 22.5),
        (0.0, 0.0, 45.0, 22.5),
    ],
)
def test_iterator_skips_cells_touching_western_and_southern_edges(
    bounding_box: BoundingBox, bits: int, expected_cells: list[tuple[float, float, float, float]]
) -> None:
    """Test if iteration starts at the cell containing the minimum corner."""
    assert [cell.bounding_box().bounds for cell in CellIterator(bounding_box, bits)] == (
        expected_cells
    )


def test_iterator_cell_count_of_geohash_area() -> None:
    """Test if geohash area is covered together with cells touching its north and east."""
    bounding_box = GeohashCell.from_string("dp3").bounding_box()

    assert sum(1 for _ in CellIterator(bounding_box, 16)) == 257 * 513
