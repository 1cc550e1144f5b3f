"""
Geohash cell encoding, decoding and neighbours computation.

Cell is stored as a single integer with latitude bits on even positions and longitude bits on
odd positions. Only the lowest `2 * binary_precision` bits are used and the most significant
of them belongs to the longitude, which matches the standard geohash layout.

http://en.wikipedia.org/wiki/Geohash
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from geohashgrid._constants import (
    BASE32_BITS,
    BASE32_CHARACTERS,
    BITS_PER_CHARACTER,
    LATITUDE_RANGE,
    LONGITUDE_RANGE,
    MAX_CHARACTER_PRECISION,
)
from geohashgrid._exceptions import InvalidGeohashError
from geohashgrid._interleave import (
    EVEN_BITS_MASK,
    ODD_BITS_MASK,
    deinterleave_bits,
    interleave_bits,
)
from geohashgrid.bounding_box import BoundingBox
from geohashgrid.coordinate import Coordinate
from geohashgrid.precision import Precision

if TYPE_CHECKING:  # pragma: no cover
    from shapely.geometry import Polygon

__all__ = ["GeohashCell", "Neighbor"]

WORD_SIZE = 64


class Neighbor(str, Enum):
    """Enum of cardinal directions."""

    north = "n"
    east = "e"
    south = "s"
    west = "w"

    @classmethod
    def _missing_(cls, value):  # type: ignore
        if not isinstance(value, str):
            return None
        value = value.lower()
        for member in cls:
            if value in (member.value, member.name):
                return member
        return None


class _InterleaveSet(Enum):
    evens = "evens"
    odds = "odds"

    @property
    def modify_mask(self) -> int:
        return EVEN_BITS_MASK if self is _InterleaveSet.evens else ODD_BITS_MASK

    @property
    def keep_mask(self) -> int:
        return ODD_BITS_MASK if self is _InterleaveSet.evens else EVEN_BITS_MASK


_NEIGHBOR_MOVES = {
    Neighbor.north: (_InterleaveSet.evens, 1),
    Neighbor.south: (_InterleaveSet.evens, -1),
    Neighbor.east: (_InterleaveSet.odds, 1),
    Neighbor.west: (_InterleaveSet.odds, -1),
}


def _float_to_bits(value: float, value_range: tuple[float, float], max_binary_value: float) -> int:
    range_min, range_max = value_range
    fraction = (value - range_min) / (range_max - range_min)
    # upper edge of the range belongs to the last cell
    return min(int(fraction * max_binary_value), int(max_binary_value) - 1)


def _bits_to_float(bits: int, value_range: tuple[float, float], max_binary_value: float) -> float:
    range_min, range_max = value_range
    fraction = bits / max_binary_value
    return range_min + fraction * (range_max - range_min)


@dataclass(frozen=True)
class GeohashCell:
    """
    Rectangular geohash cell at a given precision.

    Examples:
        >>> from geohashgrid import Coordinate, GeohashCell, Precision
        >>> cell = GeohashCell.from_coordinate(
        ...     Coordinate(longitude=-0.1, latitude=51.5), Precision.characters(12)
        ... )
        >>> cell.to_string()
        'gcpuvxr1jzfd'
        >>> hex(GeohashCell.from_string("u10hfr2c4pv6").bits)
        '0xd041075c4b25766'
    """

    bits: int
    precision: Precision

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate, precision: Precision) -> "GeohashCell":
        """
        Encode a coordinate into a geohash cell.

        Args:
            coordinate (Coordinate): Point to encode.
            precision (Precision): Resolution of the cell. Binary precision has to be between
                1 and 32 bits per axis (up to 12 characters).

        Raises:
            CoordinateOutOfRangeError: If the coordinate is outside of the valid range.
            PrecisionOutOfRangeError: If the binary precision is outside of the valid range.

        Returns:
            GeohashCell: Cell covering the coordinate.
        """
        coordinate.validate_range()
        precision.validate_range()
        max_binary_value = precision.max_binary_value()

        longitude_bits = _float_to_bits(coordinate.longitude, LONGITUDE_RANGE, max_binary_value)
        latitude_bits = _float_to_bits(coordinate.latitude, LATITUDE_RANGE, max_binary_value)
        if precision.is_odd_characters():
            # the last latitude bit doesn't fit into the last character
            latitude_bits &= ~1

        return cls(bits=interleave_bits(latitude_bits, longitude_bits), precision=precision)

    @classmethod
    def from_string(cls, geohash: str) -> "GeohashCell":
        """
        Decode a base32 geohash string.

        Args:
            geohash (str): Geohash with 1 to 12 characters. ASCII letters are case insensitive.

        Raises:
            InvalidGeohashError: If the geohash is empty, too long or contains characters
                outside of the base32 alphabet.

        Returns:
            GeohashCell: Cell with precision equal to the number of characters.
        """
        if not geohash:
            raise InvalidGeohashError("Invalid geohash: empty value", geohash)
        if len(geohash) > MAX_CHARACTER_PRECISION:
            raise InvalidGeohashError(
                f"Invalid geohash: {geohash} is longer than {MAX_CHARACTER_PRECISION} characters",
                geohash,
            )

        precision = Precision.characters(len(geohash))
        total_binary_precision = 2 * precision.binary_precision()
        bits = 0
        for index, character in enumerate(geohash, start=1):
            # only ASCII letters are case folded, U+212A KELVIN SIGN lowers to "k"
            key = character.lower() if character.isascii() else character
            try:
                character_bits = BASE32_BITS[key]
            except KeyError:
                raise InvalidGeohashError(
                    f"Invalid geohash: {geohash} contains unknown character {character!r}",
                    geohash,
                ) from None
            bits |= character_bits << (total_binary_precision - BITS_PER_CHARACTER * index)

        return cls(bits=bits, precision=precision)

    def to_string(self) -> str:
        """
        Encode the cell as a base32 geohash.

        Bits that don't fill a whole character are dropped.
        """
        total_binary_precision = 2 * self.precision.binary_precision()
        characters = []
        for index in range(1, self.precision.character_precision() + 1):
            shift = total_binary_precision - BITS_PER_CHARACTER * index
            characters.append(BASE32_CHARACTERS[(self.bits >> shift) & 0x1F])
        return "".join(characters)

    def __str__(self) -> str:
        return self.to_string()

    def bounding_box(self) -> BoundingBox:
        """Decode the cell into the rectangle it covers."""
        latitude_bits, longitude_bits = deinterleave_bits(self.bits)
        latitude_precision = self.precision
        if latitude_precision.is_odd_characters():
            latitude_bits >>= 1
            latitude_precision = Precision.bits(latitude_precision.binary_precision() - 1)

        longitude_max_value = self.precision.max_binary_value()
        latitude_max_value = latitude_precision.max_binary_value()

        return BoundingBox(
            min=Coordinate(
                longitude=_bits_to_float(longitude_bits, LONGITUDE_RANGE, longitude_max_value),
                latitude=_bits_to_float(latitude_bits, LATITUDE_RANGE, latitude_max_value),
            ),
            max=Coordinate(
                longitude=_bits_to_float(longitude_bits + 1, LONGITUDE_RANGE, longitude_max_value),
                latitude=_bits_to_float(latitude_bits + 1, LATITUDE_RANGE, latitude_max_value),
            ),
        )

    def center(self) -> Coordinate:
        """Middle point of the cell."""
        return self.bounding_box().center()

    def to_geometry(self) -> "Polygon":
        """Convert the cell to a shapely Polygon."""
        return self.bounding_box().to_geometry()

    def neighbor(self, direction: Neighbor) -> "GeohashCell":
        """
        Adjacent cell in a given direction with the same precision.

        Moving over the edge of the coordinate space wraps around to the opposite edge.
        """
        interleave_set, step = _NEIGHBOR_MOVES[Neighbor(direction)]
        return self._incremented(interleave_set, step)

    def neighbors(self) -> dict[str, "GeohashCell"]:
        """All eight surrounding cells keyed by direction: n, ne, e, se, s, sw, w, nw."""
        north = self.neighbor(Neighbor.north)
        south = self.neighbor(Neighbor.south)
        return {
            "n": north,
            "ne": north.neighbor(Neighbor.east),
            "e": self.neighbor(Neighbor.east),
            "se": south.neighbor(Neighbor.east),
            "s": south,
            "sw": south.neighbor(Neighbor.west),
            "w": self.neighbor(Neighbor.west),
            "nw": north.neighbor(Neighbor.west),
        }

    def _incremented(self, interleave_set: _InterleaveSet, step: int) -> "GeohashCell":
        if step == 0:
            return self

        total_binary_precision = 2 * self.precision.binary_precision()
        unused_bits = WORD_SIZE - total_binary_precision
        modify_bits = self.bits & interleave_set.modify_mask
        keep_bits = self.bits & interleave_set.keep_mask
        # ones on the other axis positions propagate the carry
        carry_bits = interleave_set.keep_mask >> unused_bits
        shift_bits = interleave_set is _InterleaveSet.evens and self.precision.is_odd_characters()

        if shift_bits:
            modify_bits >>= 2

        if step > 0:
            modify_bits += carry_bits + 1
        else:
            modify_bits |= carry_bits
            modify_bits -= carry_bits + 1

        if shift_bits:
            modify_bits <<= 2

        modify_bits &= interleave_set.modify_mask >> unused_bits

        return GeohashCell(bits=modify_bits | keep_bits, precision=self.precision)
