"""Geohash resolution expressed in bits or in base32 characters."""

from dataclasses import dataclass
from enum import Enum

from geohashgrid._constants import BITS_PER_CHARACTER, MAX_BINARY_PRECISION
from geohashgrid._exceptions import PrecisionOutOfRangeError

__all__ = ["Precision", "PrecisionType"]


class PrecisionType(str, Enum):
    """Enum of available precision units."""

    bits = "bits"
    characters = "characters"

    @classmethod
    def _missing_(cls, value):  # type: ignore
        if not isinstance(value, str):
            return None
        value = value.lower()
        for member in cls:
            if member.value == value:
                return member
        return None


@dataclass(frozen=True)
class Precision:
    """
    Resolution of a geohash cell.

    Precision can be defined either as a number of bits per axis or as a number of base32
    characters. Each character holds 5 interleaved bits, so for an odd number of characters
    the latitude axis gets one bit less than the longitude axis.

    Ranges are checked when the precision is used for encoding.

    Examples:
        >>> from geohashgrid import Precision
        >>> Precision.characters(11).binary_precision()
        28
        >>> Precision.bits(26).character_precision()
        10
    """

    type: PrecisionType
    value: int

    @classmethod
    def bits(cls, value: int) -> "Precision":
        """Precision defined as a number of bits per axis."""
        return cls(type=PrecisionType.bits, value=value)

    @classmethod
    def characters(cls, value: int) -> "Precision":
        """Precision defined as a number of base32 characters."""
        return cls(type=PrecisionType.characters, value=value)

    def binary_precision(self) -> int:
        """Number of bits per axis."""
        if self.type == PrecisionType.bits:
            return self.value
        # ceil(5n / 2)
        return (BITS_PER_CHARACTER * self.value + 1) // 2

    def validate_range(self) -> None:
        """Raise `PrecisionOutOfRangeError` if binary precision is outside of [1, 32]."""
        binary_precision = self.binary_precision()
        if not 1 <= binary_precision <= MAX_BINARY_PRECISION:
            raise PrecisionOutOfRangeError(
                f"Binary precision {binary_precision} ({self}) must be between"
                f" 1 and {MAX_BINARY_PRECISION}"
            )

    def character_precision(self) -> int:
        """Number of full base32 characters."""
        if self.type == PrecisionType.characters:
            return self.value
        # floor(0.4 * n)
        return (2 * self.value) // BITS_PER_CHARACTER

    def max_binary_value(self) -> float:
        """Number of distinct values per axis used for fixed point scaling."""
        return float(1 << self.binary_precision())

    def is_odd_characters(self) -> bool:
        """Whether latitude has one bit less than longitude."""
        return self.type == PrecisionType.characters and self.value % 2 == 1

    def __str__(self) -> str:
        return f"{self.value} {self.type.value}"
