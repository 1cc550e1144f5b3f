"""
Bit interleaving of two 32-bit integers into a single 64-bit word.

Even bits of the word come from the first value, odd bits from the second one.
Uses the "binary magic numbers" spreading technique:
https://graphics.stanford.edu/~seander/bithacks.html#InterleaveBMN
"""

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:  # pragma: no cover
    import numpy.typing as npt

__all__ = [
    "EVEN_BITS_MASK",
    "ODD_BITS_MASK",
    "deinterleave_bits",
    "deinterleave_bits_array",
    "interleave_bits",
    "interleave_bits_array",
]

EVEN_BITS_MASK = 0x5555555555555555
ODD_BITS_MASK = 0xAAAAAAAAAAAAAAAA

_UINT32_MASK = 0x00000000FFFFFFFF

# (shift, mask) pairs, widest spread first
_SPREAD_STEPS = (
    (16, 0x0000FFFF0000FFFF),
    (8, 0x00FF00FF00FF00FF),
    (4, 0x0F0F0F0F0F0F0F0F),
    (2, 0x3333333333333333),
    (1, EVEN_BITS_MASK),
)
_SQUASH_STEPS = (
    (1, 0x3333333333333333),
    (2, 0x0F0F0F0F0F0F0F0F),
    (4, 0x00FF00FF00FF00FF),
    (8, 0x0000FFFF0000FFFF),
    (16, _UINT32_MASK),
)


def _spread(value: int) -> int:
    value &= _UINT32_MASK
    for shift, mask in _SPREAD_STEPS:
        value = (value | (value << shift)) & mask
    return value


def _squash(value: int) -> int:
    value &= EVEN_BITS_MASK
    for shift, mask in _SQUASH_STEPS:
        value = (value | (value >> shift)) & mask
    return value


def interleave_bits(even_bits: int, odd_bits: int) -> int:
    """
    Interleave two 32-bit integers.

    Args:
        even_bits (int): Value placed on even bit positions (latitude).
        odd_bits (int): Value placed on odd bit positions (longitude).

    Returns:
        int: 64-bit interleaved word.
    """
    return _spread(even_bits) | (_spread(odd_bits) << 1)


def deinterleave_bits(interleaved: int) -> tuple[int, int]:
    """
    Split a 64-bit word into values stored on even and odd bit positions.

    Inverse of `interleave_bits`.
    """
    return _squash(interleaved), _squash(interleaved >> 1)


def _spread_array(values: "npt.NDArray[np.uint64]") -> "npt.NDArray[np.uint64]":
    values = values & np.uint64(_UINT32_MASK)
    for shift, mask in _SPREAD_STEPS:
        values = (values | (values << np.uint64(shift))) & np.uint64(mask)
    return values


def _squash_array(values: "npt.NDArray[np.uint64]") -> "npt.NDArray[np.uint64]":
    values = values & np.uint64(EVEN_BITS_MASK)
    for shift, mask in _SQUASH_STEPS:
        values = (values | (values >> np.uint64(shift))) & np.uint64(mask)
    return values


def interleave_bits_array(
    even_bits: "npt.ArrayLike", odd_bits: "npt.ArrayLike"
) -> "npt.NDArray[np.uint64]":
    """Vectorised version of `interleave_bits` working on numpy arrays."""
    even_array = np.asarray(even_bits, dtype=np.uint64)
    odd_array = np.asarray(odd_bits, dtype=np.uint64)
    return _spread_array(even_array) | (_spread_array(odd_array) << np.uint64(1))


def deinterleave_bits_array(
    interleaved: "npt.ArrayLike",
) -> tuple["npt.NDArray[np.uint64]", "npt.NDArray[np.uint64]"]:
    """Vectorised version of `deinterleave_bits` working on numpy arrays."""
    interleaved_array = np.asarray(interleaved, dtype=np.uint64)
    return _squash_array(interleaved_array), _squash_array(interleaved_array >> np.uint64(1))
