"""Constants used across the project."""

LONGITUDE_RANGE = (-180.0, 180.0)
LATITUDE_RANGE = (-90.0, 90.0)

BASE32_CHARACTERS = "0123456789bcdefghjkmnpqrstuvwxyz"
BASE32_BITS = {character: index for index, character in enumerate(BASE32_CHARACTERS)}
BITS_PER_CHARACTER = 5

MAX_BINARY_PRECISION = 32
MAX_CHARACTER_PRECISION = 12

WGS84_CRS = "EPSG:4326"

EARTH_RADIUS_METERS = 6_371_000.0

__all__ = [
    "BASE32_BITS",
    "BASE32_CHARACTERS",
    "BITS_PER_CHARACTER",
    "EARTH_RADIUS_METERS",
    "LATITUDE_RANGE",
    "LONGITUDE_RANGE",
    "MAX_BINARY_PRECISION",
    "MAX_CHARACTER_PRECISION",
    "WGS84_CRS",
]
