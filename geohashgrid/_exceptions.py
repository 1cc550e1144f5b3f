class AntimeridianWarning(Warning): ...


class CoordinateOutOfRangeError(ValueError): ...


class PrecisionOutOfRangeError(ValueError): ...


class InvalidGeohashError(ValueError):
    def __init__(self, message: str, geohash: str):
        super().__init__(message)
        self.geohash = geohash


class EmptyBoundingBoxError(ValueError): ...
