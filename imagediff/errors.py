"""Exceptions raised by the comparison functions."""


class ComparisonError(ValueError):
    """Base class for inputs that cannot be compared."""


class EmptyComparisonRegionError(ComparisonError):
    """The overlapping region of the two images has no pixels."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        super().__init__(f"Empty comparison region: {width}x{height}")


class ZeroIntensityError(ComparisonError):
    """An image's grayscale values sum to zero, so it can't be normalized."""


class InvalidThresholdError(ComparisonError):
    """Threshold is not an integer in the byte range."""


class UnsupportedModeError(ComparisonError):
    """The image mode has no fixed sample range to encode from."""
