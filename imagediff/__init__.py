"""Compare two images by pixel difference and Bhattacharyya distance."""

from .compare import bhattacharyya_difference, get_differences, percentage_difference
from .errors import (
    ComparisonError,
    EmptyComparisonRegionError,
    InvalidThresholdError,
    UnsupportedModeError,
    ZeroIntensityError,
)
from .grayscale import get_dimensions, get_grayscale_values
from .utils.loading import iter_image_files, load_image

__all__ = [
    "percentage_difference",
    "bhattacharyya_difference",
    "get_dimensions",
    "get_differences",
    "get_grayscale_values",
    "load_image",
    "iter_image_files",
    "ComparisonError",
    "EmptyComparisonRegionError",
    "InvalidThresholdError",
    "UnsupportedModeError",
    "ZeroIntensityError",
]
