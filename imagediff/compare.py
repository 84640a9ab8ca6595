"""
Image comparison metrics.

Two independent scalars describe how much two images differ:

- percentage_difference: fraction of pixels whose grayscale values differ
  by more than a threshold.
- bhattacharyya_difference: distance between the images' normalized
  grayscale distributions. This says something about the brightness of the
  images as a whole, not so much about where they differ.

Images of different sizes are compared over the top-left region they share
(see get_dimensions). Pixels outside it are ignored.
"""

import math
from numbers import Integral

import numpy as np
from PIL import Image

from .config import (
    DEFAULT_ENCODING,
    DEFAULT_THRESHOLD,
    MAX_THRESHOLD,
    MIN_THRESHOLD,
    ROUND_DIGITS,
)
from .errors import (
    EmptyComparisonRegionError,
    InvalidThresholdError,
    ZeroIntensityError,
)
from .grayscale import get_dimensions, get_grayscale_values


def _require_region(img1: Image.Image, img2: Image.Image) -> tuple[int, int]:
    """Get the shared dimensions, failing if they cover no pixels."""
    width, height = get_dimensions(img1, img2)
    if width == 0 or height == 0:
        raise EmptyComparisonRegionError(width, height)
    return (width, height)


def _check_threshold(threshold) -> None:
    # bool is an Integral, but True/False as a threshold is a caller mistake
    if isinstance(threshold, bool) or not isinstance(threshold, Integral):
        raise InvalidThresholdError(
            f"Threshold must be an integer, got {type(threshold).__name__}"
        )
    if not MIN_THRESHOLD <= threshold <= MAX_THRESHOLD:
        raise InvalidThresholdError(
            f"Threshold must be between {MIN_THRESHOLD} and {MAX_THRESHOLD}, got {threshold}"
        )


def get_differences(
    img1: Image.Image,
    img2: Image.Image,
    encoding: str = DEFAULT_ENCODING,
) -> np.ndarray:
    """
    Get the absolute grayscale difference of every pixel in the shared region.

    Returns a non-negative int64 array of shape (width, height) as given by
    get_dimensions, indexed [x, y].
    """
    width, height = get_dimensions(img1, img2)

    first_gray = get_grayscale_values(img1, encoding)
    second_gray = get_grayscale_values(img2, encoding)

    return np.abs(first_gray[:width, :height] - second_gray[:width, :height])


def percentage_difference(
    img1: Image.Image,
    img2: Image.Image,
    threshold: int = DEFAULT_THRESHOLD,
    encoding: str = DEFAULT_ENCODING,
) -> float:
    """
    Get the difference between two images as a fraction of differing pixels.

    A pixel differs when the absolute difference of its grayscale values is
    strictly greater than threshold (0-255, default 3). Returns a value in
    [0.0, 1.0]: 0.0 when the images are identical over the shared region.

    Raises InvalidThresholdError for a threshold outside the byte range and
    EmptyComparisonRegionError when the shared region has no pixels.
    """
    _check_threshold(threshold)
    width, height = _require_region(img1, img2)

    differences = get_differences(img1, img2, encoding)
    diff_pixels = int(np.count_nonzero(differences > threshold))

    return diff_pixels / (width * height)


def bhattacharyya_difference(
    img1: Image.Image,
    img2: Image.Image,
    encoding: str = DEFAULT_ENCODING,
) -> float:
    """
    Get the Bhattacharyya distance between the images' normalized grayscale grids.

    Each grid is normalized by the sum of all its values over the image's full
    size, while the coefficient is summed over the shared region only. For
    images of equal size the two coincide.

    Returns a value in [0.0, 1.0], rounded to 8 decimal places: 0.0 when the
    normalized distributions are identical over the shared region.

    Raises EmptyComparisonRegionError when the shared region has no pixels and
    ZeroIntensityError when either image's grayscale values sum to zero
    (e.g. a fully black image with the 'rgb' encoding).
    """
    width, height = _require_region(img1, img2)

    img1_gray = get_grayscale_values(img1, encoding)
    img2_gray = get_grayscale_values(img2, encoding)

    hist_sum1 = float(img1_gray.sum())
    hist_sum2 = float(img2_gray.sum())
    if hist_sum1 == 0:
        raise ZeroIntensityError("First image has zero total intensity")
    if hist_sum2 == 0:
        raise ZeroIntensityError("Second image has zero total intensity")

    normalized1 = img1_gray[:width, :height] / hist_sum1
    normalized2 = img2_gray[:width, :height] / hist_sum2

    b_coefficient = float(np.sqrt(normalized1 * normalized2).sum())

    # Summation drift can push the coefficient just past 1.0
    dist = max(0.0, round(1.0 - b_coefficient, ROUND_DIGITS))
    return round(math.sqrt(dist), ROUND_DIGITS)
