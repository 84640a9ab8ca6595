"""
Grayscale extraction and dimension reconciliation.

Both comparators work on a grid of one integer per pixel, indexed [x, y]
with shape (width, height). Two encodings are available:

- 'rgb': the full color packed into one integer, R << 16 | G << 8 | B.
  Identical colors always map to identical values. This is not perceptual
  luminance; it is kept as the default so results match the classic
  implementation of these metrics.
- 'luminance': Pillow's "L" conversion, 0-255.

Alpha is discarded in both encodings. 16-bit images are scaled down to
8 bits (high byte of each sample) first, so that distinct 16-bit values
are not clipped to the same 8-bit value.
"""

import numpy as np
from PIL import Image

from .config import (
    DEFAULT_ENCODING,
    ENCODINGS,
    SIXTEEN_BIT_MODES,
    UNSUPPORTED_MODES,
)
from .errors import UnsupportedModeError


def _check_encoding(encoding: str) -> None:
    if encoding not in ENCODINGS:
        raise ValueError(
            f"Unknown encoding {encoding!r}, expected one of {', '.join(ENCODINGS)}"
        )


def _to_8bit(img: Image.Image) -> Image.Image:
    """Scale a 16-bit image down to an 8-bit 'L' image."""
    samples = np.clip(np.asarray(img).astype(np.int64), 0, 0xFFFF) >> 8
    return Image.fromarray(samples.astype(np.uint8).reshape(img.height, img.width))


def get_grayscale_values(img: Image.Image, encoding: str = DEFAULT_ENCODING) -> np.ndarray:
    """
    Get one integer intensity per pixel of an image.

    Returns an int64 array of shape (width, height), indexed [x, y].
    The image itself is left untouched; the converted copy used to read
    pixels is closed before returning.
    """
    _check_encoding(encoding)

    if img.mode in UNSUPPORTED_MODES:
        raise UnsupportedModeError(f"Unsupported image mode {img.mode!r}")
    if img.mode in SIXTEEN_BIT_MODES:
        with _to_8bit(img) as scaled:
            return get_grayscale_values(scaled, encoding)

    if encoding == "luminance":
        with img.convert("L") as gray:
            values = np.asarray(gray, dtype=np.int64)
    else:
        with img.convert("RGB") as rgb:
            pixels = np.asarray(rgb, dtype=np.int64)
        values = (pixels[..., 0] << 16) | (pixels[..., 1] << 8) | pixels[..., 2]

    # Pillow arrays are row-major (height, width)
    return values.reshape(img.height, img.width).T.copy()


def get_dimensions(img1: Image.Image, img2: Image.Image) -> tuple[int, int]:
    """Get the (width, height) of the top-left region both images cover."""
    width = min(img1.width, img2.width)
    height = min(img1.height, img2.height)
    return (width, height)
