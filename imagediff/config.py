"""Comparison configuration - thresholds, encodings, and constants."""

# Pixel-difference threshold (exclusive) on the absolute grayscale difference.
# The threshold is a byte value, so anything outside 0-255 is rejected.
DEFAULT_THRESHOLD = 3
MIN_THRESHOLD = 0
MAX_THRESHOLD = 255

# Decimal places kept when rounding the Bhattacharyya distance
ROUND_DIGITS = 8

# Grayscale encodings
#   rgb:       full color packed into one integer (R << 16 | G << 8 | B)
#   luminance: Pillow "L" conversion (ITU-R 601-2 luma), 0-255
ENCODINGS = ("rgb", "luminance")
DEFAULT_ENCODING = "rgb"

# Pillow modes with 16-bit samples, scaled down to 8 bits before encoding.
# "I" (32-bit signed) is what older Pillow releases open 16-bit PNGs as.
SIXTEEN_BIT_MODES = {"I", "I;16", "I;16L", "I;16B", "I;16N"}

# Float samples have no fixed range, so these are rejected
UNSUPPORTED_MODES = {"F"}

# Image file extensions picked up when comparing against a directory
IMAGE_EXTENSIONS = {
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".bmp",
    ".tif",
    ".tiff",
    ".webp",
}

# Exit status for errors when --exit-code reports the difference as 0-100
ERROR_EXIT_CODE = 101
