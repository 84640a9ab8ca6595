"""Image file loading utilities."""

from pathlib import Path
from typing import Iterator

from PIL import Image, ImageOps

from ..config import IMAGE_EXTENSIONS


def load_image(file_path: Path, exif_transpose: bool = False) -> Image.Image:
    """
    Load an image file into memory.

    The file is closed before returning, so the returned image doesn't hold
    a file handle. With exif_transpose, EXIF rotation is applied first so
    photos compare the way they are displayed.
    """
    with Image.open(file_path) as img:
        if exif_transpose:
            # exif_transpose returns a new image (or a copy when there's nothing to do)
            return ImageOps.exif_transpose(img)
        img.load()
        return img.copy()


def is_image_file(file_path: Path) -> bool:
    """Check if a path has one of the known image extensions."""
    return file_path.suffix.lower() in IMAGE_EXTENSIONS


def iter_image_files(directory: Path) -> Iterator[Path]:
    """Yield image files directly inside a directory, sorted by name."""
    for path in sorted(Path(directory).iterdir()):
        if path.is_file() and is_image_file(path):
            yield path
