#!/usr/bin/env -S uv run --script
# /// script
# requires-python = '>=3.11'
# dependencies = [
#   "pillow",
#   "numpy",
#   "tqdm",
# ]
# ///
"""
Compare images by pixel difference and Bhattacharyya distance.

Two metrics are reported for each pair:
  - Pixel difference: fraction of pixels whose grayscale values differ by
    more than the threshold (0.0 = identical, 1.0 = every pixel differs)
  - Bhattacharyya distance: distance between the normalized grayscale
    distributions (0.0 = identical)

Images of different sizes are compared over the top-left region they share.

Usage:
    ./compare_images.py a.png b.png                  # Compare two images
    ./compare_images.py a.png b.png --threshold 10   # Ignore small differences
    ./compare_images.py a.png b.png --exit-code      # Exit status = difference 0-100
    ./compare_images.py ref.png --against shots/     # Compare against a directory
    ./compare_images.py a.png b.png --json           # Machine-readable output
"""

import argparse
import json
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from PIL import Image
from tqdm import tqdm

from imagediff.compare import bhattacharyya_difference, percentage_difference
from imagediff.config import (
    DEFAULT_ENCODING,
    DEFAULT_THRESHOLD,
    ENCODINGS,
    ERROR_EXIT_CODE,
    MAX_THRESHOLD,
    MIN_THRESHOLD,
)
from imagediff.errors import ComparisonError
from imagediff.grayscale import get_dimensions
from imagediff.utils.loading import iter_image_files, load_image


@dataclass
class ComparisonResult:
    """Both metrics for one pair of images."""
    path1: str
    path2: str
    size1: tuple[int, int]
    size2: tuple[int, int]
    region: tuple[int, int]
    percentage: float
    bhattacharyya: float


def compare_files(
    img1: Image.Image,
    img2: Image.Image,
    path1: Path,
    path2: Path,
    threshold: int,
    encoding: str,
) -> ComparisonResult:
    """Compute both metrics for two loaded images."""
    return ComparisonResult(
        path1=str(path1),
        path2=str(path2),
        size1=img1.size,
        size2=img2.size,
        region=get_dimensions(img1, img2),
        percentage=percentage_difference(img1, img2, threshold, encoding),
        bhattacharyya=bhattacharyya_difference(img1, img2, encoding),
    )


def _format_size(size: tuple[int, int]) -> str:
    return f"{size[0]}x{size[1]}"


def print_pair_report(result: ComparisonResult, threshold: int, encoding: str) -> None:
    """Print the comparison of a single pair."""
    print("=" * 70)
    print("IMAGE COMPARISON")
    print("=" * 70)
    print()
    print(f"Image 1:      {result.path1} ({_format_size(result.size1)})")
    print(f"Image 2:      {result.path2} ({_format_size(result.size2)})")
    print(f"Region:       {_format_size(result.region)}")
    print(f"Threshold:    {threshold}")
    print(f"Encoding:     {encoding}")
    print()
    print(f"Pixel difference:        {result.percentage:.8f} ({result.percentage:.2%})")
    print(f"Bhattacharyya distance:  {result.bhattacharyya:.8f}")
    print()


def print_directory_report(
    reference: Path,
    results: list[ComparisonResult],
    errors: list[tuple[str, str]],
) -> None:
    """Print a table of results, most different first."""
    print()
    print("=" * 70)
    print(f"COMPARED AGAINST {reference}")
    print("=" * 70)
    print()

    if results:
        name_width = max(len(Path(r.path2).name) for r in results)
        name_width = max(name_width, len("Image"))
        print(f"{'Image':<{name_width}}  {'Pixel diff':>10}  {'Bhattacharyya':>13}")
        print("-" * (name_width + 27))
        for r in results:
            print(
                f"{Path(r.path2).name:<{name_width}}  "
                f"{r.percentage:>10.2%}  {r.bhattacharyya:>13.8f}"
            )
        print()

    if errors:
        print("Errors:")
        for path, message in errors:
            print(f"  {path}: {message}")
        print()

    print(f"Compared:            {len(results):,}")
    print(f"Errors:              {len(errors):,}")
    print()


def run_pair(args: argparse.Namespace) -> int:
    """Compare two image files. Returns the exit status."""
    error_status = ERROR_EXIT_CODE if args.exit_code else 1

    try:
        img1 = load_image(args.image1, exif_transpose=args.exif_transpose)
        img2 = load_image(args.image2, exif_transpose=args.exif_transpose)
        result = compare_files(
            img1, img2, args.image1, args.image2, args.threshold, args.encoding
        )
    except (ComparisonError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return error_status

    if args.json:
        print(json.dumps(asdict(result), indent=2))
    else:
        print_pair_report(result, args.threshold, args.encoding)

    if args.exit_code:
        return round(result.percentage * 100)
    return 0


def run_directory(args: argparse.Namespace) -> int:
    """Compare a reference image against every image in a directory."""
    reference = args.image1
    directory = args.against

    if not directory.is_dir():
        print(f"Error: Not a directory: {directory}", file=sys.stderr)
        return 1

    if not MIN_THRESHOLD <= args.threshold <= MAX_THRESHOLD:
        print(
            f"Error: Threshold must be between {MIN_THRESHOLD} and {MAX_THRESHOLD}, "
            f"got {args.threshold}",
            file=sys.stderr,
        )
        return 1

    try:
        ref_img = load_image(reference, exif_transpose=args.exif_transpose)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    candidates = [
        path for path in iter_image_files(directory)
        if path.resolve() != reference.resolve()
    ]

    results: list[ComparisonResult] = []
    errors: list[tuple[str, str]] = []

    for path in tqdm(candidates, desc="Comparing images", disable=args.json):
        try:
            img = load_image(path, exif_transpose=args.exif_transpose)
            results.append(
                compare_files(ref_img, img, reference, path, args.threshold, args.encoding)
            )
        except (ComparisonError, OSError) as e:
            errors.append((str(path), str(e)))

    results.sort(key=lambda r: (-r.percentage, -r.bhattacharyya, r.path2))

    if args.json:
        print(json.dumps({
            "reference": str(reference),
            "results": [asdict(r) for r in results],
            "errors": [{"path": p, "error": m} for p, m in errors],
        }, indent=2))
    else:
        print_directory_report(reference, results, errors)

    return 0


class CompareArgumentParser(argparse.ArgumentParser):
    """Argument parser whose usage errors exit with a configurable status."""

    error_status = 2

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(self.error_status, f"{self.prog}: error: {message}\n")


def build_parser() -> CompareArgumentParser:
    parser = CompareArgumentParser(
        allow_abbrev=False,
        description="Compare images by pixel difference and Bhattacharyya distance",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument("image1", type=Path, help="First (or reference) image")
    parser.add_argument("image2", type=Path, nargs="?", help="Image to compare with")
    parser.add_argument(
        "--against", type=Path, metavar="DIR",
        help="Compare image1 against every image in this directory"
    )

    # Comparison options
    parser.add_argument(
        "--threshold", type=int, default=DEFAULT_THRESHOLD,
        help=f"Grayscale difference (0-255) to ignore (default: {DEFAULT_THRESHOLD})"
    )
    parser.add_argument(
        "--encoding", choices=ENCODINGS, default=DEFAULT_ENCODING,
        help=f"How pixels are reduced to one value (default: {DEFAULT_ENCODING})"
    )
    parser.add_argument(
        "--exif-transpose", action="store_true",
        help="Apply EXIF rotation before comparing"
    )

    # Output options
    parser.add_argument(
        "--json", action="store_true",
        help="Print results as JSON"
    )
    parser.add_argument(
        "--exit-code", action="store_true",
        help=f"Exit with the pixel difference as a percentage 0-100 "
             f"({ERROR_EXIT_CODE} on error)"
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    # 0-100 is the difference with --exit-code, so usage errors use 101 too
    if "--exit-code" in argv:
        parser.error_status = ERROR_EXIT_CODE
    args = parser.parse_args(argv)

    if args.against is not None:
        if args.image2 is not None:
            parser.error("give either image2 or --against, not both")
        if args.exit_code:
            parser.error("--exit-code only applies when comparing two images")
        return run_directory(args)

    if args.image2 is None:
        parser.error("image2 is required unless --against is given")
    return run_pair(args)


if __name__ == "__main__":
    sys.exit(main())
