#!/usr/bin/env python3
"""Grayscale converter CLI."""

import argparse
import sys

from .pipeline import ConvertConfig, ImageConverter


def main() -> int:
    """Convert one image to grayscale."""
    parser = argparse.ArgumentParser(
        description="Convert an image to grayscale by averaging its channels",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -i photo.jpg -o photo_bw.png     # Write a lossless PNG
  %(prog)s -i scan.psd -o scan_bw.jpeg      # Write a quality 100 JPEG
  %(prog)s --input in.gif --output out.tga  # Write an uncompressed TGA

The output format is chosen by the output extension (png, jpg, jpeg, bmp, tga).
        """,
    )

    parser.add_argument(
        "-i", "--input", required=True, metavar="PATH", help="Input image file path"
    )
    parser.add_argument(
        "-o", "--output", required=True, metavar="PATH", help="Output image file path"
    )

    args = parser.parse_args()

    try:
        ImageConverter(ConvertConfig.from_args(args)).convert()
    except Exception as e:
        # Any failure ends the run with a single error line
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
