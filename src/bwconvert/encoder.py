"""Single-channel image writers.

Each supported format has one writer function; ``WRITERS`` maps a
:class:`FormatTag` to it. PNG, JPEG and BMP go through OpenCV. OpenCV has no
TGA encoder, so TGA is written with Pillow.
"""

import logging
import os
from collections.abc import Callable
from pathlib import Path

import cv2
import numpy as np
import numpy.typing as npt
from PIL import Image

from .errors import EncodeError
from .formats import FormatTag
from .image import PixelBuffer

log = logging.getLogger(__name__)

JPEG_QUALITY = 100

# TGA stores width and height as unsigned 16-bit header fields
TGA_MAX_DIMENSION = 65535

# Writers receive the buffer reshaped to (height, width)
Writer = Callable[[Path, npt.NDArray[np.uint8]], None]


def _write_with_opencv(
    path: Path, image: npt.NDArray[np.uint8], ext: str, params: list[int]
) -> None:
    ok, encoded = cv2.imencode(ext, image, params)
    if not ok:
        raise EncodeError(f"OpenCV could not encode {path} as {ext}")
    path.write_bytes(encoded.tobytes())


def write_png(path: Path, image: npt.NDArray[np.uint8]) -> None:
    """Lossless PNG, one byte per pixel, row stride equal to the width."""
    _write_with_opencv(path, image, ".png", [])


def write_jpeg(path: Path, image: npt.NDArray[np.uint8]) -> None:
    """Baseline JPEG at maximum quality."""
    _write_with_opencv(path, image, ".jpg", [cv2.IMWRITE_JPEG_QUALITY, JPEG_QUALITY])


def write_bmp(path: Path, image: npt.NDArray[np.uint8]) -> None:
    """Uncompressed 8-bit BMP."""
    _write_with_opencv(path, image, ".bmp", [])


def write_tga(path: Path, image: npt.NDArray[np.uint8]) -> None:
    """Uncompressed 8-bit grayscale TGA."""
    height, width = image.shape
    if width > TGA_MAX_DIMENSION or height > TGA_MAX_DIMENSION:
        raise EncodeError(
            f"TGA cannot store a {width}x{height} image "
            f"(maximum {TGA_MAX_DIMENSION} pixels per side): {path}"
        )
    Image.fromarray(image).save(path, format="TGA")


WRITERS: dict[FormatTag, Writer] = {
    FormatTag.PNG: write_png,
    FormatTag.JPEG: write_jpeg,
    FormatTag.BMP: write_bmp,
    FormatTag.TGA: write_tga,
}


def encode(
    path: str | os.PathLike[str],
    buffer: PixelBuffer,
    width: int,
    height: int,
    tag: FormatTag,
) -> None:
    """Write a single-channel buffer to ``path`` in the given format.

    Any existing file at ``path`` is overwritten. A failed write may leave a
    partial file behind.

    Args:
        path: Destination file.
        buffer: ``width * height`` grayscale samples, row-major.
        width: Image width in pixels.
        height: Image height in pixels.
        tag: Output format.

    Raises:
        EncodeError: If encoding or writing the file fails.
        ValueError: If the buffer size does not match the dimensions.
    """
    if buffer.size != width * height:
        raise ValueError(
            f"Buffer holds {buffer.size} samples, expected {width * height} for {width}x{height}"
        )

    destination = Path(path)
    image = np.ascontiguousarray(buffer, dtype=np.uint8).reshape(height, width)
    writer = WRITERS[tag]
    try:
        writer(destination, image)
    except EncodeError:
        raise
    except (OSError, ValueError, cv2.error) as e:
        raise EncodeError(f"Failed to write {destination}: {e}") from e

    log.debug(f"Wrote {width}x{height} {tag.name} image to {destination}")
