"""Image decoding.

The decoder reads any format Pillow can identify from the file content and
returns the raw samples as a flat buffer. Images already stored as 1-4
interleaved 8-bit channels keep their native channel count; other storage
modes are reduced to the closest 8-bit layout.
"""

import logging
import os
from pathlib import Path

import numpy as np
from PIL import Image

from .errors import DecodeError
from .image import ImageMetadata, PixelBuffer

log = logging.getLogger(__name__)

# Pillow modes that map directly onto interleaved 8-bit samples
NATIVE_MODES = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}

# Modes converted before extracting samples
CONVERTED_MODES = {"1": "L", "PA": "RGBA", "I": "L", "F": "L"}


def _normalize(img: Image.Image) -> Image.Image:
    """Convert an opened image to one of the native 8-bit modes."""
    mode = img.mode
    if mode in NATIVE_MODES:
        return img
    if mode.startswith("I;16"):
        # Keep the high byte of each 16-bit sample
        samples = np.asarray(img, dtype=np.uint16) >> 8
        return Image.fromarray(samples.astype(np.uint8))
    if mode == "P":
        return img.convert("RGBA" if "transparency" in img.info else "RGB")
    if mode in CONVERTED_MODES:
        return img.convert(CONVERTED_MODES[mode])
    return img.convert("RGB")


def decode(path: str | os.PathLike[str]) -> tuple[PixelBuffer, ImageMetadata]:
    """Read an image file into a pixel buffer.

    Args:
        path: Path to the encoded image. The format is detected from the
            file content, not from the extension.

    Returns:
        Tuple of (buffer, metadata) where buffer holds
        ``width * height * channels`` samples.

    Raises:
        DecodeError: If the file does not exist, cannot be read, or is not
            a recognized image.
    """
    if not str(path):
        raise DecodeError("No input path given")

    source = Path(path)
    try:
        with Image.open(source) as img:
            source_format = img.format
            source_mode = img.mode
            img.load()
            normalized = _normalize(img)
            samples = np.asarray(normalized, dtype=np.uint8)
    except FileNotFoundError as e:
        raise DecodeError(f"Input file not found: {source}") from e
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Could not decode image {source}: {e}") from e

    height, width = samples.shape[:2]
    channels = samples.shape[2] if samples.ndim == 3 else 1
    buffer = np.ascontiguousarray(samples).reshape(-1)

    meta = ImageMetadata(width=width, height=height, channels=channels, format=source_format)
    log.debug(
        f"Decoded {source}: {source_format} {width}x{height}, "
        f"mode {source_mode} -> {channels} channel(s)"
    )
    return buffer, meta
