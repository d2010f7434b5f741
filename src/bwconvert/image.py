"""In-memory image representation shared by the pipeline stages."""

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Flat, contiguous uint8 samples in row-major, channel-interleaved order.
PixelBuffer = npt.NDArray[np.uint8]

MIN_CHANNELS = 1
MAX_CHANNELS = 4


@dataclass(frozen=True)
class ImageMetadata:
    """Shape of a decoded image.

    Attributes:
        width: Width in pixels.
        height: Height in pixels.
        channels: Interleaved samples per pixel (1-4).
        format: Source format name reported by the decoder, if known.
    """

    width: int
    height: int
    channels: int
    format: str | None = None

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def expected_size(self) -> int:
        """Number of samples a buffer with this shape must hold."""
        return self.pixel_count * self.channels


def check_shape(width: int, height: int, channels: int) -> None:
    """Raise ValueError if the given dimensions cannot describe a buffer."""
    if width < 0 or height < 0:
        raise ValueError(f"Invalid dimensions: {width}x{height}")
    if not MIN_CHANNELS <= channels <= MAX_CHANNELS:
        raise ValueError(
            f"Channel count must be between {MIN_CHANNELS} and {MAX_CHANNELS}, got {channels}"
        )


def empty_buffer(size: int = 0) -> PixelBuffer:
    """Allocate a zero-filled buffer of ``size`` samples."""
    return np.zeros(size, dtype=np.uint8)
