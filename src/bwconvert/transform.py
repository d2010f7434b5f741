"""Parallel grayscale reduction.

The source buffer is split into contiguous, pixel-aligned chunks that are
averaged concurrently on a thread pool. Chunks never overlap, so each worker
owns its slice of the output and no locking is needed. The pool is joined
before the result is returned.
"""

import logging
import os
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from .image import ImageMetadata, PixelBuffer, check_shape, empty_buffer

log = logging.getLogger(__name__)

# A processing strategy: takes the decoded buffer and its metadata and
# returns a single-channel buffer of the same width and height.
Processor = Callable[[PixelBuffer, ImageMetadata], PixelBuffer]


def default_worker_count() -> int:
    """Number of logical CPUs visible to the process (at least 1)."""
    return os.cpu_count() or 1


def partition(pixel_count: int, channels: int, workers: int) -> list[tuple[int, int]]:
    """Split a buffer into pixel-aligned byte ranges, one per worker.

    Every range but the last covers ``pixel_count // workers`` pixels; the
    last one absorbs the remainder so the whole buffer is covered exactly
    once. When there are more workers than pixels the leading ranges are
    empty.

    Args:
        pixel_count: Number of pixels in the image.
        channels: Samples per pixel.
        workers: Number of chunks to produce.

    Returns:
        List of ``(start, end)`` sample offsets into the source buffer.
    """
    if workers < 1:
        raise ValueError(f"Worker count must be at least 1, got {workers}")

    chunk_pixels = pixel_count // workers
    ranges = []
    for i in range(workers):
        start = i * chunk_pixels * channels
        if i == workers - 1:
            end = pixel_count * channels
        else:
            end = (i + 1) * chunk_pixels * channels
        ranges.append((start, end))
    return ranges


def _average_range(
    source: PixelBuffer, output: PixelBuffer, channels: int, start: int, end: int
) -> None:
    """Average the channels of ``source[start:end]`` into ``output``."""
    if start == end:
        return
    pixels = source[start:end].reshape(-1, channels)
    # Sum in a wider type so 4 * 255 does not wrap
    sums = pixels.sum(axis=1, dtype=np.uint16)
    output[start // channels : end // channels] = sums // channels


def grayscale(
    buffer: PixelBuffer,
    width: int,
    height: int,
    channels: int,
    max_workers: int | None = None,
) -> PixelBuffer:
    """Convert an interleaved buffer to a single-channel one by averaging.

    Each output sample is the truncated integer mean of the pixel's
    channels. No perceptual weighting is applied.

    Args:
        buffer: Source samples, ``width * height * channels`` long.
        width: Image width in pixels.
        height: Image height in pixels.
        channels: Samples per pixel (1-4).
        max_workers: Number of worker threads. Defaults to the CPU count.

    Returns:
        New buffer of ``width * height`` samples.

    Raises:
        ValueError: If the buffer does not match the declared shape.
    """
    check_shape(width, height, channels)
    pixel_count = width * height
    if buffer.size != pixel_count * channels:
        raise ValueError(
            f"Buffer holds {buffer.size} samples, expected {pixel_count * channels} "
            f"for {width}x{height}x{channels}"
        )

    if pixel_count == 0:
        return empty_buffer()

    workers = max_workers if max_workers is not None else default_worker_count()
    ranges = partition(pixel_count, channels, workers)
    source = np.ascontiguousarray(buffer, dtype=np.uint8).reshape(-1)
    output = empty_buffer(pixel_count)

    log.debug(f"Averaging {pixel_count} pixels x {channels} channel(s) on {workers} worker(s)")
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(_average_range, source, output, channels, start, end)
            for start, end in ranges
        ]
        for future in futures:
            future.result()

    return output


def grayscale_processor(
    buffer: PixelBuffer, meta: ImageMetadata, max_workers: int | None = None
) -> PixelBuffer:
    """Processor that applies :func:`grayscale` to a decoded image."""
    return grayscale(buffer, meta.width, meta.height, meta.channels, max_workers=max_workers)
