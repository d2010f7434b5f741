"""Conversion pipeline: decode, process, resolve format, encode.

Stages run strictly in sequence. Any stage failure propagates to the caller
unchanged; nothing is retried.
"""

import argparse
import logging
from dataclasses import dataclass
from functools import partial
from pathlib import Path

from .decoder import decode
from .encoder import encode
from .formats import FormatTag, resolve_format
from .image import ImageMetadata
from .transform import Processor, grayscale_processor

log = logging.getLogger(__name__)


@dataclass
class ConvertConfig:
    """Settings for a single conversion run."""

    input_path: Path
    output_path: Path
    max_workers: int | None = None  # None = one worker per CPU

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "ConvertConfig":
        """Create ConvertConfig from parsed CLI arguments."""
        return cls(
            input_path=Path(args.input),
            output_path=Path(args.output),
        )


@dataclass
class ConversionResult:
    """Outcome of a successful conversion.

    Attributes:
        input_path: Source image.
        output_path: Written image.
        metadata: Shape of the decoded source image.
        format: Format the output was written in.
    """

    input_path: Path
    output_path: Path
    metadata: ImageMetadata
    format: FormatTag


class ImageConverter:
    """Loads an image, applies a processor and saves the result.

    The output format is picked from the output path's extension.
    """

    def __init__(self, config: ConvertConfig, processor: Processor | None = None) -> None:
        """Initialize converter.

        Args:
            config: Input/output paths and worker settings.
            processor: Processing strategy. Defaults to grayscale averaging
                using ``config.max_workers`` threads.
        """
        self.config = config
        if processor is None:
            processor = partial(grayscale_processor, max_workers=config.max_workers)
        self.processor = processor

    def convert(self) -> ConversionResult:
        """Run the pipeline.

        Raises:
            DecodeError: If the input cannot be read.
            UnsupportedFormatError: If the output extension is not supported.
            EncodeError: If the output cannot be written.
        """
        buffer, meta = decode(self.config.input_path)
        gray = self.processor(buffer, meta)
        del buffer

        tag = resolve_format(self.config.output_path)
        log.debug(f"Encoding {self.config.output_path} as {tag.name}")
        encode(self.config.output_path, gray, meta.width, meta.height, tag)

        return ConversionResult(
            input_path=self.config.input_path,
            output_path=self.config.output_path,
            metadata=meta,
            format=tag,
        )


def run(
    input_path: str | Path, output_path: str | Path, max_workers: int | None = None
) -> ConversionResult:
    """Convert ``input_path`` to a grayscale image at ``output_path``."""
    config = ConvertConfig(
        input_path=Path(input_path), output_path=Path(output_path), max_workers=max_workers
    )
    return ImageConverter(config).convert()
