"""Parallel grayscale image converter."""

from .cli import main
from .decoder import decode
from .encoder import WRITERS, encode
from .errors import ConversionError, DecodeError, EncodeError, UnsupportedFormatError
from .formats import FormatTag, file_extension, resolve_format
from .image import ImageMetadata, PixelBuffer
from .pipeline import ConversionResult, ConvertConfig, ImageConverter, run
from .transform import Processor, grayscale, grayscale_processor, partition

__all__ = [
    "ConversionError",
    "DecodeError",
    "UnsupportedFormatError",
    "EncodeError",
    "ImageMetadata",
    "PixelBuffer",
    "decode",
    "grayscale",
    "grayscale_processor",
    "partition",
    "Processor",
    "FormatTag",
    "file_extension",
    "resolve_format",
    "WRITERS",
    "encode",
    "ConvertConfig",
    "ConversionResult",
    "ImageConverter",
    "run",
    "main",
]
