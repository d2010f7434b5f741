"""Error types raised by the conversion pipeline."""


class ConversionError(Exception):
    """Base class for failures that abort a conversion run."""


class DecodeError(ConversionError):
    """The input file is missing, unreadable, or not a recognized image."""


class UnsupportedFormatError(ConversionError):
    """The output path has no extension or an extension with no encoder."""


class EncodeError(ConversionError):
    """Writing the output image failed."""
