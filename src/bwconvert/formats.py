"""Output format selection by file extension."""

import os
from enum import Enum

from .errors import UnsupportedFormatError


class FormatTag(Enum):
    """Output encodings the converter can write."""

    PNG = "png"
    JPEG = "jpeg"
    BMP = "bmp"
    TGA = "tga"


EXTENSIONS = {
    "png": FormatTag.PNG,
    "jpg": FormatTag.JPEG,
    "jpeg": FormatTag.JPEG,
    "bmp": FormatTag.BMP,
    "tga": FormatTag.TGA,
}


def file_extension(path: str | os.PathLike[str]) -> str:
    """Return the lower-cased text after the final ``.`` in ``path``.

    Raises:
        UnsupportedFormatError: If the path contains no ``.``.
    """
    name = os.fspath(path)
    dot = name.rfind(".")
    if dot == -1:
        raise UnsupportedFormatError(f"Output path has no file extension: {name}")
    return name[dot + 1 :].lower()


def resolve_format(path: str | os.PathLike[str]) -> FormatTag:
    """Map an output path to the format its extension selects.

    Raises:
        UnsupportedFormatError: If the extension is missing or unrecognized.
    """
    ext = file_extension(path)
    try:
        return EXTENSIONS[ext]
    except KeyError:
        supported = ", ".join(sorted(EXTENSIONS))
        raise UnsupportedFormatError(
            f"Unsupported image format '.{ext}' (supported: {supported})"
        ) from None
