# svg2png/conversion/encoder.py
"""
PNG writer for rendered icons.

Uses Pillow's PNG plugin: 8-bit depth, non-interlaced, default zlib
compression and adaptive filtering. The image is written to a temporary file
next to the destination and moved into place only once complete, so a failed
write never leaves a truncated PNG under the final name.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Iterable

from PIL import Image
from PIL.PngImagePlugin import PngInfo

from svg2png.config import GRAYSCALE_TEXT_KEY, GRAYSCALE_TEXT_VALUE
from svg2png.utils.error_handling import EncodeError, EncodeErrorKind

logger = logging.getLogger(__name__)


def build_png_info(grayscale: bool) -> PngInfo:
    """Returns the text metadata block: a single uncompressed Grayscale=true entry when classified."""
    info = PngInfo()
    if grayscale:
        info.add_text(GRAYSCALE_TEXT_KEY, GRAYSCALE_TEXT_VALUE, zip=False)
    return info


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove temporary file {path}: {e}")


def encode(output_path, size, rows: Iterable[bytes], grayscale: bool = False, mode: str = "RGBA") -> Path:
    """
    Encodes rows of pixels into a PNG file.

    Args:
        output_path (str | Path): Destination PNG path. Its directory must exist.
        size (AdjustedSize): Image width and height.
        rows (Iterable[bytes]): Top-to-bottom rows in ``mode`` layout, e.g. the
                                lazy generator from pixels.transform_rows().
        grayscale (bool): Embed the Grayscale=true text entry.
        mode (str): Pillow mode of the rows: 'RGBA', 'RGB' or 'L'.

    Returns:
        Path: The written file.

    Raises:
        EncodeError: kind IO_ERROR if the destination cannot be created or replaced,
                     kind LIBRARY_ERROR if Pillow fails to build or write the image.
    """
    output_path = Path(output_path)
    temp_path = output_path.with_name(f".{output_path.name}.{uuid.uuid4().hex}.tmp")

    try:
        handle = open(temp_path, "xb")
    except OSError as e:
        raise EncodeError(f"Could not create {output_path}: {e}", EncodeErrorKind.IO_ERROR) from e

    try:
        try:
            with handle:
                data = b"".join(rows)
                image = Image.frombytes(mode, (size.width, size.height), data)
                image.save(handle, format="PNG", pnginfo=build_png_info(grayscale))
        except Exception as e:
            raise EncodeError(f"Failed to encode {output_path.name}: {e}", EncodeErrorKind.LIBRARY_ERROR) from e

        try:
            os.replace(temp_path, output_path)
        except OSError as e:
            raise EncodeError(f"Could not write {output_path}: {e}", EncodeErrorKind.IO_ERROR) from e
    except EncodeError:
        _remove_quietly(temp_path)
        raise

    return output_path
