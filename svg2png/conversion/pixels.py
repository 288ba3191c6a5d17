# svg2png/conversion/pixels.py
"""
Pixel transforms from premultiplied ARGB32 render buffers to encoder rows.

Unpremultiplication divides each colour channel by the original alpha with
truncating integer arithmetic (c * 255 // a); generated assets are compared
byte for byte, so no rounding correction is applied. Fully transparent pixels
become (0, 0, 0, 0).
"""

from typing import Iterator

import numpy as np

from svg2png.config import OUTPUT_FORMATS


def split_channels(words: np.ndarray):
    """Splits packed ARGB32 words into (a, r, g, b) uint32 arrays of the same shape."""
    words = np.asarray(words, dtype=np.uint32)
    a = (words >> 24) & 0xFF
    r = (words >> 16) & 0xFF
    g = (words >> 8) & 0xFF
    b = words & 0xFF
    return a, r, g, b


def unpremultiply_words(words: np.ndarray) -> np.ndarray:
    """
    Converts premultiplied ARGB32 words to straight-alpha RGBA bytes.

    Args:
        words (np.ndarray): uint32 array of any shape.

    Returns:
        np.ndarray: uint8 array with a trailing axis of 4 channels in R, G, B, A order.
    """
    a, r, g, b = split_channels(words)
    visible = a != 0
    divisor = np.where(visible, a, 1)

    out = np.zeros(a.shape + (4,), dtype=np.uint8)
    for index, channel in enumerate((r, g, b)):
        # Valid premultiplied data has channel <= alpha; clamp anything else
        straight = np.minimum(channel * 255 // divisor, 255)
        out[..., index] = np.where(visible, straight, 0)
    out[..., 3] = a
    return out


def unpremultiply_row(row: np.ndarray) -> bytes:
    """Unpremultiplies one row of ARGB32 words into width * 4 RGBA bytes."""
    return unpremultiply_words(row).tobytes()


def unpremultiply(buffer) -> np.ndarray:
    """Returns a new (height, width, 4) straight-alpha RGBA array; the buffer is left untouched."""
    return unpremultiply_words(buffer.pixels())


def composite_row_on_black(row: np.ndarray) -> bytes:
    """
    Drops alpha after compositing over opaque black.

    Over black the composited colour is the premultiplied colour itself.
    """
    _, r, g, b = split_channels(row)
    return np.stack((r, g, b), axis=-1).astype(np.uint8).tobytes()


def grayscale_row(row: np.ndarray) -> bytes:
    """
    Composites one row over black and converts it to 8-bit gray.

    Uses Qt's qGray weights, (r * 11 + g * 16 + b * 5) // 32, so output
    matches icons rendered into a Grayscale8 image.
    """
    _, r, g, b = split_channels(row)
    return ((r * 11 + g * 16 + b * 5) // 32).astype(np.uint8).tobytes()


_ROW_TRANSFORMS = {
    "rgba": unpremultiply_row,
    "rgb": composite_row_on_black,
    "grayscale": grayscale_row,
}


def transform_rows(buffer, output_format: str = "rgba") -> Iterator[bytes]:
    """
    Lazily yields encoder rows for ``buffer``, top to bottom.

    Each row is transformed only when the encoder asks for it, so no second
    full-size copy of the premultiplied buffer is made up front.

    Args:
        buffer (RasterBuffer): The rendered image.
        output_format (str): 'rgba', 'rgb' or 'grayscale'.

    Yields:
        bytes: One row in the Pillow mode OUTPUT_FORMATS[output_format].
    """
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format '{output_format}'")
    transform = _ROW_TRANSFORMS[output_format]
    for row in buffer.pixels():
        yield transform(row)


def is_white_alpha_mask(words: np.ndarray) -> bool:
    """True if every pixel has r == g == b and either a == 0 or a == r."""
    a, r, g, b = split_channels(words)
    consistent = (r == g) & (g == b) & ((a == 0) | (a == r))
    return bool(consistent.all())


def classify(buffer) -> bool:
    """
    Determines whether a rendered icon is a white shape with varying alpha.

    Every pixel of the buffer is checked. Themes use the result to recolour
    such icons; it never changes how the pixels are encoded.
    """
    return is_white_alpha_mask(buffer.pixels())


def classify_for_format(buffer, output_format: str = "rgba") -> bool:
    """
    Grayscale classification for the requested output format.

    rgba applies classify(); rgb checks r == g == b of the colour over black;
    a grayscale output is grayscale by definition.
    """
    if output_format == "grayscale":
        return True
    if output_format == "rgb":
        _, r, g, b = split_channels(buffer.pixels())
        return bool(((r == g) & (g == b)).all())
    return classify(buffer)
