"""
Conversion package for the svg2png icon renderer.

Contains modules for:
- Reading SVG default sizes and rendering with cairosvg (rasterizer.py)
- Unpremultiplication and grayscale classification (pixels.py)
- PNG encoding with Pillow (encoder.py)
- The per-file state machine and batch runner (driver.py)
"""

from .pixels import classify, classify_for_format, transform_rows, unpremultiply, unpremultiply_row
from .encoder import encode
from .rasterizer import CairoRasterizer, RasterBuffer, SourceDescriptor, read_intrinsic_size
from .driver import (
    BatchReport,
    ConversionResult,
    ConversionState,
    convert_directory,
    convert_file,
    find_sources,
)

__all__ = [
    "classify",
    "classify_for_format",
    "transform_rows",
    "unpremultiply",
    "unpremultiply_row",
    "encode",
    "CairoRasterizer",
    "RasterBuffer",
    "SourceDescriptor",
    "read_intrinsic_size",
    "BatchReport",
    "ConversionResult",
    "ConversionState",
    "convert_directory",
    "convert_file",
    "find_sources",
]
