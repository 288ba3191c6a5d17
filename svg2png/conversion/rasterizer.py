# svg2png/conversion/rasterizer.py
"""
Boundary to the SVG rendering engine.

The intrinsic ("default") size of an SVG is read from its root element with
lxml. Rendering is delegated to cairosvg, which draws into a cairo ARGB32
image surface: premultiplied alpha, one native-endian 32-bit word per pixel
and rows padded to the surface stride. The surface memory is copied into a
RasterBuffer owned by the caller.

Requires external dependencies: `pip install cairosvg lxml numpy`
cairosvg also needs the Cairo graphics library installed on the system.
"""

import io
import logging
import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
from lxml import etree

from svg2png.config import DEFAULT_DPI
from svg2png.utils.error_handling import RenderError, SourceReadError

logger = logging.getLogger(__name__)

_LENGTH_RE = re.compile(
    r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*(px|pt|pc|mm|cm|in|em|ex|%)?\s*$"
)

# CSS pixels per unit at 96 dpi
_UNIT_SCALE = {
    None: 1.0,
    "px": 1.0,
    "pt": 96.0 / 72.0,
    "pc": 16.0,
    "mm": 96.0 / 25.4,
    "cm": 96.0 / 2.54,
    "in": 96.0,
    "em": 16.0,
    "ex": 8.0,
}


@dataclass(frozen=True)
class SourceDescriptor:
    """An SVG file together with the size it declares."""
    path: Path
    width: int
    height: int

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)


@dataclass
class RasterBuffer:
    """
    Premultiplied ARGB32 pixels as produced by the rasterizer.

    Attributes:
        width (int): Width in pixels.
        height (int): Height in pixels.
        stride (int): Bytes per row, at least width * 4.
        data (bytes): height * stride bytes of native-endian 32-bit words.
    """
    width: int
    height: int
    stride: int
    data: bytes

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid raster size {self.width}x{self.height}")
        if self.stride % 4 or self.stride < self.width * 4:
            raise ValueError(f"Invalid stride {self.stride} for width {self.width}")
        if len(self.data) < self.stride * self.height:
            raise ValueError(
                f"Raster data too short: {len(self.data)} bytes for {self.height} rows of {self.stride}"
            )

    def pixels(self) -> np.ndarray:
        """
        Returns a read-only (height, width) uint32 view of the pixel words.

        Each word is a << 24 | r << 16 | g << 8 | b; the row padding is dropped.
        """
        words = np.frombuffer(self.data, dtype=np.uint32, count=self.stride // 4 * self.height)
        return words.reshape(self.height, self.stride // 4)[:, :self.width]


def _parse_length(value: Optional[str]) -> Optional[float]:
    """Converts an SVG length to pixels. Returns None for missing or relative lengths."""
    if value is None:
        return None
    match = _LENGTH_RE.match(value)
    if not match:
        raise ValueError(f"Invalid length '{value}'")
    number, unit = match.groups()
    if unit == "%":
        return None
    return float(number) * _UNIT_SCALE[unit]


def _parse_viewbox(value: Optional[str]) -> Optional[Tuple[float, float]]:
    if not value:
        return None
    parts = re.split(r"[\s,]+", value.strip())
    if len(parts) != 4:
        raise ValueError(f"Invalid viewBox '{value}'")
    _, _, width, height = (float(p) for p in parts)
    return width, height


def _round(value: float) -> int:
    return int(math.floor(value + 0.5))


def read_intrinsic_size(svg_path) -> SourceDescriptor:
    """
    Reads the default size of an SVG file.

    The root width and height attributes are used when they are absolute
    lengths; missing or percentage values fall back to the viewBox.

    Args:
        svg_path (str | Path): Path to the SVG file.

    Returns:
        SourceDescriptor: The file and its size in whole pixels.

    Raises:
        SourceReadError: If the file cannot be parsed or declares no valid size.
    """
    svg_path = Path(svg_path)
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)
    try:
        root = etree.parse(str(svg_path), parser).getroot()
    except (OSError, etree.XMLSyntaxError) as e:
        raise SourceReadError(f"Could not parse {svg_path.name}: {e}") from e

    if root is None or etree.QName(root).localname != "svg":
        raise SourceReadError(f"{svg_path.name} is not an SVG document")

    try:
        width = _parse_length(root.get("width"))
        height = _parse_length(root.get("height"))
        if width is None or height is None:
            viewbox = _parse_viewbox(root.get("viewBox"))
            if viewbox is not None:
                width = viewbox[0] if width is None else width
                height = viewbox[1] if height is None else height
    except ValueError as e:
        raise SourceReadError(f"Invalid size in {svg_path.name}: {e}") from e

    if width is None or height is None:
        raise SourceReadError(f"{svg_path.name} declares neither a size nor a viewBox")

    if not (math.isfinite(width) and math.isfinite(height)):
        raise SourceReadError(f"Non-finite default size in {svg_path.name}")

    size = (_round(width), _round(height))
    if size[0] <= 0 or size[1] <= 0:
        raise SourceReadError(f"Invalid default size {size[0]}x{size[1]} in {svg_path.name}")

    return SourceDescriptor(svg_path, *size)


class CairoRasterizer:
    """Renders SVG files with cairosvg into premultiplied ARGB32 buffers."""

    def __init__(self, dpi: float = DEFAULT_DPI):
        self.dpi = dpi

    def read_intrinsic_size(self, svg_path) -> SourceDescriptor:
        return read_intrinsic_size(svg_path)

    def render(self, source: SourceDescriptor, size) -> RasterBuffer:
        """
        Renders an SVG onto a surface of exactly ``size``.

        Args:
            source (SourceDescriptor): The SVG to render.
            size (AdjustedSize): Output size in pixels.

        Returns:
            RasterBuffer: A copy of the rendered surface, transparent where nothing was drawn.

        Raises:
            RenderError: If cairosvg or cairo fails, or the surface has the wrong size.
        """
        try:
            # Loaded on first render so that sizing and encoding work without libcairo
            from cairosvg.parser import Tree
            from cairosvg.surface import PNGSurface

            tree = Tree(bytestring=source.path.read_bytes(), url=str(source.path))
            # The PNG surface renders on construction; finish() would write the PNG
            surface = PNGSurface(
                tree,
                io.BytesIO(),
                self.dpi,
                output_width=size.width,
                output_height=size.height,
            )
            image = surface.cairo
            image.flush()
            buffer = RasterBuffer(
                width=image.get_width(),
                height=image.get_height(),
                stride=image.get_stride(),
                data=bytes(image.get_data()),
            )
            image.finish()
        except Exception as e:
            raise RenderError(f"Failed to render {source.path.name}: {e}") from e

        if (buffer.width, buffer.height) != (size.width, size.height):
            raise RenderError(
                f"Rendered {source.path.name} at {buffer.width}x{buffer.height}, "
                f"expected {size.width}x{size.height}"
            )
        logger.debug(f"Rendered {source.path.name} at {size.width}x{size.height} (stride {buffer.stride})")
        return buffer
