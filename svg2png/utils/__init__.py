# This file makes the 'utils' directory a Python package.
# utils.config is imported directly; it depends on svg2png.sizing.

from .error_handling import (
    ConfigError,
    ConversionError,
    DirectoryError,
    EncodeError,
    EncodeErrorKind,
    RenderError,
    SourceReadError,
    Svg2PngError,
)
from .logger import setup_logging

__all__ = [
    "ConfigError",
    "ConversionError",
    "DirectoryError",
    "EncodeError",
    "EncodeErrorKind",
    "RenderError",
    "SourceReadError",
    "Svg2PngError",
    "setup_logging",
]
