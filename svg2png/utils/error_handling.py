# svg2png/utils/error_handling.py
"""
Custom exception classes for the svg2png icon renderer.

Run-level errors (ConfigError, DirectoryError) abort the whole run.
Per-file errors derive from ConversionError: the file is skipped and the
batch continues.
"""

from enum import Enum


# --- Base Exception ---
class Svg2PngError(Exception):
    """Base class for all custom exceptions in this project."""
    def __init__(self, message="An error occurred while rendering icons."):
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        return f"{self.__class__.__name__}: {self.message}"


# --- Run-level errors ---

class ConfigError(Svg2PngError):
    """Raised for invalid command-line options or configuration file values."""
    def __init__(self, message="Configuration error."):
        super().__init__(message)

class DirectoryError(Svg2PngError):
    """Raised when the target directory cannot be created."""
    def __init__(self, message="Could not create target directory."):
        super().__init__(message)


# --- Per-file errors ---

class ConversionError(Svg2PngError):
    """Base class for errors that abandon the conversion of a single file."""
    def __init__(self, message="Format conversion error."):
        super().__init__(message)

class SourceReadError(ConversionError):
    """Raised when the intrinsic size of an SVG cannot be read or is invalid."""
    def __init__(self, message="Failed to read default size."):
        super().__init__(message)

class RenderError(ConversionError):
    """Raised when the rasterizer cannot render an SVG."""
    def __init__(self, message="Rendering failed."):
        super().__init__(message)


class EncodeErrorKind(Enum):
    IO_ERROR = "io"
    LIBRARY_ERROR = "library"


class EncodeError(ConversionError):
    """Raised when a PNG cannot be written.

    ``kind`` is IO_ERROR when the destination cannot be opened or created and
    LIBRARY_ERROR when the encoder itself fails.
    """
    def __init__(self, message="PNG encoding failed.", kind=EncodeErrorKind.LIBRARY_ERROR):
        self.kind = kind
        super().__init__(message)
