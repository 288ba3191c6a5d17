# svg2png/config.py
"""
Static configuration for the svg2png icon renderer.

This file centralizes the constants shared by the sizing policy, the
conversion pipeline and the command-line entry point: icon category
dimensions, default option values and file naming conventions.
"""

# ----------------------------------------------------------------------------
# Icon Categories
# ----------------------------------------------------------------------------
# (name, canonical source size) in command-line order. The source size is only
# used to recognise which category an SVG belongs to; target sizes are given
# by the user with -s. The launcher category must stay last.
ICON_CATEGORIES = (
    ("extra-small", 24),
    ("small", 32),
    ("small-plus", 48),
    ("medium", 64),
    ("large", 96),
    ("extra-large", 128),
    ("launcher", 86),
)
NUM_ICON_CATEGORIES = len(ICON_CATEGORIES)

# Launcher icons are designed for a 540 px wide display. With -w the
# launcher icon is scaled by expected_width / LAUNCHER_REFERENCE_WIDTH.
LAUNCHER_REFERENCE_WIDTH = 540

# ----------------------------------------------------------------------------
# Defaults
# ----------------------------------------------------------------------------
DEFAULT_ZOOM = 1.0
DEFAULT_EXPECTED_WIDTH = 0  # 0 disables expected-width scaling
DEFAULT_JOBS = 1
DEFAULT_DPI = 96

# Output channel formats accepted by -f, mapped to Pillow image modes
OUTPUT_FORMATS = {
    "grayscale": "L",
    "rgb": "RGB",
    "rgba": "RGBA",
}
DEFAULT_OUTPUT_FORMAT = "rgba"

# ----------------------------------------------------------------------------
# Files
# ----------------------------------------------------------------------------
SOURCE_EXTENSION = ".svg"
OUTPUT_EXTENSION = ".png"

# PNG tEXt key used by themes to recolour white-on-alpha icons
GRAYSCALE_TEXT_KEY = "Grayscale"
GRAYSCALE_TEXT_VALUE = "true"

LOG_PREFIX = "SVG2PNG"
