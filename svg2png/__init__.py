"""
svg2png: renders directories of SVG icons to PNG.

Output sizes follow the icon category table, a zoom factor or an expected
display width; PNGs carry a Grayscale text entry for white-on-alpha icons.
"""

__version__ = "0.1.0"
