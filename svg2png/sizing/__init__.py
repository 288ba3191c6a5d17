"""
Sizing package for the svg2png icon renderer.

Contains modules for:
- The fixed icon category table (categories.py)
- The output size decision policy (policy.py)
"""

from .categories import SIZE_CATEGORIES, CategoryTarget, SizeCategory, SizeCategoryTable
from .policy import AdjustedSize, even, resolve

__all__ = [
    "SIZE_CATEGORIES",
    "CategoryTarget",
    "SizeCategory",
    "SizeCategoryTable",
    "AdjustedSize",
    "even",
    "resolve",
]
