# svg2png/sizing/categories.py
"""
Icon size categories.

Each category pairs a semantic name with the canonical square size its SVG
sources are drawn at. Explicit target sizes given on the command line are
bound to categories by record, never by parallel array position.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from svg2png.config import ICON_CATEGORIES
from svg2png.utils.error_handling import ConfigError


@dataclass(frozen=True)
class SizeCategory:
    name: str
    source_size: int

    def matches(self, width: int, height: int) -> bool:
        return width == self.source_size and height == self.source_size


@dataclass(frozen=True)
class CategoryTarget:
    category: SizeCategory
    target_size: int


class SizeCategoryTable:
    """Ordered, fixed lookup table of icon categories."""

    def __init__(self, categories: Sequence[Tuple[str, int]] = ICON_CATEGORIES):
        self.categories = tuple(SizeCategory(name, size) for name, size in categories)

    def __len__(self):
        return len(self.categories)

    def __iter__(self):
        return iter(self.categories)

    @property
    def launcher(self) -> SizeCategory:
        """The launcher category, always the last entry."""
        return self.categories[-1]

    def match(self, width: int, height: int) -> Optional[SizeCategory]:
        """Returns the first category whose canonical size equals both dimensions."""
        for category in self.categories:
            if category.matches(width, height):
                return category
        return None

    def with_targets(self, targets: Sequence[int]) -> Tuple[CategoryTarget, ...]:
        """
        Binds explicit target sizes to the categories, in table order.

        Raises:
            ConfigError: If there is not exactly one positive integer per category.
        """
        targets = tuple(targets)
        if len(targets) != len(self.categories):
            raise ConfigError(
                f"Expected {len(self.categories)} icon category sizes, got {len(targets)}."
            )
        for category, target in zip(self.categories, targets):
            if isinstance(target, bool) or not isinstance(target, int) or target <= 0:
                raise ConfigError(f"Invalid size {target!r} for icon category '{category.name}'.")
        return tuple(CategoryTarget(c, t) for c, t in zip(self.categories, targets))


SIZE_CATEGORIES = SizeCategoryTable()
