# svg2png/sizing/policy.py
"""Output size decision for a single SVG icon."""

import math
from dataclasses import dataclass

from svg2png.config import LAUNCHER_REFERENCE_WIDTH
from svg2png.sizing.categories import SIZE_CATEGORIES


@dataclass(frozen=True)
class AdjustedSize:
    width: int
    height: int

    def as_tuple(self):
        return (self.width, self.height)


def even(value: float) -> int:
    """
    Rounds to the nearest even integer, ties rounding up.

    even(75) == 76 and even(73) == 74. A positive value never rounds below 2,
    the rasterizer cannot create an empty surface.
    """
    result = 2 * int(math.floor(value / 2.0 + 0.5))
    if value > 0 and result < 2:
        return 2
    return result


def _scaled(width: int, height: int, factor: float) -> AdjustedSize:
    return AdjustedSize(even(width * factor), even(height * factor))


def resolve(intrinsic_size, config) -> AdjustedSize:
    """
    Decides the output size of one icon.

    First matching rule wins:
    1. Explicit category targets: a square source at a category's canonical
       size gets that category's target size, used as-is. Anything else falls
       through to zoom scaling (rule 3).
    2. Expected display width: a source as tall as the launcher category is
       scaled by expected_width / 540.
    3. Zoom scaling.

    Scaled sizes are even in both dimensions. Never raises.

    Args:
        intrinsic_size: (width, height) reported by the rasterizer.
        config (ResolvedConfiguration): Options for the run.

    Returns:
        AdjustedSize: The output size.
    """
    width, height = intrinsic_size

    if config.category_targets:
        for entry in config.category_targets:
            if entry.category.matches(width, height):
                return AdjustedSize(entry.target_size, entry.target_size)
        return _scaled(width, height, config.zoom)

    if config.expected_width > 0 and height == SIZE_CATEGORIES.launcher.source_size:
        ratio = config.expected_width / LAUNCHER_REFERENCE_WIDTH
        return _scaled(width, height, ratio)

    return _scaled(width, height, config.zoom)
