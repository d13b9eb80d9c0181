"""
Colorblind-safe color substitution.

Any callable taking a sequence of #RRGGBB colors and returning an equal-length,
order-preserving list of #RRGGBB colors can stand in as the transform. The
default replaces each color with its perceptually nearest entry in a
15-color palette chosen to stay distinguishable under common color-vision
deficiencies.
"""

from typing import Callable, List, Sequence

import numpy as np
from loguru import logger

from .conversion import hex_to_rgb, rgb_to_lab

ColorblindTransform = Callable[[Sequence[str]], List[str]]

SAFE_COLORS = [
    "#000000", "#004949", "#009292", "#FF6DB6", "#FFB6DB",
    "#490092", "#006DDB", "#B66DFF", "#6DB6FF", "#B6DBFF",
    "#920000", "#924900", "#DB6D00", "#24FF24", "#FFFF6D",
]


def replace_with_safe_colors(hex_colors: Sequence[str],
                             safe_colors: Sequence[str] = SAFE_COLORS) -> List[str]:
    """
    Replace each color with the nearest safe color in CIE Lab.

    Args:
        hex_colors: Palette as #RRGGBB strings
        safe_colors: Reference palette to draw replacements from

    Returns:
        Palette of the same length and order
    """
    if not hex_colors:
        return []

    src_lab = rgb_to_lab(np.array([hex_to_rgb(c) for c in hex_colors], dtype=np.float64))
    ref_lab = rgb_to_lab(np.array([hex_to_rgb(c) for c in safe_colors], dtype=np.float64))

    dists = ((src_lab[:, None, :] - ref_lab[None, :, :]) ** 2).sum(axis=2)
    nearest = dists.argmin(axis=1)
    replaced = [safe_colors[i].upper() for i in nearest]

    logger.debug(f"Colorblind substitution: {list(hex_colors)} -> {replaced}")
    return replaced
