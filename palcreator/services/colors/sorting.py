"""
Palette sorting in HSV space.

hue sorts ascending; saturation and value sort descending; none keeps the
clustering order. Sorts are stable, so ties keep their input order.
"""

from typing import List, Sequence

import numpy as np
from loguru import logger

from palcreator.config import config
from palcreator.exceptions import InvalidParameter

from .conversion import hex_to_rgb, rgb_to_hsv

# sort key -> (HSV column, descending)
SORT_COLUMNS = {
    "hue": (0, False),
    "saturation": (1, True),
    "value": (2, True),
}


def sort_palette(hex_colors: Sequence[str], sort: str = "none") -> List[str]:
    """
    Reorder a palette by a single HSV dimension.

    Args:
        hex_colors: Palette as #RRGGBB strings
        sort: One of "none", "hue", "saturation", "value"

    Returns:
        New list with the same colors in sorted order
    """
    if not config.validate_sort(sort):
        raise InvalidParameter("Unknown sorting method!", field="sort")

    palette = list(hex_colors)
    if sort == "none" or len(palette) < 2:
        return palette

    column, descending = SORT_COLUMNS[sort]
    hsv = rgb_to_hsv(np.array([hex_to_rgb(c) for c in palette], dtype=np.float64))
    keys = hsv[:, column]
    if descending:
        keys = -keys

    order = np.argsort(keys, kind="stable")
    sorted_palette = [palette[i] for i in order]
    logger.debug(f"Sorted palette by {sort}: {sorted_palette}")
    return sorted_palette
