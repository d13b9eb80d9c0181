"""
Swatch Rendering Module

Lays out a palette as a labeled grid of color tiles for visual preview.
Colors fill a column from the top, ten per column, then continue in the next
column to the right. Colors carrying alpha digits are blended over the
background so transparency is visible.
"""

import base64
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np
from loguru import logger
from PIL import Image

from palcreator.config import config

from .conversion import hex_to_rgb, is_hex_color, split_alpha

RGB = Tuple[int, int, int]


def grid_positions(n: int, rows: Optional[int] = None) -> List[Tuple[int, int]]:
    """
    Grid coordinates for n colors.

    Args:
        n: Number of colors
        rows: Colors per column (default from config)

    Returns:
        One (x, y) pair per color; x is the 1-based column and y runs from
        rows (top) down to 1 (bottom)
    """
    rows = rows or config.GRID_ROWS
    return [(i // rows + 1, rows - i % rows) for i in range(n)]


def parse_swatch_color(hex_color: str) -> Tuple[RGB, float]:
    """Split #RRGGBB or #RRGGBBAA into an RGB tuple and an alpha in [0, 1]."""
    if is_hex_color(hex_color):
        return hex_to_rgb(hex_color), 1.0
    base, alpha = split_alpha(hex_color)
    return hex_to_rgb(base), alpha


def _blend(rgb: RGB, alpha: float, background: RGB) -> RGB:
    return tuple(int(round(alpha * c + (1.0 - alpha) * bg)) for c, bg in zip(rgb, background))


class SwatchGridRenderer:
    """Renders palettes as labeled tile grids with OpenCV drawing primitives."""

    def __init__(self,
                 chip_size: Optional[int] = None,
                 font_scale: float = 0.5,
                 title_scale: float = 0.8,
                 background: RGB = (255, 255, 255),
                 label_fill: RGB = (190, 190, 190)):
        self.chip_size = chip_size or config.CHIP_SIZE
        self.font_scale = font_scale
        self.title_scale = title_scale
        self.background = background
        self.label_fill = label_fill

    def render(self,
               hex_colors: Sequence[str],
               title: str = "",
               chip_size: Optional[int] = None,
               font_scale: Optional[float] = None,
               title_scale: Optional[float] = None,
               background: Optional[RGB] = None) -> np.ndarray:
        """
        Draw the palette grid.

        Returns:
            RGB uint8 array of the rendered grid
        """
        if not hex_colors:
            raise ValueError("hex_colors cannot be empty")

        chip = chip_size or self.chip_size
        font_scale = font_scale or self.font_scale
        title_scale = title_scale or self.title_scale
        background = tuple(background or self.background)

        rows = config.GRID_ROWS
        positions = grid_positions(len(hex_colors), rows)
        n_cols = positions[-1][0]
        n_rows = min(len(hex_colors), rows)

        tile_w = chip * 3
        title_h = chip if title else 0
        img = np.full((title_h + n_rows * chip, n_cols * tile_w, 3), background, dtype=np.uint8)

        logger.debug(f"Rendering palette grid: {len(hex_colors)} colors, {n_rows}x{n_cols}, chip_size={chip}")

        for hex_color, (x, y) in zip(hex_colors, positions):
            rgb, alpha = parse_swatch_color(hex_color)
            fill = _blend(rgb, alpha, background)

            x_start = (x - 1) * tile_w
            y_start = title_h + (rows - y) * chip
            img[y_start:y_start + chip, x_start:x_start + tile_w] = fill

            # Grey label box with the hex code, centered on the tile
            (text_w, text_h), baseline = cv2.getTextSize(hex_color, cv2.FONT_HERSHEY_SIMPLEX, font_scale, 1)
            text_x = x_start + (tile_w - text_w) // 2
            text_y = y_start + (chip + text_h) // 2
            pad = 4
            cv2.rectangle(img, (text_x - pad, text_y - text_h - pad), (text_x + text_w + pad, text_y + baseline),
                          self.label_fill, thickness=-1)
            cv2.putText(img, hex_color, (text_x, text_y), cv2.FONT_HERSHEY_SIMPLEX, font_scale,
                        (0, 0, 0), 1, cv2.LINE_AA)

        if title:
            (text_w, text_h), _ = cv2.getTextSize(title, cv2.FONT_HERSHEY_SIMPLEX, title_scale, 2)
            text_x = max(0, (img.shape[1] - text_w) // 2)
            cv2.putText(img, title, (text_x, (title_h + text_h) // 2), cv2.FONT_HERSHEY_SIMPLEX,
                        title_scale, (0, 0, 0), 2, cv2.LINE_AA)

        return img

    def render_png_b64(self, hex_colors: Sequence[str], title: str = "", **options) -> str:
        """Render the grid and return it as a base64-encoded PNG."""
        img = self.render(hex_colors, title, **options)
        success, buffer = cv2.imencode('.png', cv2.cvtColor(img, cv2.COLOR_RGB2BGR))
        if not success:
            raise RuntimeError("Failed to encode palette grid as PNG")
        return base64.b64encode(buffer.tobytes()).decode('ascii')

    def show(self, hex_colors: Sequence[str], title: str = "", **options) -> None:
        """Render the grid and open it in the platform image viewer."""
        img = self.render(hex_colors, title, **options)
        Image.fromarray(img).show(title=title or None)
