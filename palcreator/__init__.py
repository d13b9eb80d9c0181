"""
PalCreator

Creates color palettes from images: pixels are downsampled and clustered
(k-means or Gaussian mixture), optionally made colorblind-friendly, sorted in
HSV space and previewed as a swatch grid. attach_alpha adds per-color
transparency to any hex palette.

Quick start:
  from palcreator import extract_palette, attach_alpha
  pal = extract_palette("photo.jpg", n=5, sort="value", show_pal=False)
  attach_alpha(pal, [0.2, 0.4, 0.6, 0.8, 1.0], show_pal=False)
"""

__version__ = "1.0.0"

from .api import attach_alpha, extract_palette
from .exceptions import (
    ClusteringFailure,
    ImageReadError,
    InvalidParameter,
    LengthMismatchWarning,
    PaletteError,
)

__all__ = [
    "__version__",
    "extract_palette",
    "attach_alpha",
    "PaletteError",
    "InvalidParameter",
    "ImageReadError",
    "ClusteringFailure",
    "LengthMismatchWarning",
]
