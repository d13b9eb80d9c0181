"""
Color space conversions.

RGB channels are 0..255 (ints or floats), hue is in degrees [0, 360) and
saturation/value are in [0, 1]. Hex codes are emitted uppercase as #RRGGBB or
#RRGGBBAA; parsing accepts either case. Every float-to-byte step rounds half
up, so hex, RGB and HSV projections of a color agree.
"""

import re
from typing import Sequence, Tuple

import numpy as np

from palcreator.exceptions import InvalidParameter

HEX_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")
HEX_ALPHA_PATTERN = re.compile(r"^#[0-9A-Fa-f]{8}$")


def to_byte(x: float) -> int:
    """Clip to [0, 255] and round half up."""
    return int(np.floor(np.clip(float(x), 0.0, 255.0) + 0.5))


def is_hex_color(value) -> bool:
    """True for strings of the form #RRGGBB."""
    return isinstance(value, str) and HEX_PATTERN.match(value) is not None


def rgb_to_hex(rgb: Sequence[float]) -> str:
    """Convert an RGB triple (0..255) to an uppercase hex color string."""
    r, g, b = (to_byte(c) for c in rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """
    Convert a #RRGGBB string to an RGB tuple.

    Raises:
        InvalidParameter: If the string is not exactly '#' plus 6 hex digits
    """
    if not is_hex_color(hex_color):
        raise InvalidParameter(f"Malformed hex color code: {hex_color!r}", field="hex_color")
    return tuple(int(hex_color[i:i + 2], 16) for i in (1, 3, 5))


def alpha_to_hex(alpha: float) -> str:
    """Two hex digits for an alpha in [0, 1] (00 transparent, FF opaque)."""
    return f"{to_byte(alpha * 255.0):02X}"


def add_alpha(hex_color: str, alpha: float) -> str:
    """Append alpha digits to a #RRGGBB color, giving #RRGGBBAA."""
    r, g, b = hex_to_rgb(hex_color)
    return f"{rgb_to_hex((r, g, b))}{alpha_to_hex(alpha)}"


def split_alpha(hex_color: str) -> Tuple[str, float]:
    """
    Decode a #RRGGBBAA string into its #RRGGBB color and alpha in [0, 1].

    Raises:
        InvalidParameter: If the string is not '#' plus 8 hex digits
    """
    if not (isinstance(hex_color, str) and HEX_ALPHA_PATTERN.match(hex_color)):
        raise InvalidParameter(f"Malformed hex alpha color code: {hex_color!r}", field="hex_color")
    return hex_color[:7].upper(), int(hex_color[7:9], 16) / 255.0


def strip_alpha(hex_colors: Sequence[str]) -> list:
    """Drop the alpha digits of every #RRGGBBAA color in a palette."""
    return [split_alpha(c)[0] for c in hex_colors]


def rgb_to_hsv(rgb: np.ndarray) -> np.ndarray:
    """
    Convert RGB (0..255) to HSV. Vectorized over an (..., 3) array.

    Returns:
        float64 array (..., 3) of hue in degrees [0, 360), saturation and
        value in [0, 1]. Achromatic colors get hue 0.
    """
    rgb = np.asarray(rgb, dtype=np.float64) / 255.0
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    cmax = np.max(rgb, axis=-1)
    cmin = np.min(rgb, axis=-1)
    diff = cmax - cmin

    hue = np.zeros_like(cmax)
    mask = diff != 0
    safe_diff = np.where(mask, diff, 1.0)

    # Priority r > g > b when channels tie for the max
    rmax = mask & (cmax == r)
    gmax = mask & (cmax == g) & ~rmax
    bmax = mask & ~rmax & ~gmax
    hue = np.where(rmax, (60.0 * (g - b) / safe_diff) % 360.0, hue)
    hue = np.where(gmax, 60.0 * (b - r) / safe_diff + 120.0, hue)
    hue = np.where(bmax, 60.0 * (r - g) / safe_diff + 240.0, hue)
    hue = np.where(hue >= 360.0, hue - 360.0, hue)

    sat = np.where(cmax > 0, diff / np.where(cmax > 0, cmax, 1.0), 0.0)

    return np.stack([hue, sat, cmax], axis=-1)


def hsv_to_rgb(hsv: np.ndarray) -> np.ndarray:
    """
    Convert HSV (hue degrees, saturation/value in [0, 1]) to RGB floats 0..255.
    Vectorized over an (..., 3) array; inverse of rgb_to_hsv.
    """
    hsv = np.asarray(hsv, dtype=np.float64)
    h = np.mod(hsv[..., 0], 360.0) / 60.0
    s = np.clip(hsv[..., 1], 0.0, 1.0)
    v = np.clip(hsv[..., 2], 0.0, 1.0)

    sector = np.floor(h).astype(int) % 6
    f = h - np.floor(h)
    p = v * (1.0 - s)
    q = v * (1.0 - s * f)
    t = v * (1.0 - s * (1.0 - f))

    r = np.choose(sector, [v, q, p, p, t, v])
    g = np.choose(sector, [t, v, v, q, p, p])
    b = np.choose(sector, [p, p, t, v, v, q])

    return np.stack([r, g, b], axis=-1) * 255.0


def hex_to_hsv(hex_color: str) -> Tuple[float, float, float]:
    """Hex color string to an (h, s, v) tuple."""
    h, s, v = rgb_to_hsv(np.array([hex_to_rgb(hex_color)]))[0]
    return float(h), float(s), float(v)


def hsv_to_hex(h: float, s: float, v: float) -> str:
    """(h, s, v) to an uppercase hex color string."""
    return rgb_to_hex(hsv_to_rgb(np.array([[h, s, v]]))[0])


def _srgb_to_linear(u: np.ndarray) -> np.ndarray:
    return np.where(u <= 0.04045, u / 12.92, ((u + 0.055) / 1.055) ** 2.4)


def rgb_to_lab(rgb: np.ndarray) -> np.ndarray:
    """
    sRGB (0..255) to CIE Lab (D65). Vectorized over an (..., 3) array.
    """
    arr = _srgb_to_linear(np.asarray(rgb, dtype=np.float64) / 255.0)
    rl, gl, bl = arr[..., 0], arr[..., 1], arr[..., 2]

    # linear RGB -> XYZ (D65)
    x = (0.4124564 * rl + 0.3575761 * gl + 0.1804375 * bl) / 0.95047
    y = (0.2126729 * rl + 0.7151522 * gl + 0.0721750 * bl) / 1.00000
    z = (0.0193339 * rl + 0.1191920 * gl + 0.9503041 * bl) / 1.08883

    e, k = 216.0 / 24389.0, 24389.0 / 27.0

    def f(t: np.ndarray) -> np.ndarray:
        return np.where(t > e, np.cbrt(t), (k * t + 16.0) / 116.0)

    fx, fy, fz = f(x), f(y), f(z)
    return np.stack([116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz)], axis=-1)
