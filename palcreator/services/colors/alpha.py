"""
Alpha compositing for palettes.

Attaches a transparency value to every color of a palette, producing
#RRGGBBAA codes (00 = transparent, FF = opaque).
"""

import warnings
from numbers import Real
from typing import List, Sequence, Union

from loguru import logger

from palcreator.config import config
from palcreator.exceptions import InvalidParameter, LengthMismatchWarning

from .conversion import add_alpha, is_hex_color

AlphaInput = Union[float, Sequence[float]]


def as_alpha_list(alpha: AlphaInput) -> List[float]:
    """Normalize a scalar or sequence of alphas into a list of floats."""
    if isinstance(alpha, Real) and not isinstance(alpha, bool):
        return [float(alpha)]
    if isinstance(alpha, (str, bytes, bool)) or not hasattr(alpha, '__iter__'):
        raise InvalidParameter('One or more incorrect values passed in the "alpha" argument!', field="alpha")
    values = list(alpha)
    if not values or any(isinstance(a, bool) or not isinstance(a, Real) for a in values):
        raise InvalidParameter('One or more incorrect values passed in the "alpha" argument!', field="alpha")
    return [float(a) for a in values]


def as_palette_list(palette: Union[str, Sequence[str]]) -> List[str]:
    """
    Normalize a palette into a list, checking every entry is #RRGGBB.

    Raises:
        InvalidParameter: Naming the malformed hex entries
    """
    if isinstance(palette, str):
        palette = [palette]
    if isinstance(palette, bytes) or not hasattr(palette, "__iter__"):
        raise InvalidParameter('No hex color codes passed in the "pal" argument!', field="pal")
    palette = list(palette)
    if not palette:
        raise InvalidParameter('No hex color codes passed in the "pal" argument!', field="pal")
    malformed = [c for c in palette if not is_hex_color(c)]
    if malformed:
        raise InvalidParameter(
            f'One or more incorrect hex color codes passed in the "pal" argument: {malformed}',
            field="pal",
        )
    return palette


def check_alpha_range(alphas: Sequence[float]) -> List[float]:
    """Every alpha must lie in [0, 1]; the whole call fails otherwise."""
    bad_alpha = [a for a in alphas if not config.validate_alpha(a)]
    if bad_alpha:
        raise InvalidParameter(
            f'One or more incorrect values passed in the "alpha" argument: {bad_alpha}',
            field="alpha",
        )
    return list(alphas)


def apply_alpha(palette: Sequence[str], alpha: AlphaInput) -> List[str]:
    """
    Attach alpha digits to each color in a palette.

    A single alpha applies to every color and a single color is repeated for
    every alpha. Otherwise the two sequences are zipped to the shorter one and
    a LengthMismatchWarning is issued.

    Args:
        palette: Colors as #RRGGBB strings
        alpha: One value or one value per color, each in [0, 1]

    Returns:
        Colors as #RRGGBBAA strings
    """
    palette = as_palette_list(palette)
    alphas = check_alpha_range(as_alpha_list(alpha))

    if len(alphas) == 1:
        alphas = alphas * len(palette)
    elif len(palette) == 1:
        palette = palette * len(alphas)
    elif len(palette) != len(alphas):
        message = (f'The lengths of "pal" ({len(palette)}) and "alpha" ({len(alphas)}) differ; '
                   f'extra elements in the longer one are omitted, keeping {min(len(palette), len(alphas))}.')
        logger.warning(message)
        warnings.warn(message, LengthMismatchWarning, stacklevel=3)

    return [add_alpha(color, a) for color, a in zip(palette, alphas)]
