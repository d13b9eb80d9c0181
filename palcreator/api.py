"""
PalCreator public entry points.

extract_palette runs sample -> cluster -> (colorblind substitution) -> sort
on one image; attach_alpha turns any #RRGGBB palette into #RRGGBBAA codes.
Both validate every argument before touching the image or doing any
numeric work, and both can preview their result as a swatch grid.
"""
from typing import Any, List, Optional, Sequence, Union

from loguru import logger

from palcreator.config import config
from palcreator.exceptions import InvalidParameter, PaletteError
from palcreator.schemas import AttachAlphaRequest, ExtractPaletteRequest, validate_request
from palcreator.services.colors.alpha import AlphaInput, apply_alpha
from palcreator.services.colors.clustering import get_clusterer
from palcreator.services.colors.colorblind import ColorblindTransform, replace_with_safe_colors
from palcreator.services.colors.conversion import is_hex_color, rgb_to_hex
from palcreator.services.colors.sampling import ImageSource, sample_pixels
from palcreator.services.colors.sorting import sort_palette
from palcreator.services.colors.swatches import SwatchGridRenderer
from palcreator.services.observability import performance_monitor
from palcreator.utils.logging import get_logger


def _display(renderer, palette: List[str], title: str, render_options: dict) -> None:
    renderer = renderer if renderer is not None else SwatchGridRenderer()
    with performance_monitor("palette_display", cluster_count=len(palette)):
        renderer.show(palette, title, **render_options)


def extract_palette(image: ImageSource,
                    n: int,
                    resize: float = config.DEFAULT_RESIZE,
                    method: str = config.DEFAULT_METHOD,
                    colorblind: bool = False,
                    sort: str = "none",
                    show_pal: bool = True,
                    title: str = "",
                    *,
                    seed: Optional[int] = None,
                    colorblind_transform: Optional[ColorblindTransform] = None,
                    renderer: Any = None,
                    **render_options: Any) -> List[str]:
    """
    Create a palette from the colors of an image.

    Args:
        image: Path, encoded bytes, binary file object, PIL image or RGB array
        n: Number of colors in the palette
        resize: Fraction in (0, 1] by which width and height are scaled before
            clustering
        method: "kmeans" (centroid partitioning) or "gaussian_mix" (mixture
            modeling); "centroid" and "mixture" are accepted aliases
        colorblind: Replace the colors with colorblind-friendly ones
        sort: "none", "hue" (ascending), "saturation" or "value" (descending)
        show_pal: Preview the palette as a swatch grid
        title: Title of the previewed palette
        seed: Random seed for clustering (default from config)
        colorblind_transform: Substitution used when colorblind is True
        renderer: Object with show(hex_colors, title, **options) used for the
            preview (default SwatchGridRenderer)
        **render_options: Presentation overrides forwarded to the renderer

    Returns:
        n hex color codes (#RRGGBB)

    Raises:
        InvalidParameter: For malformed arguments, or n above the pixel count
        ImageReadError: If the image cannot be decoded
        ClusteringFailure: If clustering fails after its retry
    """
    request = validate_request(
        ExtractPaletteRequest,
        image=image, n=n, resize=resize, method=method, colorblind=colorblind,
        sort=sort, show_pal=show_pal, title=title,
    )
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise InvalidParameter("Incorrect seed value. Use an integer!", field="seed")
    clusterer = get_clusterer(request.method, seed=seed)

    log = get_logger(method=request.method, n=request.n)
    log.info(f"Extracting {request.n}-color palette (resize={request.resize}, sort={request.sort})")

    with performance_monitor("pixel_sampling"):
        pixels = sample_pixels(request.image, request.resize)

    with performance_monitor("color_clustering", pixel_count=len(pixels), cluster_count=request.n):
        centers = clusterer.fit(pixels, request.n)

    palette = [rgb_to_hex(center) for center in centers]
    log.debug(f"Cluster colors: {palette}")

    if request.colorblind:
        transform = colorblind_transform or replace_with_safe_colors
        with performance_monitor("colorblind_substitution", cluster_count=len(palette)):
            replaced = list(transform(palette))
        if len(replaced) != len(palette) or not all(is_hex_color(c) for c in replaced):
            raise PaletteError(
                f"Colorblind transform returned {len(replaced)} colors for a {len(palette)}-color palette"
                " or malformed hex codes"
            )
        palette = [c.upper() for c in replaced]

    palette = sort_palette(palette, request.sort)

    if request.show_pal:
        _display(renderer, palette, request.title, render_options)

    log.info(f"Palette: {palette}")
    return palette


def attach_alpha(pal: Union[str, Sequence[str]],
                 alpha: AlphaInput,
                 show_pal: bool = True,
                 title: str = "",
                 *,
                 renderer: Any = None,
                 **render_options: Any) -> List[str]:
    """
    Modify the alpha transparency of the colors in a palette.

    Args:
        pal: Colors as #RRGGBB strings (not necessarily from extract_palette)
        alpha: One value for every color, or one value per color, in [0, 1]
            (0 fully transparent, 1 fully opaque)
        show_pal: Preview the palette as a swatch grid
        title: Title of the previewed palette
        renderer: Object with show(hex_colors, title, **options)
        **render_options: Presentation overrides forwarded to the renderer

    Returns:
        Hex color codes with two alpha digits (#RRGGBBAA). When pal and alpha
        lengths differ (and neither has length 1) the longer one is truncated
        and a LengthMismatchWarning is issued.

    Raises:
        InvalidParameter: For malformed hex codes, alphas outside [0, 1] or
            non-boolean show_pal
    """
    request = validate_request(AttachAlphaRequest, pal=pal, alpha=alpha, show_pal=show_pal, title=title)

    palette = apply_alpha(request.pal, request.alpha)

    if request.show_pal:
        _display(renderer, palette, request.title, render_options)

    logger.info(f"Alpha palette: {palette}")
    return palette
