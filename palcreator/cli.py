"""
PalCreator command-line interface.

  palcreator extract photo.jpg -n 5 --sort value
  palcreator alpha "#FF0000" "#00FF00" --alpha 0.5 0.25
"""
import argparse
import json
import sys
from typing import List, Optional

from loguru import logger

from palcreator import __version__
from palcreator.api import attach_alpha, extract_palette
from palcreator.config import config
from palcreator.exceptions import InvalidParameter, PaletteError
from palcreator.utils.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="palcreator", description="Create color palettes from images.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None, help="loguru level (default from PALCREATOR_LOG_LEVEL)")
    parser.add_argument("--json", action="store_true", help="Print the palette as a JSON array")
    sub = parser.add_subparsers(dest="command", required=True)

    extract = sub.add_parser("extract", help="Extract a palette from an image")
    extract.add_argument("image", help="Path to a JPG, PNG or TIFF image")
    extract.add_argument("-n", type=int, required=True, help="Number of colors")
    extract.add_argument("--resize", type=float, default=config.DEFAULT_RESIZE)
    extract.add_argument("--method", default=config.DEFAULT_METHOD,
                         help="kmeans (centroid) or gaussian_mix (mixture)")
    extract.add_argument("--colorblind", action="store_true", help="Use colorblind-friendly colors")
    extract.add_argument("--sort", default="none", choices=config.SORT_KEYS)
    extract.add_argument("--seed", type=int, default=None)
    extract.add_argument("--show", action="store_true", help="Preview the palette grid")
    extract.add_argument("--title", default="")

    alpha = sub.add_parser("alpha", help="Attach alpha transparency to hex colors")
    alpha.add_argument("colors", nargs="+", help="Colors as #RRGGBB")
    alpha.add_argument("--alpha", type=float, nargs="+", required=True, help="One alpha or one per color")
    alpha.add_argument("--show", action="store_true", help="Preview the palette grid")
    alpha.add_argument("--title", default="")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.command == "extract":
            palette = extract_palette(
                args.image, args.n,
                resize=args.resize, method=args.method, colorblind=args.colorblind,
                sort=args.sort, show_pal=args.show, title=args.title, seed=args.seed,
            )
        else:
            alpha = args.alpha[0] if len(args.alpha) == 1 else args.alpha
            palette = attach_alpha(args.colors, alpha, show_pal=args.show, title=args.title)
    except InvalidParameter as e:
        logger.error(f"Invalid parameter: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 2
    except PaletteError as e:
        logger.error(f"Palette creation failed: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(palette))
    else:
        print("\n".join(palette))
    return 0


if __name__ == "__main__":
    sys.exit(main())
