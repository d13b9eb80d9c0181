"""
Image loading and pixel sampling.

Reads an image into an RGB uint8 array, downsamples it by a resize fraction
while keeping the aspect ratio, and flattens it row-major into an (N, 3)
float array of 0..255 channel values ready for clustering.
"""

import io
from pathlib import Path
from typing import BinaryIO, Tuple, Union

import cv2
import numpy as np
from loguru import logger
from PIL import Image, ImageOps, UnidentifiedImageError

from palcreator.exceptions import ImageReadError, InvalidParameter

ImageSource = Union[str, Path, bytes, BinaryIO, Image.Image, np.ndarray]


def _pil_to_rgb(pil_image: Image.Image) -> np.ndarray:
    pil_image = ImageOps.exif_transpose(pil_image)
    if pil_image.mode != 'RGB':
        # Composite transparent pixels onto white before dropping alpha
        if pil_image.mode in ('RGBA', 'LA', 'P'):
            rgba = pil_image.convert('RGBA')
            background = Image.new('RGBA', rgba.size, (255, 255, 255, 255))
            pil_image = Image.alpha_composite(background, rgba)
        pil_image = pil_image.convert('RGB')
    return np.array(pil_image, dtype=np.uint8)


def load_image(image: ImageSource) -> np.ndarray:
    """
    Read an image source into an RGB uint8 array.

    Args:
        image: Path, encoded bytes, binary file object, PIL image, or an
            (H, W, 3|4) uint8 array already in RGB(A) order

    Returns:
        numpy array (H, W, 3) uint8 in RGB order

    Raises:
        ImageReadError: If the source cannot be opened or decoded
    """
    if isinstance(image, np.ndarray):
        if image.ndim != 3 or image.shape[2] not in (3, 4) or image.size == 0:
            raise ImageReadError(f"Expected an (H, W, 3) or (H, W, 4) array, got shape {image.shape}")
        return np.ascontiguousarray(image[:, :, :3]).astype(np.uint8, copy=False)

    if isinstance(image, Image.Image):
        return _pil_to_rgb(image)

    try:
        if isinstance(image, (bytes, bytearray)):
            source = io.BytesIO(image)
        elif isinstance(image, (str, Path)):
            source = Path(image)
            if not source.is_file():
                raise ImageReadError(f"Image file not found: {source}")
        else:
            source = image
        with Image.open(source) as pil_image:
            pil_image.load()
            return _pil_to_rgb(pil_image)
    except (UnidentifiedImageError, OSError) as e:
        raise ImageReadError(f"Failed to decode image: {str(e)}") from e


def resized_dimensions(width: int, height: int, resize: float) -> Tuple[int, int]:
    """Scaled (width, height), rounded and kept at least one pixel per edge."""
    return max(1, int(round(width * resize))), max(1, int(round(height * resize)))


def resize_image(img_rgb: np.ndarray, resize: float) -> np.ndarray:
    """
    Scale width and height by the same fraction.

    Args:
        img_rgb: Input image (H, W, 3)
        resize: Fraction in (0, 1]

    Returns:
        Resized image (H', W', 3)
    """
    if not 0.0 < resize <= 1.0:
        raise InvalidParameter("Incorrect resize value!", field="resize")

    height, width = img_rgb.shape[:2]
    new_width, new_height = resized_dimensions(width, height, resize)
    if (new_width, new_height) == (width, height):
        return img_rgb

    # Use INTER_AREA for downscaling (better quality)
    return cv2.resize(img_rgb, (new_width, new_height), interpolation=cv2.INTER_AREA)


def sample_pixels(image: ImageSource, resize: float = 0.1) -> np.ndarray:
    """
    Downsample an image and linearize it into RGB triples.

    Args:
        image: Any source accepted by load_image
        resize: Fraction in (0, 1] applied to width and height

    Returns:
        float64 array (N, 3), one row per resized pixel, row-major order
    """
    img_rgb = load_image(image)
    resized = resize_image(img_rgb, resize)
    pixels = resized.reshape(-1, 3).astype(np.float64)

    logger.info(f"Sampled {len(pixels)} pixels from {img_rgb.shape[1]}x{img_rgb.shape[0]} image "
                f"(resize={resize}, {resized.shape[1]}x{resized.shape[0]})")
    return pixels
