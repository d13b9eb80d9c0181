"""
Test configuration and fixtures for PalCreator tests.
"""
import sys

import numpy as np
import pytest
from loguru import logger
from PIL import Image

# Quadrant colors of the synthetic block image (RGB)
BLOCK_COLORS = {
    "red": (200, 30, 30),
    "green": (30, 160, 60),
    "blue": (40, 60, 200),
    "yellow": (240, 220, 50),
}


def make_block_image(size: int = 100) -> np.ndarray:
    """Four flat quadrants: red, green / blue, yellow."""
    img = np.zeros((size, size, 3), dtype=np.uint8)
    half = size // 2
    img[:half, :half] = BLOCK_COLORS["red"]
    img[:half, half:] = BLOCK_COLORS["green"]
    img[half:, :half] = BLOCK_COLORS["blue"]
    img[half:, half:] = BLOCK_COLORS["yellow"]
    return img


def make_blob_pixels(centers, per_blob: int = 300, sigma: float = 6.0, seed: int = 0) -> np.ndarray:
    """Gaussian pixel clouds around the given RGB centers."""
    rng = np.random.default_rng(seed)
    blobs = [rng.normal(loc=c, scale=sigma, size=(per_blob, 3)) for c in centers]
    return np.clip(np.vstack(blobs), 0, 255)


class RecordingRenderer:
    """Stand-in for the swatch grid preview."""

    def __init__(self):
        self.calls = []

    def show(self, hex_colors, title="", **options):
        self.calls.append({"colors": list(hex_colors), "title": title, "options": options})


@pytest.fixture
def block_image():
    return make_block_image()


@pytest.fixture
def block_image_path(tmp_path, block_image):
    path = tmp_path / "blocks.png"
    Image.fromarray(block_image).save(path)
    return path


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from palcreator.services.observability import reset_metrics
    reset_metrics()


@pytest.fixture(autouse=True)
def restore_logging():
    """Drop sinks bound to captured streams after each test."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
