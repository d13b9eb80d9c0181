"""
PalCreator Configuration
Manages environment variables and defaults for the palette pipeline.
"""
import os
from typing import Literal

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Configuration class for PalCreator services."""

    # Logging
    LOG_LEVEL: str = os.environ.get("PALCREATOR_LOG_LEVEL", "WARNING")

    # Sampling defaults
    DEFAULT_RESIZE: float = float(os.environ.get("PALCREATOR_DEFAULT_RESIZE", "0.1"))
    DEFAULT_METHOD: Literal["kmeans", "gaussian_mix"] = os.environ.get("PALCREATOR_DEFAULT_METHOD", "kmeans")

    # Clustering
    RANDOM_SEED: int = int(os.environ.get("PALCREATOR_RANDOM_SEED", "123"))
    KMEANS_MAX_ITER: int = int(os.environ.get("PALCREATOR_KMEANS_MAX_ITER", "300"))
    MINIBATCH_BATCH_SIZE: int = int(os.environ.get("PALCREATOR_MINIBATCH_BATCH_SIZE", "2048"))
    GMM_INIT_ITER: int = int(os.environ.get("PALCREATOR_GMM_INIT_ITER", "10"))
    GMM_EM_ITER: int = int(os.environ.get("PALCREATOR_GMM_EM_ITER", "10"))

    # Palette grid preview
    GRID_ROWS: int = int(os.environ.get("PALCREATOR_GRID_ROWS", "10"))
    CHIP_SIZE: int = int(os.environ.get("PALCREATOR_CHIP_SIZE", "64"))

    # Observability
    METRICS_ENABLED: bool = bool(int(os.environ.get("PALCREATOR_METRICS_ENABLED", "1")))

    METHOD_ALIASES = {
        "kmeans": "kmeans",
        "centroid": "kmeans",
        "gaussian_mix": "gaussian_mix",
        "mixture": "gaussian_mix",
    }
    SORT_KEYS = ["none", "hue", "saturation", "value"]

    @classmethod
    def resolve_method(cls, method: str) -> str:
        """Map a method name or alias to its canonical name (KeyError if unknown)."""
        return cls.METHOD_ALIASES[method.lower()]

    @classmethod
    def validate_method(cls, method: str) -> bool:
        """Validate clustering method parameter."""
        return isinstance(method, str) and method.lower() in cls.METHOD_ALIASES

    @classmethod
    def validate_sort(cls, sort: str) -> bool:
        """Validate sort key parameter."""
        return isinstance(sort, str) and sort in cls.SORT_KEYS

    @classmethod
    def validate_resize(cls, resize: float) -> bool:
        """Validate resize fraction."""
        return 0.0 < resize <= 1.0

    @classmethod
    def validate_alpha(cls, alpha: float) -> bool:
        """Validate alpha transparency value."""
        return 0.0 <= alpha <= 1.0


# Global config instance
config = Config()
