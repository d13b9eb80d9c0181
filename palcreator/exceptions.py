"""
PalCreator error types.
"""
from typing import Optional


class PaletteError(Exception):
    """Base class for palette pipeline errors."""
    pass


class InvalidParameter(PaletteError, ValueError):
    """Malformed argument, detected before any image read or computation."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ImageReadError(PaletteError):
    """The input image could not be opened or decoded."""
    pass


class ClusteringFailure(PaletteError, RuntimeError):
    """Clustering did not converge, even after the fallback attempt."""

    def __init__(self, method: str, n: int, reason: str = ""):
        message = f"Clustering with method '{method}' failed for n={n}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.method = method
        self.n = n


class LengthMismatchWarning(UserWarning):
    """Palette and alpha lengths differ; the longer one was truncated."""
    pass
