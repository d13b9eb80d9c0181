"""
Pixel clustering strategies.

Both strategies share the fit(pixels, n) -> centroids contract:

- KMeansClusterer partitions pixels with scikit-learn KMeans and, when the
  fit signals non-convergence, retries once with MiniBatchKMeans
  (incremental centroid updates).
- GaussianMixtureClusterer fits n full-covariance Gaussian components with a
  bounded number of EM steps, seeded from a random subset of pixels, and
  returns the component means. It retries once with diagonal covariances.

Centroids come back clipped to [0, 255] in cluster-label order.
"""

import warnings
from typing import Dict, Optional, Type

import numpy as np
from loguru import logger
from sklearn.cluster import KMeans, MiniBatchKMeans
from sklearn.exceptions import ConvergenceWarning
from sklearn.mixture import GaussianMixture

from palcreator.config import config
from palcreator.exceptions import ClusteringFailure, InvalidParameter


class NonConvergence(Exception):
    """Raised internally when a fit attempt is unusable."""
    pass


class ColorClusterer:
    """Base strategy: validation, one fallback retry, and post-processing."""

    method: str = ""

    def __init__(self, seed: Optional[int] = None):
        self.seed = config.RANDOM_SEED if seed is None else int(seed)

    def fit(self, pixels: np.ndarray, n: int) -> np.ndarray:
        """
        Reduce pixels to exactly n representative colors.

        Args:
            pixels: float array (N, 3) of 0..255 RGB values
            n: Number of clusters

        Returns:
            float array (n, 3) of centroids clipped to [0, 255]

        Raises:
            InvalidParameter: If n is not a positive integer or exceeds the pixel count
            ClusteringFailure: If both the primary and fallback fits fail
        """
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n <= 0:
            raise InvalidParameter("Incorrect n value. Use positive integer only!", field="n")
        pixels = np.asarray(pixels, dtype=np.float64)
        if pixels.ndim != 2 or pixels.shape[1] != 3:
            raise InvalidParameter(f"Expected pixels of shape (N, 3), got {pixels.shape}", field="pixels")
        if n > len(pixels):
            raise InvalidParameter(
                f"Incorrect n value. Requested {n} colors but only {len(pixels)} pixels are available; "
                "increase resize or lower n.",
                field="n",
            )

        logger.info(f"Starting {self.method} clustering with n={n}, {len(pixels)} pixels, seed={self.seed}")

        try:
            centers = self._fit_primary(pixels, n)
        except NonConvergence as e:
            logger.warning(f"{self.method} clustering did not converge ({e}); retrying with fallback")
            try:
                centers = self._fit_fallback(pixels, n)
            except NonConvergence as retry_error:
                logger.error(f"{self.method} fallback clustering failed: {retry_error}")
                raise ClusteringFailure(self.method, n, str(retry_error)) from retry_error

        return np.clip(centers, 0.0, 255.0)

    def _fit_primary(self, pixels: np.ndarray, n: int) -> np.ndarray:
        raise NotImplementedError

    def _fit_fallback(self, pixels: np.ndarray, n: int) -> np.ndarray:
        raise NotImplementedError


def _check_centers(centers: np.ndarray, n: int) -> np.ndarray:
    if centers.shape != (n, 3) or not np.all(np.isfinite(centers)):
        raise NonConvergence("non-finite or missing cluster centers")
    # Distinct as hex codes, not as raw floats
    n_distinct = len(np.unique(np.floor(np.clip(centers, 0.0, 255.0) + 0.5), axis=0))
    if n_distinct < n:
        raise NonConvergence(f"only {n_distinct} distinct colors for {n} clusters")
    return centers


class KMeansClusterer(ColorClusterer):
    """Centroid partitioning minimizing within-cluster squared RGB distance."""

    method = "kmeans"

    def _run(self, model, pixels: np.ndarray, n: int) -> np.ndarray:
        with warnings.catch_warnings():
            warnings.simplefilter("error", ConvergenceWarning)
            try:
                model.fit(pixels)
            except ConvergenceWarning as w:
                raise NonConvergence(str(w)) from w
        return _check_centers(model.cluster_centers_, n)

    def _fit_primary(self, pixels: np.ndarray, n: int) -> np.ndarray:
        model = KMeans(
            n_clusters=n,
            random_state=self.seed,
            n_init="auto",
            max_iter=config.KMEANS_MAX_ITER,
        )
        return self._run(model, pixels, n)

    def _fit_fallback(self, pixels: np.ndarray, n: int) -> np.ndarray:
        model = MiniBatchKMeans(
            n_clusters=n,
            random_state=self.seed,
            batch_size=min(config.MINIBATCH_BATCH_SIZE, len(pixels)),
            n_init="auto",
            max_iter=config.KMEANS_MAX_ITER,
        )
        return self._run(model, pixels, n)


class GaussianMixtureClusterer(ColorClusterer):
    """Mixture modeling: component means of an EM-fitted Gaussian mixture."""

    method = "gaussian_mix"

    def _run(self, model, pixels: np.ndarray, n: int) -> np.ndarray:
        with warnings.catch_warnings():
            # EM is deliberately capped; hitting the cap is not a failure
            warnings.simplefilter("ignore", ConvergenceWarning)
            try:
                model.fit(pixels)
            except (ValueError, np.linalg.LinAlgError) as e:
                raise NonConvergence(str(e)) from e
        return _check_centers(model.means_, n)

    def _model(self, n: int, covariance_type: str, reg_covar: float, means_init=None) -> GaussianMixture:
        return GaussianMixture(
            n_components=n,
            covariance_type=covariance_type,
            init_params="random_from_data",
            max_iter=config.GMM_EM_ITER,
            reg_covar=reg_covar,
            means_init=means_init,
            random_state=self.seed,
        )

    def _initial_means(self, pixels: np.ndarray, n: int) -> np.ndarray:
        # Random-subset seeds refined by a few Lloyd steps
        model = KMeans(
            n_clusters=n,
            init="random",
            n_init=1,
            max_iter=config.GMM_INIT_ITER,
            random_state=self.seed,
        )
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", ConvergenceWarning)
            model.fit(pixels)
        return model.cluster_centers_

    def _fit_primary(self, pixels: np.ndarray, n: int) -> np.ndarray:
        model = self._model(n, "full", 1e-6, means_init=self._initial_means(pixels, n))
        return self._run(model, pixels, n)

    def _fit_fallback(self, pixels: np.ndarray, n: int) -> np.ndarray:
        return self._run(self._model(n, "diag", 1e-2), pixels, n)


CLUSTERERS: Dict[str, Type[ColorClusterer]] = {
    KMeansClusterer.method: KMeansClusterer,
    GaussianMixtureClusterer.method: GaussianMixtureClusterer,
}


def get_clusterer(method: str, seed: Optional[int] = None) -> ColorClusterer:
    """Instantiate the clustering strategy registered under a method name or alias."""
    try:
        cls = CLUSTERERS[config.resolve_method(method)]
    except (KeyError, AttributeError):
        raise InvalidParameter("Incorrect clustering method!", field="method")
    return cls(seed=seed)


def cluster_colors(pixels: np.ndarray, n: int, method: str = "kmeans", seed: Optional[int] = None) -> np.ndarray:
    """Cluster pixels with the named strategy and return (n, 3) centroids."""
    return get_clusterer(method, seed=seed).fit(pixels, n)
