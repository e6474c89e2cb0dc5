"""
Pairwise Euclidean distances between the input points.

The matrix is computed once per run and frozen (non-writeable) afterwards;
every linkage reads its leaf-to-leaf ground truth from it.
"""

from typing import Sequence
import numpy as np

from .errors import AllocationError, InputError
from .logger import get_logger
from .nodes import Point

__all__ = [
    "points_to_array",
    "compute_pairwise_distances",
    "build_distance_matrix",
]

logger = get_logger(__name__)


def points_to_array(points: Sequence[Point]) -> np.ndarray:
    """
    Stack the (x, y) coordinates of the points into an array.

    @param points: sequence of Point records
    @return: 2D float array shape (n_points, 2)
    """
    return np.array([(p.x, p.y) for p in points], dtype=float).reshape(-1, 2)


def compute_pairwise_distances(X: np.ndarray) -> np.ndarray:
    """
    Compute full pairwise Euclidean distance matrix for rows of X.

    Differences are taken coordinate-wise, so D[i, j] and D[j, i] are computed
    from the same squared terms and the diagonal is exactly zero.

    @param X: 2D array, shape (n_samples, n_features). Rows are observations.
    @return: 2D array D shape (n_samples, n_samples) where D[i, j] is the Euclidean
             distance between X[i] and X[j].
    """
    X = np.asarray(X, dtype=float)
    diff = X[:, np.newaxis, :] - X[np.newaxis, :, :]  # (n, n, d)
    return np.sqrt(np.sum(diff * diff, axis=2))


def build_distance_matrix(points: Sequence[Point]) -> np.ndarray:
    """
    Build the read-only distance matrix for a run.

    @param points: sequence of n >= 1 Point records
    @return: non-writeable float array shape (n, n)
    @raises InputError: if points is empty
    @raises AllocationError: if the matrix cannot be allocated
    """
    if len(points) < 1:
        logger.error("Cannot build a distance matrix without points")
        raise InputError("At least one point is required.")
    try:
        D = compute_pairwise_distances(points_to_array(points))
    except MemoryError as exc:
        logger.error(f"Failed to allocate distance matrix for {len(points)} points")
        raise AllocationError(f"Failed to allocate distance matrix for {len(points)} points.") from exc
    D.flags.writeable = False
    logger.debug(f"Built {D.shape[0]}x{D.shape[1]} distance matrix")
    return D
