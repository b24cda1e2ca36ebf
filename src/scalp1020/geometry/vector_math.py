"""
Vector Math - Minimal 3D Helpers

Thin wrappers over numpy for the handful of operations the placement code
needs beyond the array operators. Addition, subtraction, scaling, dot and
cross products are used directly as ``+``, ``-``, ``*``, ``np.dot`` and
``np.cross``.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from scalp1020.errors import DegenerateGeometryError
from scalp1020.geometry.constants import MIN_VECTOR_LENGTH


def as_vec3(point) -> np.ndarray:
    """
    Coerce a point-like value to a float64 array of shape (3,).

    Raises
    ------
    ValueError
        If the input does not hold exactly three coordinates.
    """
    vec = np.asarray(point, dtype=np.float64)
    if vec.shape != (3,):
        raise ValueError(f"point must have shape (3,), got {vec.shape}")
    return vec


def length(vec: np.ndarray) -> float:
    """Euclidean length of a vector."""
    return float(np.linalg.norm(vec))


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points."""
    return float(np.linalg.norm(np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)))


def normalize(vec: np.ndarray, min_length: float = MIN_VECTOR_LENGTH) -> np.ndarray:
    """
    Return the unit vector along ``vec``.

    Parameters
    ----------
    vec : np.ndarray
        Vector with shape (3,).
    min_length : float, optional
        Shortest vector that may be normalized.

    Returns
    -------
    np.ndarray
        Unit vector with shape (3,).

    Raises
    ------
    DegenerateGeometryError
        If the vector is shorter than ``min_length``.

    Examples
    --------
    >>> normalize(np.array([3.0, 0.0, 4.0]))
    array([0.6, 0. , 0.8])
    """
    vec = np.asarray(vec, dtype=np.float64)
    norm = np.linalg.norm(vec)
    if not np.isfinite(norm) or norm < min_length:
        raise DegenerateGeometryError(
            f"Cannot normalize vector {vec} with length {norm:.3g}"
        )
    return vec / norm


def transform(matrix: np.ndarray, vec: np.ndarray) -> np.ndarray:
    """Apply a 3x3 matrix to a column vector."""
    return np.asarray(matrix, dtype=np.float64) @ np.asarray(vec, dtype=np.float64)


def centroid(points: Iterable) -> np.ndarray:
    """
    Mean position of a set of points.

    Raises
    ------
    ValueError
        If no points are given or they are not 3D.
    """
    arr = np.asarray(list(points), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 3 or arr.shape[0] == 0:
        raise ValueError(f"points must have shape (N, 3) with N > 0, got {arr.shape}")
    return arr.mean(axis=0)
