"""
Scalp Mesh Generator - Synthetic Spherical Heads

Stand-in for the mesh extracted from a T1 scan. Vertices are laid out on a
Fibonacci sphere (near-uniform spacing, deterministic), optionally
restricted to the upper or lower hemisphere and jittered radially.

Meshes are returned as flat coordinate buffers (vertex i occupies indices
[3i, 3i+2]), the same layout the mesh extractor hands to the placer.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from scalp1020.geometry.constants import (
    DEFAULT_MESH_VERTEX_COUNT,
    DEFAULT_RANDOM_SEED,
    SCALP_RADIUS_MM,
)
from scalp1020.geometry.vector_math import as_vec3


def fibonacci_sphere(n_points: int) -> np.ndarray:
    """
    Unit vectors spread near-uniformly over the sphere.

    Parameters
    ----------
    n_points : int
        Number of directions.

    Returns
    -------
    np.ndarray
        Unit vectors with shape (n_points, 3). The first point is closest
        to +z and the last closest to -z.
    """
    if n_points < 1:
        raise ValueError(f"n_points must be positive, got {n_points}")

    golden_angle = np.pi * (3.0 - np.sqrt(5.0))
    i = np.arange(n_points, dtype=np.float64)

    z = 1.0 - 2.0 * (i + 0.5) / n_points
    r_xy = np.sqrt(1.0 - z**2)
    azimuth = golden_angle * i

    return np.column_stack([r_xy * np.cos(azimuth), r_xy * np.sin(azimuth), z])


def generate_sphere_mesh(
    center=(0.0, 0.0, 0.0),
    radius_mm: float = SCALP_RADIUS_MM,
    n_vertices: int = DEFAULT_MESH_VERTEX_COUNT,
    noise_mm: float = 0.0,
    seed: int = DEFAULT_RANDOM_SEED,
) -> np.ndarray:
    """
    Generate a full spherical scalp as a flat vertex buffer.

    Parameters
    ----------
    center : array-like, optional
        Sphere center in mm.
    radius_mm : float, optional
        Sphere radius in mm. Default is 90 mm.
    n_vertices : int, optional
        Number of vertices. Default is 4000.
    noise_mm : float, optional
        Standard deviation of radial jitter. Default 0 (exact sphere).
    seed : int, optional
        Random seed for the jitter.

    Returns
    -------
    np.ndarray
        Flat buffer of length 3 * n_vertices.
    """
    center = as_vec3(center)
    directions = fibonacci_sphere(n_vertices)

    radii = np.full(n_vertices, float(radius_mm))
    if noise_mm > 0:
        np.random.seed(seed)
        radii = radii + np.random.normal(0.0, noise_mm, size=n_vertices)

    vertices = center + directions * radii[:, np.newaxis]
    return vertices.astype(np.float64).ravel()


def generate_hemisphere_mesh(
    center=(0.0, 0.0, 0.0),
    radius_mm: float = SCALP_RADIUS_MM,
    n_vertices: int = DEFAULT_MESH_VERTEX_COUNT,
    upper: bool = True,
    offset_mm: float = 0.0,
    noise_mm: float = 0.0,
    seed: int = DEFAULT_RANDOM_SEED,
) -> np.ndarray:
    """
    Generate one hemisphere of a spherical scalp as a flat vertex buffer.

    Vertices of a full ``n_vertices`` sphere are kept if they lie above
    (``upper=True``) or below the horizontal plane ``z = center_z +
    offset_mm``, so the result holds roughly half of ``n_vertices``.

    Parameters
    ----------
    center : array-like, optional
        Sphere center in mm, normally the landmark centroid.
    radius_mm : float, optional
        Sphere radius in mm. Default is 90 mm.
    n_vertices : int, optional
        Vertex count of the full sphere the hemisphere is cut from.
    upper : bool, optional
        Keep the superior (True) or inferior (False) half.
    offset_mm : float, optional
        Height of the cutting plane above the center.
    noise_mm : float, optional
        Standard deviation of radial jitter.
    seed : int, optional
        Random seed for the jitter.

    Returns
    -------
    np.ndarray
        Flat vertex buffer.

    Examples
    --------
    >>> mesh = generate_hemisphere_mesh(n_vertices=1000)
    >>> mesh.reshape(-1, 3)[:, 2].min() >= 0
    True
    """
    center = as_vec3(center)
    vertices = generate_sphere_mesh(center, radius_mm, n_vertices, noise_mm, seed).reshape(-1, 3)

    height = vertices[:, 2] - (center[2] + offset_mm)
    keep = height >= 0 if upper else height < 0

    return vertices[keep].ravel()


def save_scalp_mesh(vertices: np.ndarray, filepath: Path | str) -> Path:
    """Save a flat vertex buffer to a NumPy binary file."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    np.save(filepath, np.asarray(vertices, dtype=np.float64).ravel())
    return filepath


def load_scalp_mesh(filepath: Path | str) -> np.ndarray:
    """Load a flat vertex buffer saved by save_scalp_mesh."""
    return np.load(filepath).ravel()
