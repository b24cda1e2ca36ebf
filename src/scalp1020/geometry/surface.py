"""
Surface Locator - Nearest Scalp Vertex to a Ray

For a ray from the landmark centroid along an electrode direction, find the
mesh vertex with the smallest perpendicular distance to the ray:

    d(v) = |(v - o) x u| / |u|

Vertices behind the origin (dot(v - o, u) < 0) score +inf. Vertices closer
than ``min_radius_mm`` to the origin are excluded; without this, mesh noise
near the head center (ear canals) can win on ray distance alone.

The scan is a vectorized linear pass over all vertices. Scalp meshes have
thousands of vertices and the search runs once per electrode, so no spatial
index is kept.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from scalp1020.geometry.constants import MIN_SCALP_RADIUS_MM
from scalp1020.geometry.vector_math import as_vec3


@dataclass(frozen=True, eq=False)
class SurfaceHit:
    """
    A resolved surface vertex.

    Attributes
    ----------
    index : int
        Vertex index in the mesh buffer (vertex i occupies [3i, 3i+2]).
    point : np.ndarray
        Vertex position, shape (3,), in mm.
    ray_distance_mm : float
        Perpendicular distance from the vertex to the ray.
    radius_mm : float
        Distance from the ray origin to the vertex.
    """

    index: int
    point: np.ndarray
    ray_distance_mm: float
    radius_mm: float


def as_vertex_array(vertices) -> np.ndarray:
    """
    Interpret a scalp mesh as an (N, 3) float64 vertex array.

    Parameters
    ----------
    vertices : array-like
        Flat buffer of coordinate triplets (length 3N) or an (N, 3) array.

    Returns
    -------
    np.ndarray
        Vertex positions with shape (N, 3).

    Raises
    ------
    ValueError
        If a flat buffer length is not a multiple of 3 or a 2D array does
        not have three columns.

    Examples
    --------
    >>> as_vertex_array([0, 0, 1, 0, 0, 2]).shape
    (2, 3)
    """
    arr = np.asarray(vertices, dtype=np.float64)
    if arr.ndim == 1:
        if arr.size % 3 != 0:
            raise ValueError(
                f"flat vertex buffer length must be a multiple of 3, got {arr.size}"
            )
        return arr.reshape(-1, 3)
    if arr.ndim == 2 and arr.shape[1] == 3:
        return arr
    raise ValueError(f"vertices must be a flat buffer or shape (N, 3), got {arr.shape}")


def ray_distances(
    vertices: np.ndarray,
    origin: np.ndarray,
    direction: np.ndarray,
) -> np.ndarray:
    """
    Perpendicular distance from each vertex to a ray.

    Parameters
    ----------
    vertices : np.ndarray
        Vertex positions with shape (N, 3).
    origin : np.ndarray
        Ray origin with shape (3,).
    direction : np.ndarray
        Ray direction with shape (3,); need not be unit length.

    Returns
    -------
    np.ndarray
        Distances with shape (N,). Vertices behind the origin get +inf.
    """
    vertices = as_vertex_array(vertices)
    origin = as_vec3(origin)
    direction = as_vec3(direction)

    direction_norm = np.linalg.norm(direction)
    if direction_norm == 0.0:
        raise ValueError("ray direction must be non-zero")

    offsets = vertices - origin
    along = offsets @ direction
    distances = np.linalg.norm(np.cross(offsets, direction), axis=1) / direction_norm

    return np.where(along < 0, np.inf, distances)


def locate_surface_point(
    origin,
    direction,
    vertices,
    min_radius_mm: float = MIN_SCALP_RADIUS_MM,
) -> SurfaceHit | None:
    """
    Find the scalp vertex nearest to a ray, outside the exclusion radius.

    Parameters
    ----------
    origin : array-like
        Ray origin (landmark centroid) in mm.
    direction : array-like
        Ray direction in world space.
    vertices : array-like
        Flat vertex buffer or (N, 3) array in mm.
    min_radius_mm : float, optional
        Vertices closer than this to ``origin`` are ignored. Default 70 mm.

    Returns
    -------
    SurfaceHit or None
        The best vertex, or None if every vertex is behind the origin or
        inside the exclusion radius. Vertices with non-finite coordinates
        are ignored. Ties resolve to the lowest index.

    Examples
    --------
    >>> verts = [0, 0, 50, 1, 0, 100]
    >>> hit = locate_surface_point([0, 0, 0], [0, 0, 1], verts, min_radius_mm=70)
    >>> hit.index
    1
    """
    vertices = as_vertex_array(vertices)
    origin = as_vec3(origin)

    distances = ray_distances(vertices, origin, direction)
    radii = np.linalg.norm(vertices - origin, axis=1)

    # NaN vertices would otherwise pass the radius test and win argmin
    usable = (radii >= min_radius_mm) & np.isfinite(distances)
    candidates = np.where(usable, distances, np.inf)
    if candidates.size == 0 or not np.isfinite(candidates).any():
        return None

    index = int(np.argmin(candidates))
    return SurfaceHit(
        index=index,
        point=vertices[index].copy(),
        ray_distance_mm=float(candidates[index]),
        radius_mm=float(radii[index]),
    )
