"""
Subject Frame - Orthonormal Head Coordinates from Four Landmarks

Builds a subject-specific coordinate frame from the nasion (anterior),
left and right tragus, and inion (posterior):

    X : left -> right
    Y : posterior -> anterior (inion -> nasion)
    Z : inferior -> superior

The four landmarks are rarely coplanar, so the superior axis is not taken
from a single triangle. Two estimators are available:

normals (default)
    Unit normals of triangles (nasion, tragusL, inion) and
    (nasion, tragusR, inion), each flipped to point up (z >= 0 in world
    space), averaged and renormalized.

svd
    Normal of the least-squares plane through the four centered landmarks
    (smallest right singular vector), flipped to point up.

Y is the nasion-inion line. X = Y x Z, and Z is then re-derived as X x Y
so the basis is exactly orthonormal. The tragus points therefore only
influence the tilt of Z; they are not required to be symmetric.

The "up" flip assumes roughly anatomical orientation in scanner space.
Heads rotated by more than 90 degrees about a horizontal axis will get
an inverted frame.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy import linalg

from scalp1020.errors import DegenerateGeometryError
from scalp1020.geometry.constants import DEGENERATE_SINE_TOLERANCE, FRAME_METHODS
from scalp1020.geometry.vector_math import as_vec3, centroid, normalize


@dataclass(frozen=True, eq=False)
class SubjectFrame:
    """
    Orthonormal subject frame.

    Attributes
    ----------
    basis : np.ndarray
        3x3 matrix whose columns are the X (right), Y (anterior) and
        Z (superior) unit axes in world coordinates.
    origin : np.ndarray
        Centroid of the four landmarks, shape (3,), in mm.
    """

    basis: np.ndarray
    origin: np.ndarray

    @property
    def x_axis(self) -> np.ndarray:
        return self.basis[:, 0]

    @property
    def y_axis(self) -> np.ndarray:
        return self.basis[:, 1]

    @property
    def z_axis(self) -> np.ndarray:
        return self.basis[:, 2]

    def to_world(self, local: np.ndarray) -> np.ndarray:
        """Rotate a direction (or (N, 3) directions) from frame to world axes."""
        local = np.asarray(local, dtype=np.float64)
        return local @ self.basis.T

    def to_local(self, world: np.ndarray) -> np.ndarray:
        """Rotate a direction (or (N, 3) directions) from world to frame axes."""
        world = np.asarray(world, dtype=np.float64)
        return world @ self.basis


def triangle_normal(v0: np.ndarray, v1: np.ndarray, v2: np.ndarray) -> np.ndarray:
    """
    Unit normal of a triangle, flipped so its world z component is >= 0.

    Raises
    ------
    DegenerateGeometryError
        If the triangle is collinear within DEGENERATE_SINE_TOLERANCE.
    """
    edge1 = v1 - v0
    edge2 = v2 - v0
    normal = np.cross(edge1, edge2)

    # |e1 x e2| = |e1| |e2| sin(angle); compare the sine, not raw mm^2
    scale = np.linalg.norm(edge1) * np.linalg.norm(edge2)
    if scale == 0.0 or np.linalg.norm(normal) <= DEGENERATE_SINE_TOLERANCE * scale:
        raise DegenerateGeometryError(
            f"Landmarks {v0.tolist()}, {v1.tolist()}, {v2.tolist()} are collinear; "
            "cannot estimate the superior axis"
        )

    normal = normalize(normal)
    if normal[2] < 0:
        normal = -normal
    return normal


def _superior_from_normals(anterior, left, right, posterior) -> np.ndarray:
    normals = [
        triangle_normal(anterior, left, posterior),
        triangle_normal(anterior, right, posterior),
    ]
    return normalize(np.sum(normals, axis=0))


def _superior_from_svd(anterior, left, right, posterior) -> np.ndarray:
    points = np.vstack([anterior, left, right, posterior])
    centered = points - points.mean(axis=0)

    _, singular_values, vt = linalg.svd(centered)

    # Collinear (or coincident) landmarks span at most one direction
    if singular_values[0] == 0.0 or singular_values[1] <= DEGENERATE_SINE_TOLERANCE * singular_values[0]:
        raise DegenerateGeometryError(
            "Landmarks are collinear; no best-fit plane exists"
        )

    normal = normalize(vt[2])
    if normal[2] < 0:
        normal = -normal
    return normal


def build_frame(
    anterior,
    left,
    right,
    posterior,
    method: str = "normals",
) -> SubjectFrame:
    """
    Construct the subject frame from the four landmarks.

    Parameters
    ----------
    anterior, left, right, posterior : array-like
        Nasion, left tragus, right tragus and inion positions in mm.
    method : {"normals", "svd"}, optional
        Superior-axis estimator. Default is "normals".

    Returns
    -------
    SubjectFrame
        Orthonormal basis (columns X, Y, Z) and landmark centroid.

    Raises
    ------
    DegenerateGeometryError
        If a landmark triangle is collinear, the nasion and inion coincide,
        or the nasion-inion line is parallel to the superior axis.
    ValueError
        If ``method`` is unknown or a landmark is not a 3D point.

    Examples
    --------
    >>> frame = build_frame([0, 85, -40], [-82, -16, -35], [80, -6, -35], [0, -120, -30])
    >>> np.allclose(frame.basis.T @ frame.basis, np.eye(3))
    True
    """
    if method not in FRAME_METHODS:
        raise ValueError(f"method must be one of {FRAME_METHODS}, got {method!r}")

    anterior = as_vec3(anterior)
    left = as_vec3(left)
    right = as_vec3(right)
    posterior = as_vec3(posterior)

    if method == "svd":
        vec_z = _superior_from_svd(anterior, left, right, posterior)
    else:
        vec_z = _superior_from_normals(anterior, left, right, posterior)

    vec_y = normalize(anterior - posterior)
    vec_x = normalize(np.cross(vec_y, vec_z))
    vec_z = np.cross(vec_x, vec_y)

    basis = np.column_stack([vec_x, vec_y, vec_z])
    origin = centroid([anterior, left, right, posterior])

    return SubjectFrame(basis=basis, origin=origin)
