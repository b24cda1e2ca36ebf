"""
Polar Projection - Canonical (theta, phi) to World Directions

Electrode tables give positions as polar pairs:

    theta : degrees away from the superior pole (0 = vertex, 90 = equator)
    phi   : clockwise azimuth seen from above, 0 = anterior, 90 = right,
            180 = posterior, 270 = left

phi is remapped to the counterclockwise-from-X convention with
phi' = 90 - phi, then the standard spherical-to-Cartesian formula gives a
unit vector in frame coordinates, which the frame basis rotates to world
space.
"""

from __future__ import annotations

import numpy as np

from scalp1020.geometry.frame import SubjectFrame


def polar_to_local(theta_deg: float, phi_deg: float) -> np.ndarray:
    """
    Unit direction in frame coordinates for a polar electrode position.

    Examples
    --------
    >>> np.allclose(polar_to_local(90.0, 0.0), [0.0, 1.0, 0.0])
    True
    """
    theta_rad = np.deg2rad(theta_deg)
    phi_rad = np.deg2rad(90.0 - phi_deg)
    return np.array([
        np.sin(theta_rad) * np.cos(phi_rad),
        np.sin(theta_rad) * np.sin(phi_rad),
        np.cos(theta_rad),
    ])


def polar_to_direction(
    theta_deg: float,
    phi_deg: float,
    frame: SubjectFrame | np.ndarray,
) -> np.ndarray:
    """
    Unit ray direction in world space for a polar electrode position.

    Parameters
    ----------
    theta_deg : float
        Angle from the superior pole in degrees.
    phi_deg : float
        Clockwise azimuth from anterior in degrees.
    frame : SubjectFrame or np.ndarray
        Subject frame, or its 3x3 basis (columns X, Y, Z).

    Returns
    -------
    np.ndarray
        Unit vector with shape (3,). theta=0 yields the frame's Z axis for
        any phi; theta=90, phi=0 yields its Y axis.
    """
    basis = frame.basis if isinstance(frame, SubjectFrame) else np.asarray(frame, dtype=np.float64)
    if basis.shape != (3, 3):
        raise ValueError(f"frame basis must have shape (3, 3), got {basis.shape}")
    return basis @ polar_to_local(theta_deg, phi_deg)
