"""
Landmarks - The Four Fiducials Anchoring the Subject Frame

A Landmarks instance is immutable. Repositioning a fiducial (drag-to-move
in the host viewer) produces a new instance via ``with_moved`` and the
placement is recomputed from scratch.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Sequence

import numpy as np

from scalp1020.errors import PreconditionError
from scalp1020.geometry.constants import (
    INION_MM,
    NASION_MM,
    TRAGUS_LEFT_MM,
    TRAGUS_RIGHT_MM,
)
from scalp1020.geometry.vector_math import as_vec3

LANDMARK_ROLES: tuple[str, ...] = ("anterior", "left", "right", "posterior")

# Anatomical names accepted in config files and mappings
ROLE_ALIASES: dict[str, str] = {
    "nasion": "anterior",
    "tragus_left": "left",
    "tragusl": "left",
    "tragus_right": "right",
    "tragusr": "right",
    "inion": "posterior",
}


@dataclass(frozen=True, eq=False)
class Landmarks:
    """
    Nasion, left tragus, right tragus and inion in scanner space (mm).

    Examples
    --------
    >>> lm = Landmarks.from_points([[0, 85, -40], [-82, -16, -35],
    ...                             [80, -6, -35], [0, -120, -30]])
    >>> lm.centroid()
    array([ -0.5 , -14.25, -35.  ])
    """

    anterior: np.ndarray
    left: np.ndarray
    right: np.ndarray
    posterior: np.ndarray

    def __post_init__(self) -> None:
        for role in LANDMARK_ROLES:
            object.__setattr__(self, role, as_vec3(getattr(self, role)))

    @classmethod
    def from_points(cls, points: Sequence[Any]) -> "Landmarks":
        """
        Build from an ordered sequence (anterior, left, right, posterior).

        Extra points beyond the first four are ignored, as when reading
        the leading fiducial nodes of a graph that also holds electrodes.

        Raises
        ------
        PreconditionError
            If fewer than four points are supplied.
        """
        points = list(points)
        if len(points) < 4:
            raise PreconditionError(
                f"Electrode placement needs 4 landmarks (nasion, tragusL, tragusR, "
                f"inion), got {len(points)}"
            )
        return cls(*points[:4])

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Landmarks":
        """
        Build from a mapping keyed by role or anatomical name.

        Accepts anterior/left/right/posterior or nasion/tragus_left/
        tragus_right/inion (case-insensitive).

        Raises
        ------
        PreconditionError
            If any of the four roles is missing.
        """
        resolved = {}
        for key, value in mapping.items():
            role = key.lower()
            role = ROLE_ALIASES.get(role, role)
            if role in LANDMARK_ROLES:
                resolved[role] = value

        missing = [role for role in LANDMARK_ROLES if role not in resolved]
        if missing:
            raise PreconditionError(f"Missing landmarks: {', '.join(missing)}")
        return cls(**resolved)

    @classmethod
    def default(cls) -> "Landmarks":
        """Reference template landmarks."""
        return cls(NASION_MM, TRAGUS_LEFT_MM, TRAGUS_RIGHT_MM, INION_MM)

    def as_array(self) -> np.ndarray:
        """Landmarks stacked as a (4, 3) array in role order."""
        return np.vstack([getattr(self, role) for role in LANDMARK_ROLES])

    def centroid(self) -> np.ndarray:
        """Mean of the four landmarks."""
        return self.as_array().mean(axis=0)

    def with_moved(self, role: str, point) -> "Landmarks":
        """Return a copy with one landmark repositioned."""
        role = ROLE_ALIASES.get(role.lower(), role.lower())
        if role not in LANDMARK_ROLES:
            raise KeyError(f"Unknown landmark role '{role}'. Available: {', '.join(LANDMARK_ROLES)}")
        return replace(self, **{role: point})
