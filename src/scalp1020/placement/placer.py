"""
Electrode Placer - Landmarks + Scalp Mesh to Named Electrode Positions

Pipeline, run in full on every invocation (initial load, landmark edit,
mesh resolution change):

1. Build the subject frame once from the four landmarks.
2. For each table entry, turn its polar pair into a world-space ray from
   the landmark centroid.
3. Pick the scalp vertex nearest to that ray outside the exclusion radius.

There is no state between runs. The result replaces any previous
electrode set.

Unplaceable policy
------------------
``on_unplaceable="raise"`` (default) is all-or-nothing: the first electrode
with no valid vertex raises UnplaceableElectrodeError and nothing is
returned. ``on_unplaceable="skip"`` records the electrode in
``PlacementResult.unplaced`` and keeps going.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Sequence

import numpy as np

from scalp1020.errors import UnplaceableElectrodeError
from scalp1020.geometry.constants import DEFAULT_ELECTRODE_SIZE, MIN_SCALP_RADIUS_MM
from scalp1020.geometry.frame import SubjectFrame, build_frame
from scalp1020.geometry.projection import polar_to_direction
from scalp1020.geometry.surface import as_vertex_array, locate_surface_point
from scalp1020.placement.electrodes import STANDARD_1020_TABLE, CanonicalElectrode
from scalp1020.placement.landmarks import Landmarks

if TYPE_CHECKING:
    from scalp1020.connectome import Connectome

logger = logging.getLogger(__name__)

UNPLACEABLE_POLICIES: tuple[str, ...] = ("raise", "skip")


@dataclass(frozen=True, eq=False)
class PlacedElectrode:
    """
    An electrode resolved onto the scalp.

    Attributes
    ----------
    name : str
        Electrode label.
    position : np.ndarray
        Scalp vertex position, shape (3,), in mm.
    color_value : float
        Colormap scalar copied from the table.
    size_value : float
        Node size for the renderer.
    vertex_index : int
        Index of the chosen vertex in the mesh buffer.
    """

    name: str
    position: np.ndarray
    color_value: float
    size_value: float = DEFAULT_ELECTRODE_SIZE
    vertex_index: int = -1

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    @property
    def z(self) -> float:
        return float(self.position[2])

    def to_node(self) -> dict[str, Any]:
        """Node record in the layout the rendering graph expects."""
        return {
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "colorValue": self.color_value,
            "sizeValue": self.size_value,
        }


@dataclass
class PlacementResult:
    """
    Outcome of a placement run.

    Attributes
    ----------
    electrodes : list[PlacedElectrode]
        Placed electrodes in table order.
    frame : SubjectFrame
        Frame the directions were computed in.
    skipped : list[str]
        Table entries without polar coordinates.
    unplaced : list[str]
        Electrodes with no valid surface vertex (only with the "skip" policy).
    """

    electrodes: list[PlacedElectrode]
    frame: SubjectFrame
    skipped: list[str] = field(default_factory=list)
    unplaced: list[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True if every electrode with polar data was placed."""
        return len(self.unplaced) == 0

    @property
    def names(self) -> list[str]:
        return [e.name for e in self.electrodes]

    def positions(self) -> np.ndarray:
        """Electrode positions stacked as an (N, 3) array."""
        if not self.electrodes:
            return np.empty((0, 3))
        return np.vstack([e.position for e in self.electrodes])

    def to_nodes(self) -> list[dict[str, Any]]:
        return [e.to_node() for e in self.electrodes]


def _as_landmarks(landmarks: Landmarks | Sequence[Any]) -> Landmarks:
    if isinstance(landmarks, Landmarks):
        return landmarks
    return Landmarks.from_points(landmarks)


def place_electrodes(
    landmarks: Landmarks | Sequence[Any],
    vertices,
    table: Iterable[CanonicalElectrode] = STANDARD_1020_TABLE,
    *,
    min_radius_mm: float = MIN_SCALP_RADIUS_MM,
    frame_method: str = "normals",
    on_unplaceable: str = "raise",
    size_value: float = DEFAULT_ELECTRODE_SIZE,
) -> PlacementResult:
    """
    Place every table electrode on the scalp mesh.

    Parameters
    ----------
    landmarks : Landmarks or sequence
        The four fiducials, or an ordered sequence of at least four points
        (nasion, tragusL, tragusR, inion; extras ignored).
    vertices : array-like
        Scalp mesh as a flat coordinate buffer or (N, 3) array, in mm.
    table : iterable of CanonicalElectrode, optional
        Electrodes to place. Default is the standard 8-entry table.
    min_radius_mm : float, optional
        Exclusion radius around the landmark centroid. Default 70 mm.
    frame_method : {"normals", "svd"}, optional
        Superior-axis estimator passed to build_frame.
    on_unplaceable : {"raise", "skip"}, optional
        Policy for electrodes with no valid surface vertex.
    size_value : float, optional
        Node size assigned to every placed electrode.

    Returns
    -------
    PlacementResult
        Placed electrodes in table order, plus skipped/unplaced names.

    Raises
    ------
    PreconditionError
        If fewer than four landmarks are supplied.
    DegenerateGeometryError
        If the landmarks cannot define a frame.
    UnplaceableElectrodeError
        With ``on_unplaceable="raise"``, for the first unresolvable electrode.
    ValueError
        If the mesh buffer is malformed or the policy is unknown.

    Examples
    --------
    >>> from scalp1020.simulation import generate_hemisphere_mesh
    >>> lm = Landmarks.default()
    >>> mesh = generate_hemisphere_mesh(center=lm.centroid())
    >>> result = place_electrodes(lm, mesh)
    >>> result.names[:3]
    ['Cz', 'C5', 'T7']
    """
    if on_unplaceable not in UNPLACEABLE_POLICIES:
        raise ValueError(
            f"on_unplaceable must be one of {UNPLACEABLE_POLICIES}, got {on_unplaceable!r}"
        )

    landmarks = _as_landmarks(landmarks)
    mesh = as_vertex_array(vertices)

    frame = build_frame(
        landmarks.anterior,
        landmarks.left,
        landmarks.right,
        landmarks.posterior,
        method=frame_method,
    )
    origin = frame.origin

    placed: list[PlacedElectrode] = []
    skipped: list[str] = []
    unplaced: list[str] = []

    for electrode in table:
        if not electrode.has_polar:
            logger.warning("%s: no polar coordinate, skipping", electrode.name)
            skipped.append(electrode.name)
            continue

        direction = polar_to_direction(electrode.theta_deg, electrode.phi_deg, frame)
        hit = locate_surface_point(origin, direction, mesh, min_radius_mm=min_radius_mm)

        if hit is None:
            if on_unplaceable == "raise":
                raise UnplaceableElectrodeError(electrode.name)
            logger.warning("%s: no scalp vertex outside %.1f mm, leaving unplaced",
                           electrode.name, min_radius_mm)
            unplaced.append(electrode.name)
            continue

        logger.debug(
            "%s: vertex %d at %.1f mm from centroid, %.2f mm off ray",
            electrode.name, hit.index, hit.radius_mm, hit.ray_distance_mm,
        )
        placed.append(
            PlacedElectrode(
                name=electrode.name,
                position=hit.point,
                color_value=electrode.color_value,
                size_value=size_value,
                vertex_index=hit.index,
            )
        )

    logger.info("Placed %d electrodes (%d skipped, %d unplaced)",
                len(placed), len(skipped), len(unplaced))

    return PlacementResult(electrodes=placed, frame=frame, skipped=skipped, unplaced=unplaced)


def update_placement(
    connectome: "Connectome",
    vertices,
    table: Iterable[CanonicalElectrode] = STANDARD_1020_TABLE,
    **kwargs,
) -> PlacementResult:
    """
    Run placement from a connectome's fiducials and replace its electrodes.

    The connectome is only modified after placement succeeds, so on any
    error its previous electrode set is left untouched.

    Parameters
    ----------
    connectome : Connectome
        Graph whose first four nodes are the fiducials.
    vertices : array-like
        Scalp mesh buffer.
    table : iterable of CanonicalElectrode, optional
        Electrodes to place.
    **kwargs
        Forwarded to place_electrodes.

    Returns
    -------
    PlacementResult
    """
    result = place_electrodes(connectome.landmarks(), vertices, table, **kwargs)
    connectome.replace_electrodes(result.electrodes)
    return result
