"""
Connectome - Node Graph Shared with the Viewer

The viewer renders fiducials and electrodes as nodes of a connectome
(niivue layout). The first four nodes are always the fiducials in the
order nasion, tragusL, tragusR, inion; every node after them is an
electrode written by the placer.

This module only models the data. Drawing is the viewer's job.

Usage:
    from scalp1020.connectome import Connectome
    from scalp1020.placement import update_placement

    graph = Connectome.default()
    update_placement(graph, mesh)
    graph.to_dict()  # hand to the viewer
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

import numpy as np

from scalp1020.geometry.constants import (
    DRAG_TOLERANCE_MM,
    INION_MM,
    NASION_MM,
    TRAGUS_LEFT_MM,
    TRAGUS_RIGHT_MM,
)
from scalp1020.geometry.vector_math import as_vec3
from scalp1020.placement.landmarks import Landmarks
from scalp1020.placement.placer import PlacedElectrode

logger = logging.getLogger(__name__)

N_FIDUCIALS: int = 4


@dataclass
class ConnectomeNode:
    """A named node; ``color_value`` indexes the node colormap."""

    name: str
    x: float
    y: float
    z: float
    color_value: float = 0.5
    size_value: float = 1.0

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def move_to(self, point) -> None:
        self.x, self.y, self.z = (float(c) for c in as_vec3(point))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "colorValue": self.color_value,
            "sizeValue": self.size_value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConnectomeNode":
        return cls(
            name=str(data["name"]),
            x=float(data["x"]),
            y=float(data["y"]),
            z=float(data["z"]),
            color_value=float(data.get("colorValue", 0.5)),
            size_value=float(data.get("sizeValue", 1.0)),
        )


def _default_fiducials() -> list[ConnectomeNode]:
    return [
        ConnectomeNode("Nasion", *NASION_MM, color_value=0.75),
        ConnectomeNode("TragusL", *TRAGUS_LEFT_MM, color_value=1.0),
        ConnectomeNode("TragusR", *TRAGUS_RIGHT_MM, color_value=0.4),
        ConnectomeNode("Inion", *INION_MM, color_value=0.3),
    ]


@dataclass
class Connectome:
    """
    Fiducial and electrode nodes plus the viewer's colormap settings.

    Attributes
    ----------
    nodes : list[ConnectomeNode]
        Fiducials first, then electrodes.
    name : str
        Connectome name shown by the viewer.
    node_colormap : str
        Colormap applied to node color values.
    node_min_color, node_max_color : float
        Color value range mapped onto the colormap.
    edge_min, edge_max : float
        Edge display range (this graph has no edges).
    """

    nodes: list[ConnectomeNode] = field(default_factory=_default_fiducials)
    name: str = "simpleConnectome"
    node_colormap: str = "actc"
    node_min_color: float = 0.01
    node_max_color: float = 1.0
    edge_min: float = 1.0
    edge_max: float = 0.0
    edges: list[Any] = field(default_factory=list)

    @classmethod
    def default(cls) -> "Connectome":
        """Connectome holding only the reference fiducials."""
        return cls()

    @classmethod
    def from_landmarks(cls, landmarks: Landmarks) -> "Connectome":
        graph = cls()
        for node, point in zip(graph.nodes, landmarks.as_array()):
            node.move_to(point)
        return graph

    @property
    def fiducials(self) -> list[ConnectomeNode]:
        return self.nodes[:N_FIDUCIALS]

    @property
    def electrodes(self) -> list[ConnectomeNode]:
        return self.nodes[N_FIDUCIALS:]

    def landmarks(self) -> Landmarks:
        """
        Landmarks read from the leading fiducial nodes.

        Raises
        ------
        PreconditionError
            If the graph holds fewer than four nodes.
        """
        return Landmarks.from_points([node.position for node in self.nodes])

    def clear_electrodes(self) -> None:
        """Remove every node after the fiducials."""
        del self.nodes[N_FIDUCIALS:]

    def replace_electrodes(self, placed: Iterable[PlacedElectrode]) -> None:
        """Replace the current electrode nodes with a new placement."""
        self.clear_electrodes()
        for electrode in placed:
            self.nodes.append(
                ConnectomeNode(
                    name=electrode.name,
                    x=electrode.x,
                    y=electrode.y,
                    z=electrode.z,
                    color_value=electrode.color_value,
                    size_value=electrode.size_value,
                )
            )

    def move_nearest_node(
        self,
        point,
        tolerance_mm: float = DRAG_TOLERANCE_MM,
        fiducials_only: bool = True,
    ) -> int | None:
        """
        Move the node nearest to ``point`` onto it (drag-to-move).

        Parameters
        ----------
        point : array-like
            Clicked world position in mm.
        tolerance_mm : float, optional
            Clicks farther than this from every candidate are ignored.
        fiducials_only : bool, optional
            If True, candidates are the four fiducials. If False, only the
            last node (the user-placed target) may move.

        Returns
        -------
        int or None
            Index of the moved node, or None if nothing was close enough.
        """
        point = as_vec3(point)
        if not self.nodes:
            return None

        if fiducials_only:
            candidates = range(min(N_FIDUCIALS, len(self.nodes)))
        else:
            candidates = range(len(self.nodes) - 1, len(self.nodes))

        distances = {i: float(np.linalg.norm(self.nodes[i].position - point)) for i in candidates}
        nearest = min(distances, key=distances.get)
        if distances[nearest] > tolerance_mm:
            logger.debug("Click %.1f mm from nearest node, ignored", distances[nearest])
            return None

        self.nodes[nearest].move_to(point)
        logger.info("Moved %s to (%.1f, %.1f, %.1f)", self.nodes[nearest].name, *point)
        return nearest

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the viewer's connectome layout."""
        return {
            "name": self.name,
            "nodeColormap": self.node_colormap,
            "nodeMinColor": self.node_min_color,
            "nodeMaxColor": self.node_max_color,
            "edgeMax": self.edge_max,
            "edgeMin": self.edge_min,
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": list(self.edges),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Connectome":
        return cls(
            nodes=[ConnectomeNode.from_dict(n) for n in data.get("nodes", [])],
            name=data.get("name", "simpleConnectome"),
            node_colormap=data.get("nodeColormap", "actc"),
            node_min_color=float(data.get("nodeMinColor", 0.01)),
            node_max_color=float(data.get("nodeMaxColor", 1.0)),
            edge_min=float(data.get("edgeMin", 1.0)),
            edge_max=float(data.get("edgeMax", 0.0)),
            edges=list(data.get("edges", [])),
        )
