"""
Placement Module

Canonical electrode table, landmark sets and the pipeline that resolves
each electrode onto a scalp mesh.
"""

from __future__ import annotations

from scalp1020.placement.electrodes import (
    STANDARD_1020_TABLE,
    CanonicalElectrode,
    electrode_table_from_config,
    get_electrode,
)
from scalp1020.placement.landmarks import LANDMARK_ROLES, Landmarks
from scalp1020.placement.placer import (
    PlacedElectrode,
    PlacementResult,
    place_electrodes,
    update_placement,
)

__all__ = [
    "STANDARD_1020_TABLE",
    "CanonicalElectrode",
    "electrode_table_from_config",
    "get_electrode",
    "LANDMARK_ROLES",
    "Landmarks",
    "PlacedElectrode",
    "PlacementResult",
    "place_electrodes",
    "update_placement",
]
