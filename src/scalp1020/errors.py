"""
Error Taxonomy for Electrode Placement

All failures raised by the placement core are pure-computation failures.
None of them is transient, so callers should never retry; they should keep
the previous electrode set and report the problem.

Missing polar data in the electrode table is deliberately not an error:
such entries are logged and skipped by the placer.
"""

from __future__ import annotations


class PlacementError(Exception):
    """Base class for every failure raised by the placement core."""


class PreconditionError(PlacementError, ValueError):
    """Fewer than four landmarks were supplied."""


class DegenerateGeometryError(PlacementError, ValueError):
    """Landmarks are collinear or coincident, so no frame can be built."""


class UnplaceableElectrodeError(PlacementError):
    """
    No surface vertex satisfies the ray and exclusion-radius constraints.

    Attributes
    ----------
    electrode_name : str
        Name of the canonical electrode that could not be resolved.
    """

    def __init__(self, electrode_name: str, message: str | None = None) -> None:
        self.electrode_name = electrode_name
        if message is None:
            message = (
                f"Electrode '{electrode_name}' is unplaceable: every mesh vertex "
                "is behind the ray origin or inside the exclusion radius"
            )
        super().__init__(message)
