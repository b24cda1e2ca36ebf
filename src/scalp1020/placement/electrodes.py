"""
Canonical 10-20 Electrode Table

Electrode positions relative to the fiducials, expressed as polar pairs
(theta from the superior pole, clockwise phi from anterior), in the
convention of the EEGLAB Standard-10-10-Cap33 locations.

Usage:
    from scalp1020.placement.electrodes import STANDARD_1020_TABLE, get_electrode

    cz = get_electrode("Cz")
    table = electrode_table_from_config(cfg)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CanonicalElectrode:
    """
    Reference position of a named electrode.

    Attributes
    ----------
    name : str
        Electrode label, e.g. "Cz".
    theta_deg : float or None
        Angle from the superior pole in degrees, [0, 90]. None if the
        table entry carries no polar coordinate.
    phi_deg : float or None
        Clockwise azimuth in degrees, [0, 360): 0 = anterior, 90 = right,
        180 = posterior, 270 = left.
    color_value : float
        Scalar mapped through the renderer's node colormap.
    """

    name: str
    theta_deg: float | None
    phi_deg: float | None
    color_value: float = 0.5

    @property
    def has_polar(self) -> bool:
        """True if both polar angles are present."""
        return self.theta_deg is not None and self.phi_deg is not None


# =============================================================================
# Table Definition
# =============================================================================

# theta steps are fifths of 90 deg, phi steps twentieths of 360 deg
STANDARD_1020_TABLE: tuple[CanonicalElectrode, ...] = (
    CanonicalElectrode("Cz", 0.0, 0.0, 0.02),
    CanonicalElectrode("C5", 3 / 5 * 90, 270.0, 0.1),
    CanonicalElectrode("T7", 4 / 5 * 90, 270.0, 0.2),
    CanonicalElectrode("CP5", 3 / 5 * 90, 14 / 20 * 360, 0.3),
    CanonicalElectrode("TP7", 4 / 5 * 90, 14 / 20 * 360, 0.4),
    CanonicalElectrode("P5", 3 / 5 * 90, 13 / 20 * 360, 0.5),
    CanonicalElectrode("P7", 4 / 5 * 90, 13 / 20 * 360, 0.6),
    # Stimulation target midway between the P5/P7 and CP5/TP7 rings
    CanonicalElectrode("Target", 3.5 / 5 * 90, 13.5 / 20 * 360, 0.7),
)


def get_electrode(name: str) -> CanonicalElectrode:
    """
    Look up an electrode of the standard table by name (case-insensitive).

    Raises
    ------
    KeyError
        If the name is unknown. Lists available names.
    """
    key = name.lower()
    for electrode in STANDARD_1020_TABLE:
        if electrode.name.lower() == key:
            return electrode
    available = ", ".join(e.name for e in STANDARD_1020_TABLE)
    raise KeyError(f"Unknown electrode '{name}'. Available: {available}")


def electrode_table_from_config(config: dict[str, Any]) -> tuple[CanonicalElectrode, ...]:
    """
    Build an electrode table from the ``electrodes`` section of a config.

    Each entry maps a name to ``theta_deg``, ``phi_deg`` and optional
    ``color_value``. Missing angles are kept as None so the placer can
    report and skip them. Entry order is preserved.

    Parameters
    ----------
    config : dict
        Configuration dict with an ``electrodes`` section.

    Returns
    -------
    tuple of CanonicalElectrode
        The table, or STANDARD_1020_TABLE if the config has no entries.

    Examples
    --------
    >>> table = electrode_table_from_config(
    ...     {"electrodes": {"Cz": {"theta_deg": 0, "phi_deg": 0}}}
    ... )
    >>> table[0].name
    'Cz'
    """
    entries = config.get("electrodes")
    if not entries:
        return STANDARD_1020_TABLE

    table = []
    for name, params in entries.items():
        params = params or {}
        theta = params.get("theta_deg")
        phi = params.get("phi_deg")
        table.append(
            CanonicalElectrode(
                name=str(name),
                theta_deg=None if theta is None else float(theta),
                phi_deg=None if phi is None else float(phi),
                color_value=float(params.get("color_value", 0.5)),
            )
        )
    return tuple(table)
