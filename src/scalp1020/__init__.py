"""
scalp1020 - Landmark-Anchored 10-20 Electrode Placement

This package derives standard EEG electrode positions on an individual
scalp mesh from four anatomical landmarks:
- Geometry: vector helpers, subject frame, polar projection, ray/surface search
- Placement: canonical electrode table, landmark sets, the placement pipeline
- Simulation: synthetic hemispherical scalp meshes
- Visualization: dark lab theme and 3D placement plots

Usage:
    # After installing with: pip install -e .
    from scalp1020.placement import Landmarks, place_electrodes, STANDARD_1020_TABLE
    from scalp1020.simulation import generate_hemisphere_mesh
    from scalp1020.config import load_config
"""

__version__ = "0.1.0"
__all__ = [
    "geometry",
    "placement",
    "simulation",
    "visualization",
    "validation",
    "config",
    "connectome",
    "errors",
]
