"""
Geometric Constants for Scalp Electrode Placement

All lengths are in mm (scanner/world space) and all angles in degrees,
matching the units of the landmark coordinates and scalp meshes.
"""

from __future__ import annotations

import numpy as np

# =============================================================================
# Surface Search
# =============================================================================

# Vertices closer than this to the landmark centroid are never selected.
# Adult skull minimum radius is ~70mm; anything inside is ear canal or
# mesh noise near the head center. Heuristic, not derived from the mesh.
MIN_SCALP_RADIUS_MM: float = 70.0

# =============================================================================
# Frame Construction
# =============================================================================

# A landmark triangle whose edge vectors enclose an angle with
# |sin(angle)| below this is treated as collinear.
DEGENERATE_SINE_TOLERANCE: float = 1e-6

# Vectors shorter than this cannot be normalized.
MIN_VECTOR_LENGTH: float = 1e-9

FRAME_METHODS: tuple[str, ...] = ("normals", "svd")

# =============================================================================
# Reference Head (MNI-like template landmarks)
# =============================================================================

NASION_MM: np.ndarray = np.array([0.0, 85.0, -40.0])
TRAGUS_LEFT_MM: np.ndarray = np.array([-82.0, -16.0, -35.0])
TRAGUS_RIGHT_MM: np.ndarray = np.array([80.0, -6.0, -35.0])
INION_MM: np.ndarray = np.array([0.0, -120.0, -30.0])

# =============================================================================
# Placement Output
# =============================================================================

DEFAULT_ELECTRODE_SIZE: float = 1.0

# =============================================================================
# Synthetic Scalp Mesh
# =============================================================================

SCALP_RADIUS_MM: float = 90.0
DEFAULT_MESH_VERTEX_COUNT: int = 4000
DEFAULT_RANDOM_SEED: int = 42

# =============================================================================
# Interactive Editing
# =============================================================================

# Clicks farther than this from every movable node are ignored.
DRAG_TOLERANCE_MM: float = 75.0
