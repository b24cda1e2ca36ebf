"""
Validation Module for scalp1020

Provides up-front checks of landmarks, scalp meshes and config files with
human-readable warnings and recovery suggestions.
"""

from __future__ import annotations

from scalp1020.validation.input_validators import (
    ConfigValidationResult,
    LandmarkValidationResult,
    MeshValidationResult,
    validate_all,
    validate_config_file,
    validate_landmarks,
    validate_mesh_buffer,
)

__all__ = [
    "LandmarkValidationResult",
    "MeshValidationResult",
    "ConfigValidationResult",
    "validate_landmarks",
    "validate_mesh_buffer",
    "validate_config_file",
    "validate_all",
]
