"""
Input Validators for Electrode Placement

Provides friendly validation for:
- Landmark sets (count, finiteness, collinearity, plausibility)
- Scalp mesh buffers (layout, finiteness, coverage outside the exclusion radius)
- YAML configuration file parsing

The placement core raises on bad input. These validators run the same
checks up front and return warnings, errors and recovery suggestions
instead, so a user can fix their inputs before a placement pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np
import yaml

from scalp1020.errors import DegenerateGeometryError, PreconditionError
from scalp1020.geometry.constants import FRAME_METHODS, MIN_SCALP_RADIUS_MM
from scalp1020.geometry.frame import build_frame
from scalp1020.placement.landmarks import Landmarks
from scalp1020.placement.placer import UNPLACEABLE_POLICIES

# Plausible adult nasion-inion distance in mm
NASION_INION_RANGE_MM: tuple[float, float] = (120.0, 300.0)

# Relative difference in tragus-to-centroid distance before warning
TRAGUS_ASYMMETRY_LIMIT: float = 0.25

# Fraction of vertices outside the exclusion radius below which we warn
MIN_SCALP_COVERAGE: float = 0.1


# =============================================================================
# Validation Result Types
# =============================================================================


@dataclass
class LandmarkValidationResult:
    """Result of landmark validation.

    Attributes
    ----------
    is_valid : bool
        True if a subject frame can be built from the landmarks.
    n_landmarks : int
        Number of landmarks supplied.
    nasion_inion_mm : float | None
        Distance between nasion and inion (None if not computed).
    warnings : list[str]
        Non-fatal warnings (e.g., implausible head size).
    errors : list[str]
        Fatal errors (e.g., collinear landmarks).
    recovery_suggestions : list[str]
        Actionable suggestions for fixing issues.
    """

    is_valid: bool
    n_landmarks: int
    nasion_inion_mm: float | None = None
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    recovery_suggestions: list[str] = field(default_factory=list)


@dataclass
class MeshValidationResult:
    """Result of scalp mesh buffer validation.

    Attributes
    ----------
    is_valid : bool
        True if the buffer can be searched for electrode positions.
    n_vertices : int
        Number of complete vertices in the buffer.
    n_outside_radius : int | None
        Vertices at or beyond the exclusion radius (None without an origin).
    warnings : list[str]
        Non-fatal warnings (e.g., sparse scalp coverage).
    errors : list[str]
        Fatal errors (e.g., malformed buffer).
    recovery_suggestions : list[str]
        Actionable suggestions for fixing issues.
    """

    is_valid: bool
    n_vertices: int
    n_outside_radius: int | None = None
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    recovery_suggestions: list[str] = field(default_factory=list)


@dataclass
class ConfigValidationResult:
    """Result of YAML configuration file validation.

    Attributes
    ----------
    is_valid : bool
        True if config loaded and validated successfully.
    config : dict | None
        Loaded configuration (None if load failed).
    file_path : Path | None
        Path to the config file (None if using defaults).
    warnings : list[str]
        Non-fatal warnings (e.g., missing optional fields).
    errors : list[str]
        Fatal errors (e.g., parse failures).
    recovery_suggestions : list[str]
        Actionable suggestions for fixing issues.
    """

    is_valid: bool
    config: dict[str, Any] | None
    file_path: Path | None
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    recovery_suggestions: list[str] = field(default_factory=list)


# =============================================================================
# Landmark Validation
# =============================================================================


def validate_landmarks(landmarks) -> LandmarkValidationResult:
    """
    Check that landmarks can anchor a subject frame.

    Parameters
    ----------
    landmarks : Landmarks, mapping or sequence
        Four landmark positions (nasion, tragusL, tragusR, inion).

    Returns
    -------
    LandmarkValidationResult
        Validation result with is_valid status and diagnostic info.

    Examples
    --------
    >>> result = validate_landmarks(Landmarks.default())
    >>> result.is_valid
    True

    >>> result = validate_landmarks([[0, 85, -40], [0, 0, 0]])
    >>> result.errors
    ['TOO FEW LANDMARKS: ...']
    """
    warnings = []
    errors = []
    suggestions = []

    n_landmarks = 4 if isinstance(landmarks, Landmarks) else len(landmarks)
    if not isinstance(landmarks, Landmarks):
        try:
            if isinstance(landmarks, dict):
                landmarks = Landmarks.from_mapping(landmarks)
            else:
                landmarks = Landmarks.from_points(landmarks)
        except PreconditionError as e:
            errors.append(f"TOO FEW LANDMARKS: {e}")
            suggestions.append(
                "Place all four fiducials: nasion, left tragus, right tragus, inion."
            )
            return LandmarkValidationResult(
                is_valid=False,
                n_landmarks=n_landmarks,
                errors=errors,
                recovery_suggestions=suggestions,
            )
        except ValueError as e:
            errors.append(f"MALFORMED LANDMARK: {e}")
            suggestions.append("Each landmark must be an [x, y, z] triple in mm.")
            return LandmarkValidationResult(
                is_valid=False,
                n_landmarks=n_landmarks,
                errors=errors,
                recovery_suggestions=suggestions,
            )

    points = landmarks.as_array()
    if not np.all(np.isfinite(points)):
        errors.append("NON-FINITE LANDMARK: coordinates contain NaN or infinity.")
        suggestions.append("Re-place the affected fiducial on the scalp surface.")
        return LandmarkValidationResult(
            is_valid=False,
            n_landmarks=n_landmarks,
            errors=errors,
            recovery_suggestions=suggestions,
        )

    nasion_inion = float(np.linalg.norm(landmarks.anterior - landmarks.posterior))

    try:
        build_frame(landmarks.anterior, landmarks.left, landmarks.right, landmarks.posterior)
    except DegenerateGeometryError as e:
        errors.append(f"DEGENERATE LANDMARKS: {e}")
        suggestions.append(
            "The tragus points must lie off the nasion-inion line. "
            "Check that no two fiducials were placed at the same spot."
        )

    lo, hi = NASION_INION_RANGE_MM
    if not lo <= nasion_inion <= hi:
        warnings.append(
            f"IMPLAUSIBLE HEAD SIZE: nasion-inion distance is {nasion_inion:.1f} mm, "
            f"expected [{lo:.0f}, {hi:.0f}] mm for an adult head."
        )
        suggestions.append("Confirm landmark coordinates are in mm, not cm or m.")

    center = landmarks.centroid()
    d_left = float(np.linalg.norm(landmarks.left - center))
    d_right = float(np.linalg.norm(landmarks.right - center))
    asymmetry = abs(d_left - d_right) / max(d_left, d_right, 1e-12)
    if asymmetry > TRAGUS_ASYMMETRY_LIMIT:
        warnings.append(
            f"TRAGUS ASYMMETRY: left/right tragus are {d_left:.1f} mm and "
            f"{d_right:.1f} mm from the centroid ({asymmetry * 100:.0f}% difference)."
        )
        suggestions.append("Check that the left and right tragus were not swapped or misplaced.")

    return LandmarkValidationResult(
        is_valid=len(errors) == 0,
        n_landmarks=n_landmarks,
        nasion_inion_mm=nasion_inion,
        warnings=warnings,
        errors=errors,
        recovery_suggestions=suggestions,
    )


# =============================================================================
# Mesh Validation
# =============================================================================


def validate_mesh_buffer(
    vertices,
    origin=None,
    min_radius_mm: float = MIN_SCALP_RADIUS_MM,
) -> MeshValidationResult:
    """
    Check a scalp mesh vertex buffer before placement.

    Parameters
    ----------
    vertices : array-like
        Flat coordinate buffer or (N, 3) array in mm.
    origin : array-like, optional
        Ray origin (landmark centroid). If given, coverage outside the
        exclusion radius is checked.
    min_radius_mm : float, optional
        Exclusion radius in mm. Default 70 mm.

    Returns
    -------
    MeshValidationResult
        Validation result with is_valid status and diagnostic info.
    """
    warnings = []
    errors = []
    suggestions = []

    arr = np.asarray(vertices, dtype=np.float64)
    if arr.ndim == 1 and arr.size % 3 != 0:
        errors.append(
            f"MALFORMED BUFFER: length {arr.size} is not a multiple of 3 "
            f"({arr.size % 3} trailing values)."
        )
        suggestions.append("Pass vertex coordinates as consecutive x, y, z triplets.")
        return MeshValidationResult(
            is_valid=False,
            n_vertices=arr.size // 3,
            errors=errors,
            recovery_suggestions=suggestions,
        )
    if arr.ndim > 2 or (arr.ndim == 2 and arr.shape[1] != 3):
        errors.append(f"MALFORMED BUFFER: expected flat or (N, 3) array, got shape {arr.shape}.")
        suggestions.append("Reshape vertices to (N, 3) or flatten them.")
        return MeshValidationResult(
            is_valid=False,
            n_vertices=0,
            errors=errors,
            recovery_suggestions=suggestions,
        )

    mesh = arr.reshape(-1, 3)
    n_vertices = mesh.shape[0]

    if n_vertices == 0:
        errors.append("EMPTY MESH: no vertices supplied.")
        suggestions.append("Extract the scalp surface before placing electrodes.")

    if n_vertices > 0 and not np.all(np.isfinite(mesh)):
        n_bad = int(np.sum(~np.all(np.isfinite(mesh), axis=1)))
        errors.append(f"NON-FINITE VERTICES: {n_bad} vertices contain NaN or infinity.")
        suggestions.append("Remove or repair non-finite vertices in the mesh.")

    n_outside = None
    if origin is not None and n_vertices > 0 and not errors:
        radii = np.linalg.norm(mesh - np.asarray(origin, dtype=np.float64), axis=1)
        n_outside = int(np.sum(radii >= min_radius_mm))
        if n_outside == 0:
            errors.append(
                f"NO SCALP VERTICES: every vertex is within {min_radius_mm:.0f} mm "
                "of the landmark centroid."
            )
            suggestions.append(
                "Check mesh and landmarks share the same coordinate space and units, "
                "or lower min_radius_mm for small heads."
            )
        elif n_outside < MIN_SCALP_COVERAGE * n_vertices:
            warnings.append(
                f"SPARSE SCALP COVERAGE: only {n_outside} of {n_vertices} vertices lie "
                f"outside the {min_radius_mm:.0f} mm exclusion radius."
            )
            suggestions.append("Use a finer mesh resolution.")

    return MeshValidationResult(
        is_valid=len(errors) == 0,
        n_vertices=n_vertices,
        n_outside_radius=n_outside,
        warnings=warnings,
        errors=errors,
        recovery_suggestions=suggestions,
    )


# =============================================================================
# Config File Validation
# =============================================================================

REQUIRED_CONFIG_SECTIONS = ["landmarks", "placement", "electrodes"]

# Type specifications for validation
CONFIG_TYPE_SPECS = {
    "placement": {
        "min_radius_mm": (float, 0.0, 200.0),
        "size_value": (float, 0.0, 100.0),
    },
    "mesh": {
        "radius_mm": (float, 10.0, 500.0),
        "n_vertices": (int, 10, 10_000_000),
        "noise_mm": (float, 0.0, 50.0),
    },
}

CONFIG_CHOICES = {
    "placement": {
        "frame_method": FRAME_METHODS,
        "on_unplaceable": UNPLACEABLE_POLICIES,
    },
}


def _check_electrodes(
    electrodes: dict[str, Any],
    warnings: list[str],
    errors: list[str],
) -> None:
    if not isinstance(electrodes, dict):
        errors.append("TYPE ERROR: 'electrodes' must map names to theta_deg/phi_deg.")
        return
    for name, params in electrodes.items():
        params = params or {}
        if not isinstance(params, dict):
            errors.append(
                f"TYPE ERROR: electrodes.{name} must map theta_deg/phi_deg, "
                f"got {type(params).__name__}."
            )
            continue
        theta = params.get("theta_deg")
        phi = params.get("phi_deg")
        if theta is None or phi is None:
            warnings.append(f"MISSING POLAR DATA: electrode '{name}' will be skipped.")
            continue
        try:
            theta = float(theta)
            phi = float(phi)
        except (TypeError, ValueError):
            errors.append(
                f"TYPE ERROR: electrodes.{name} angles must be numbers, "
                f"got theta_deg={params['theta_deg']!r}, phi_deg={params['phi_deg']!r}."
            )
            continue
        if not 0.0 <= theta <= 90.0:
            warnings.append(
                f"RANGE WARNING: electrodes.{name}.theta_deg={theta} is outside [0, 90]."
            )
        if not 0.0 <= phi < 360.0:
            warnings.append(
                f"RANGE WARNING: electrodes.{name}.phi_deg={phi} is outside [0, 360)."
            )


def validate_config_file(
    config_path: Path | str | None = None,
    strict: bool = False,
) -> ConfigValidationResult:
    """
    Load and validate YAML configuration file.

    Provides graceful error handling with helpful messages for:
    - Missing files (falls back to defaults)
    - Malformed YAML (syntax errors)
    - Invalid parameter values (type/range/choice checks)

    Parameters
    ----------
    config_path : Path or str, optional
        Path to YAML config file. If None, uses default_placement.yaml.
    strict : bool
        If True, treat warnings as errors. Default False.

    Returns
    -------
    ConfigValidationResult
        Validation result with loaded config and any issues found.

    Examples
    --------
    >>> result = validate_config_file("nonexistent.yaml")
    >>> result.is_valid
    True  # Falls back to defaults
    >>> len(result.warnings) > 0
    True
    """
    from scalp1020.config import DEFAULT_CONFIG_PATH, get_default_config

    warnings = []
    errors = []
    suggestions = []

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    config = None
    file_exists = config_path.exists()

    if not file_exists:
        warnings.append(
            f"CONFIG FILE NOT FOUND: '{config_path}' does not exist. "
            "Using built-in defaults."
        )
        suggestions.append(
            f"Create config file at '{config_path}' or use load_config() without path."
        )
        config = get_default_config()
    else:
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
            if config is None:
                warnings.append(
                    f"CONFIG FILE EMPTY: '{config_path}' contains no data. "
                    "Using built-in defaults."
                )
                config = get_default_config()
        except yaml.YAMLError as e:
            errors.append(f"YAML PARSE ERROR in '{config_path}': {str(e)}")
            suggestions.append(
                "Check YAML syntax: proper indentation (2 spaces), "
                "colons after keys, no tabs."
            )
            config = get_default_config()
        except IOError as e:
            errors.append(f"FILE READ ERROR for '{config_path}': {str(e)}")
            suggestions.append("Check file permissions and path.")
            config = get_default_config()

    if not isinstance(config, dict):
        errors.append(f"STRUCTURE ERROR: config root in '{config_path}' must be a mapping.")
        config = get_default_config()

    defaults = get_default_config()
    for section in REQUIRED_CONFIG_SECTIONS:
        if section not in config:
            if strict:
                errors.append(f"MISSING REQUIRED SECTION: '{section}' not found in config.")
            else:
                warnings.append(f"MISSING SECTION: '{section}' not found. Using defaults.")
            config[section] = defaults[section]

    for section, specs in CONFIG_TYPE_SPECS.items():
        if not isinstance(config.get(section), dict):
            continue
        for param, (expected_type, min_val, max_val) in specs.items():
            if param not in config[section]:
                continue
            value = config[section][param]

            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(
                    f"TYPE ERROR: {section}.{param} should be {expected_type.__name__}, "
                    f"got {type(value).__name__}."
                )
                continue
            if expected_type is int and not isinstance(value, int):
                warnings.append(
                    f"TYPE WARNING: {section}.{param} should be int, got {value}. Truncating."
                )
                config[section][param] = int(value)

            if value < min_val or value > max_val:
                warnings.append(
                    f"RANGE WARNING: {section}.{param}={value} is outside "
                    f"expected range [{min_val}, {max_val}]."
                )

    for section, choices in CONFIG_CHOICES.items():
        if not isinstance(config.get(section), dict):
            continue
        for param, allowed in choices.items():
            value = config[section].get(param)
            if value is not None and value not in allowed:
                errors.append(
                    f"INVALID CHOICE: {section}.{param}={value!r}, expected one of {list(allowed)}."
                )

    if isinstance(config.get("landmarks"), dict):
        landmark_result = validate_landmarks(config["landmarks"])
        errors.extend(landmark_result.errors)
        warnings.extend(landmark_result.warnings)
        suggestions.extend(landmark_result.recovery_suggestions)
    else:
        errors.append("TYPE ERROR: 'landmarks' must map nasion/tragus_left/tragus_right/inion.")

    _check_electrodes(config.get("electrodes"), warnings, errors)

    is_valid = len(errors) == 0
    if strict:
        is_valid = is_valid and len(warnings) == 0

    return ConfigValidationResult(
        is_valid=is_valid,
        config=config,
        file_path=config_path if file_exists else None,
        warnings=warnings,
        errors=errors,
        recovery_suggestions=suggestions,
    )


# =============================================================================
# Convenience Functions
# =============================================================================


def validate_all(
    landmarks,
    vertices,
    min_radius_mm: float = MIN_SCALP_RADIUS_MM,
    config_path: Path | str | None = None,
) -> dict[str, Any]:
    """
    Run all validators and return combined results.

    Parameters
    ----------
    landmarks : Landmarks, mapping or sequence
        The four fiducials.
    vertices : array-like
        Scalp mesh buffer.
    min_radius_mm : float
        Exclusion radius.
    config_path : Path or str, optional
        Config file path.

    Returns
    -------
    dict
        Dictionary with "landmarks", "mesh", "config" results and
        "all_valid" boolean.
    """
    landmark_result = validate_landmarks(landmarks)

    origin = None
    if landmark_result.is_valid:
        lm = landmarks if isinstance(landmarks, Landmarks) else (
            Landmarks.from_mapping(landmarks) if isinstance(landmarks, dict)
            else Landmarks.from_points(landmarks)
        )
        origin = lm.centroid()

    mesh_result = validate_mesh_buffer(vertices, origin=origin, min_radius_mm=min_radius_mm)
    config_result = validate_config_file(config_path)

    all_valid = (
        landmark_result.is_valid
        and mesh_result.is_valid
        and config_result.is_valid
    )

    return {
        "landmarks": landmark_result,
        "mesh": mesh_result,
        "config": config_result,
        "all_valid": all_valid,
    }
