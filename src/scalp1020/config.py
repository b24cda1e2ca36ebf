"""
Configuration Management for scalp1020

Loads placement parameters from YAML config files with fallback to
hardcoded defaults in geometry.constants and the standard electrode table.

Usage:
    from scalp1020.config import load_config, get_config_path

    cfg = load_config()  # Load default config
    cfg = load_config("configs/custom.yaml")  # Load custom config

    # Access parameters
    radius = cfg["placement"]["min_radius_mm"]
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

# File is at: src/scalp1020/config.py
# Project root: src/scalp1020 -> src -> project_root
_THIS_FILE = Path(__file__)
PROJECT_ROOT = _THIS_FILE.parent.parent.parent

DEFAULT_CONFIG_PATH = PROJECT_ROOT / "configs" / "default_placement.yaml"

REQUIRED_SECTIONS: tuple[str, ...] = ("landmarks", "placement", "electrodes")


def get_config_path(config_name: str = "default_placement.yaml") -> Path:
    """
    Get the full path to a config file.

    Parameters
    ----------
    config_name : str
        Name of the config file (with or without .yaml extension).

    Returns
    -------
    Path
        Full path to the config file.
    """
    if not config_name.endswith(".yaml"):
        config_name = f"{config_name}.yaml"
    return PROJECT_ROOT / "configs" / config_name


def get_default_config() -> dict[str, Any]:
    """
    Return hardcoded default configuration.

    Used as fallback when config file is missing.
    """
    # Import here to avoid circular imports
    from scalp1020.geometry.constants import (
        DEFAULT_ELECTRODE_SIZE,
        DEFAULT_MESH_VERTEX_COUNT,
        DEFAULT_RANDOM_SEED,
        INION_MM,
        MIN_SCALP_RADIUS_MM,
        NASION_MM,
        SCALP_RADIUS_MM,
        TRAGUS_LEFT_MM,
        TRAGUS_RIGHT_MM,
    )
    from scalp1020.placement.electrodes import STANDARD_1020_TABLE

    return {
        "landmarks": {
            "nasion": NASION_MM.tolist(),
            "tragus_left": TRAGUS_LEFT_MM.tolist(),
            "tragus_right": TRAGUS_RIGHT_MM.tolist(),
            "inion": INION_MM.tolist(),
        },
        "placement": {
            "min_radius_mm": MIN_SCALP_RADIUS_MM,
            "frame_method": "normals",
            "on_unplaceable": "raise",
            "size_value": DEFAULT_ELECTRODE_SIZE,
        },
        "electrodes": {
            e.name: {
                "theta_deg": e.theta_deg,
                "phi_deg": e.phi_deg,
                "color_value": e.color_value,
            }
            for e in STANDARD_1020_TABLE
        },
        "mesh": {
            "radius_mm": SCALP_RADIUS_MM,
            "n_vertices": DEFAULT_MESH_VERTEX_COUNT,
            "noise_mm": 0.0,
            "seed": DEFAULT_RANDOM_SEED,
        },
    }


def _read_config(config_path: Path) -> tuple[dict[str, Any] | None, str | None]:
    """Parse a config file. Returns (config, None) or (None, reason)."""
    if not config_path.exists():
        return None, "not found"
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        return None, f"has a YAML parse error ({e}); check indentation and syntax"
    except OSError as e:
        return None, f"cannot be read ({e})"

    if data is None:
        return None, "is empty"
    if not isinstance(data, dict):
        return None, "root must be a mapping"
    return data, None


def load_config_safe(
    config_path: str | Path | None = None,
) -> tuple[dict[str, Any], list[str]]:
    """
    Load configuration, reporting why defaults were used.

    A missing, unreadable, empty or malformed file yields the built-in
    defaults plus one message. Sections absent from a valid file are
    filled from the defaults without a message.

    Parameters
    ----------
    config_path : str or Path, optional
        Path to YAML config file. If None, uses default_placement.yaml.

    Returns
    -------
    tuple[dict, list[str]]
        (config, messages). messages is empty if the file was used.

    Examples
    --------
    >>> cfg, messages = load_config_safe("bad_config.yaml")
    >>> messages
    ['Config file bad_config.yaml not found. Using defaults.']
    """
    config_path = DEFAULT_CONFIG_PATH if config_path is None else Path(config_path)
    config, reason = _read_config(config_path)

    defaults = get_default_config()
    if config is None:
        return defaults, [f"Config file {config_path} {reason}. Using defaults."]

    for section, values in defaults.items():
        config.setdefault(section, values)
    return config, []


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load configuration, silently falling back to defaults.

    Never raises; see load_config_safe for the fallback messages.

    Examples
    --------
    >>> cfg = load_config()
    >>> cfg["placement"]["min_radius_mm"]
    70.0
    """
    return load_config_safe(config_path)[0]


def save_config(config: dict[str, Any], config_path: str | Path) -> Path:
    """Write a configuration dict as YAML, creating parent directories."""
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(yaml.safe_dump(config, sort_keys=False), encoding="utf-8")
    return config_path
