#!/usr/bin/env python
"""
scalp1020 - One-Click Demo

Places the standard 10-20 electrodes on a synthetic hemispherical scalp
built around the configured landmarks, prints the resulting positions and
optionally saves a 3D plot.

Usage:
    python run_demo.py
    python run_demo.py --config configs/default_placement.yaml --plot placement.png
    python run_demo.py --on-unplaceable skip --frame-method svd

Requirements:
    - numpy, scipy, pyyaml
    - matplotlib (only for --plot)
"""

from __future__ import annotations

import argparse
import logging
import sys

from scalp1020.config import load_config_safe
from scalp1020.errors import PlacementError
from scalp1020.logging_config import setup_logging
from scalp1020.placement import Landmarks, electrode_table_from_config, place_electrodes
from scalp1020.simulation import generate_hemisphere_mesh
from scalp1020.validation import validate_landmarks, validate_mesh_buffer


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Place 10-20 electrodes on a synthetic scalp.")
    parser.add_argument("--config", default=None, help="YAML config file (default: configs/default_placement.yaml)")
    parser.add_argument("--frame-method", choices=["normals", "svd"], default=None)
    parser.add_argument("--on-unplaceable", choices=["raise", "skip"], default=None)
    parser.add_argument("--plot", default=None, help="Save a 3D plot to this path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the placement demo."""
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    print()
    print("=" * 60)
    print("  SCALP 10-20 ELECTRODE PLACEMENT")
    print("=" * 60)
    print()

    cfg, messages = load_config_safe(args.config)
    for message in messages:
        print(f"  [config] {message}")

    placement_cfg = cfg["placement"]
    mesh_cfg = cfg["mesh"]
    frame_method = args.frame_method or placement_cfg.get("frame_method", "normals")
    on_unplaceable = args.on_unplaceable or placement_cfg.get("on_unplaceable", "raise")
    min_radius_mm = float(placement_cfg.get("min_radius_mm", 70.0))

    try:
        landmarks = Landmarks.from_mapping(cfg["landmarks"])
    except (PlacementError, ValueError) as e:
        print(f"  [landmarks] {e}")
        return 1
    landmark_check = validate_landmarks(landmarks)
    for warning in landmark_check.warnings:
        print(f"  [landmarks] {warning}")
    if not landmark_check.is_valid:
        for error in landmark_check.errors:
            print(f"  [landmarks] {error}")
        return 1

    mesh = generate_hemisphere_mesh(
        center=landmarks.centroid(),
        radius_mm=float(mesh_cfg.get("radius_mm", 90.0)),
        n_vertices=int(mesh_cfg.get("n_vertices", 4000)),
        noise_mm=float(mesh_cfg.get("noise_mm", 0.0)),
        seed=int(mesh_cfg.get("seed", 42)),
    )
    mesh_check = validate_mesh_buffer(mesh, origin=landmarks.centroid(), min_radius_mm=min_radius_mm)
    print(f"  Scalp mesh: {mesh_check.n_vertices} vertices "
          f"({mesh_check.n_outside_radius} outside {min_radius_mm:.0f} mm)")
    print(f"  Frame method: {frame_method}, unplaceable policy: {on_unplaceable}")
    print()

    try:
        table = electrode_table_from_config(cfg)
        result = place_electrodes(
            landmarks,
            mesh,
            table,
            min_radius_mm=min_radius_mm,
            frame_method=frame_method,
            on_unplaceable=on_unplaceable,
            size_value=float(placement_cfg.get("size_value", 1.0)),
        )
    except (PlacementError, ValueError) as e:
        print(f"  Placement aborted: {e}")
        return 1

    print(f"  {'Name':<8}{'X':>9}{'Y':>9}{'Z':>9}  color")
    print("  " + "-" * 42)
    for electrode in result.electrodes:
        print(f"  {electrode.name:<8}{electrode.x:9.1f}{electrode.y:9.1f}{electrode.z:9.1f}"
              f"  {electrode.color_value:.2f}")
    if result.skipped:
        print(f"\n  Skipped (no polar data): {', '.join(result.skipped)}")
    if result.unplaced:
        print(f"\n  Unplaced: {', '.join(result.unplaced)}")

    if args.plot:
        from scalp1020.visualization import apply_dark_theme, plot_placement, save_placement_plot

        apply_dark_theme()
        fig = plot_placement(mesh, landmarks, result)
        path = save_placement_plot(fig, args.plot)
        print(f"\n  Plot saved: {path}")

    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
