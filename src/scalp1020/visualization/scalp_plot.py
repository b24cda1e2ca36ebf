"""
Placement Plot - Scalp, Fiducials, Frame and Electrodes in 3D

Quick-look rendering of a placement run for inspection and reports. The
interactive viewer is a separate application; this only draws static
matplotlib figures.
"""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from scalp1020.geometry.surface import as_vertex_array
from scalp1020.placement.landmarks import Landmarks
from scalp1020.placement.placer import PlacementResult
from scalp1020.visualization.theme import COLORS, ELECTRODE_CMAP, setup_axis_style

FIDUCIAL_LABELS: tuple[str, ...] = ("Nasion", "TragusL", "TragusR", "Inion")


def plot_placement(
    vertices,
    landmarks: Landmarks,
    result: PlacementResult,
    ax=None,
    max_scalp_points: int = 3000,
    axis_length_mm: float = 40.0,
    title: str = "10-20 ELECTRODE PLACEMENT",
):
    """
    Draw a placement result on a 3D axis.

    Parameters
    ----------
    vertices : array-like
        Scalp mesh buffer in mm.
    landmarks : Landmarks
        Fiducials used for the placement.
    result : PlacementResult
        Output of place_electrodes.
    ax : mpl_toolkits.mplot3d.Axes3D, optional
        Axis to draw into. A new figure is created if None.
    max_scalp_points : int, optional
        Scalp vertices are subsampled to at most this many points.
    axis_length_mm : float, optional
        Length of the drawn frame axes.
    title : str, optional
        Axis title.

    Returns
    -------
    matplotlib.figure.Figure
        Figure containing the axis.
    """
    if ax is None:
        fig = plt.figure(figsize=(8, 7))
        ax = fig.add_subplot(projection="3d")
    else:
        fig = ax.figure

    setup_axis_style(ax, title)

    mesh = as_vertex_array(vertices)
    step = max(1, int(np.ceil(mesh.shape[0] / max_scalp_points)))
    scalp = mesh[::step]
    ax.scatter(scalp[:, 0], scalp[:, 1], scalp[:, 2], s=1, c=COLORS["scalp"], alpha=0.3)

    fiducials = landmarks.as_array()
    ax.scatter(
        fiducials[:, 0], fiducials[:, 1], fiducials[:, 2],
        s=60, c=COLORS["fiducial"], marker="^", label="fiducials",
    )
    for label, point in zip(FIDUCIAL_LABELS, fiducials):
        ax.text(*point, f" {label}", color=COLORS["fiducial"], fontsize=7)

    origin = result.frame.origin
    for column, key in enumerate(("frame_x", "frame_y", "frame_z")):
        axis = result.frame.basis[:, column] * axis_length_mm
        ax.quiver(*origin, *axis, color=COLORS[key], linewidth=1.5)

    if result.electrodes:
        positions = result.positions()
        color_values = [e.color_value for e in result.electrodes]
        ax.scatter(
            positions[:, 0], positions[:, 1], positions[:, 2],
            s=40, c=color_values, cmap=ELECTRODE_CMAP, vmin=0.0, vmax=1.0,
            edgecolors=COLORS["text_primary"], label="electrodes",
        )
        for electrode in result.electrodes:
            ax.text(*electrode.position, f" {electrode.name}",
                    color=COLORS["text_primary"], fontsize=8)

    ax.set_xlabel("X (mm)")
    ax.set_ylabel("Y (mm)")
    ax.set_zlabel("Z (mm)")
    ax.legend(loc="upper left", fontsize=8)

    return fig


def save_placement_plot(fig, filepath: Path | str, dpi: int = 150) -> Path:
    """Save a placement figure, creating parent directories."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(filepath, dpi=dpi, bbox_inches="tight")
    return filepath
