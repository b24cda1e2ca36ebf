"""
scalp1020 Dark Lab Theme

Color palette and matplotlib styling for placement plots.

Usage:
    from scalp1020.visualization.theme import COLORS, apply_dark_theme, setup_axis_style

    apply_dark_theme()
    fig = plt.figure()
    ax = fig.add_subplot(projection="3d")
    setup_axis_style(ax, "ELECTRODE PLACEMENT")
"""

from __future__ import annotations

import matplotlib.pyplot as plt


# =============================================================================
# COLOR PALETTE
# =============================================================================

COLORS: dict[str, str] = {
    # Base theme - dark backgrounds
    "background": "#0f0f0f",
    "panel_bg": "#12121a",
    "grid_line": "#1a1a2e",

    # Primary accent
    "accent_cyan": "#00FFFF",
    "text_accent": "#00FFFF",

    # Scene elements
    "scalp": "#808080",
    "fiducial": "#FFD700",
    "frame_x": "#FF6B6B",  # Right
    "frame_y": "#00FF88",  # Anterior
    "frame_z": "#4ECDC4",  # Superior

    # Text hierarchy
    "text_primary": "#E0E0E0",
    "text_secondary": "#808080",
}

# Colormap for electrode color values
ELECTRODE_CMAP: str = "plasma"


def apply_dark_theme() -> None:
    """
    Configure matplotlib for the dark lab aesthetic.

    Call this at the start of any visualization script to ensure
    consistent styling.
    """
    plt.style.use("dark_background")
    plt.rcParams["figure.facecolor"] = COLORS["background"]
    plt.rcParams["axes.facecolor"] = COLORS["panel_bg"]
    plt.rcParams["savefig.facecolor"] = COLORS["background"]

    plt.rcParams["axes.edgecolor"] = COLORS["grid_line"]
    plt.rcParams["axes.labelcolor"] = COLORS["text_secondary"]
    plt.rcParams["xtick.color"] = COLORS["text_secondary"]
    plt.rcParams["ytick.color"] = COLORS["text_secondary"]
    plt.rcParams["grid.color"] = COLORS["grid_line"]
    plt.rcParams["text.color"] = COLORS["text_primary"]


def setup_axis_style(ax, title: str) -> None:
    """
    Apply consistent dark styling to a matplotlib axis.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
        The axis to style (2D or 3D).
    title : str
        Title text for the axis.
    """
    ax.set_facecolor(COLORS["panel_bg"])
    ax.set_title(
        title,
        color=COLORS["text_accent"],
        fontsize=11,
        fontweight="bold",
        fontfamily="monospace",
        pad=10,
    )
    ax.tick_params(colors=COLORS["text_secondary"], labelsize=8)
    ax.grid(True, alpha=0.2, color=COLORS["grid_line"])
