"""
Visualization Module

Dark lab theme and static 3D plots of electrode placements.
"""

from .theme import COLORS, apply_dark_theme, setup_axis_style
from .scalp_plot import plot_placement, save_placement_plot
