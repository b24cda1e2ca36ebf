"""
Geometry Module

Vector helpers, the landmark-derived subject frame, polar projection and
the ray-to-surface search used to place electrodes on a scalp mesh.
"""

from .constants import *
from .frame import SubjectFrame, build_frame, triangle_normal
from .projection import polar_to_direction, polar_to_local
from .surface import SurfaceHit, as_vertex_array, locate_surface_point, ray_distances
