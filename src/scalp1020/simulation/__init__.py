"""
Simulation Module

Synthetic scalp meshes standing in for the surface extracted from an
anatomical scan.
"""

from .scalp_mesh import (
    fibonacci_sphere,
    generate_hemisphere_mesh,
    generate_sphere_mesh,
    load_scalp_mesh,
    save_scalp_mesh,
)

__all__ = [
    "fibonacci_sphere",
    "generate_hemisphere_mesh",
    "generate_sphere_mesh",
    "load_scalp_mesh",
    "save_scalp_mesh",
]
