"""
raytrace_ellipsoid - Ray tracing through ellipsoidal dome surfaces

Traces rays through sequences of ellipsoidal optical surfaces, each
restricted to a conical dome, for modelling lenses and compound eyes.
"""

from .exceptions import GeometryError

from .rays import Ray, as_vec, normalize
from .transforms import AffineMap

from .surfaces import Ellipsoid, advance, unit_sphere_distances
from .surfaces import create_sphere, create_hemisphere

from .interfaces import Interface, bend, normal_map
from .optics import OpticUnit, TraceResult, raytrace, trace_sequence

from .logging_config import setup_logging

__version__ = "0.1.0"

__all__ = [
    "GeometryError",
    # Rays
    "Ray",
    "as_vec",
    "normalize",
    # Transforms
    "AffineMap",
    # Surfaces
    "Ellipsoid",
    "advance",
    "unit_sphere_distances",
    "create_sphere",
    "create_hemisphere",
    # Interfaces
    "Interface",
    "bend",
    "normal_map",
    # Optic units
    "OpticUnit",
    "TraceResult",
    "raytrace",
    "trace_sequence",
    "setup_logging",
]
