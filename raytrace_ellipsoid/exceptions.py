"""
exceptions.py - Error types for ellipsoid dome ray tracing

Only invalid construction input raises. Missing a dome and total internal
reflection are ordinary outcomes reported through return values.

Project: Ellipsoid Dome Ray Tracer
"""


class GeometryError(ValueError):
    """Raised when an ellipsoid, transform or interface is built from degenerate input."""
