"""
interfaces.py - Refractive interfaces on ellipsoidal surfaces

An interface pairs a normal map with a refractive index ratio.

The outward normal of an ellipsoid at a point p is parallel to
(p - C) / R², so the normal map is the ellipsoid's scaling applied twice
after centering, with an optional sign flip:

    normal(p) = ±(p - C) / R²

Sign Convention:
    - point_inward=True: normals face the ellipsoid's center
    - point_inward=False: normals face away from the center
    - index_ratio = n_incident / n_transmitted, the index of the medium
      the ray travels in before the surface over the index after it

Snell's law in vector form, with N the unit normal facing against the
incoming ray, a = -D·N and η the index ratio:

    D' = η D + (η a - sqrt(1 - η²(1 - a²))) N

When η²(1 - a²) > 1 the ray is totally internally reflected instead:

    D' = D + 2 a N

Project: Ellipsoid Dome Ray Tracer
"""

import math

import numpy as np
from typing import List

from .exceptions import GeometryError
from .rays import Ray, normalize
from .surfaces import Ellipsoid
from .transforms import AffineMap


def normal_map(body: Ellipsoid, point_inward: bool) -> AffineMap:
    """
    Build the map from a world-space surface point to its normal direction.

    Parameters
    ----------
    body : Ellipsoid
        Surface the normals belong to
    point_inward : bool
        If True, normals face the ellipsoid's center

    Returns
    -------
    AffineMap
        Map whose output is parallel to the surface normal (not unit length)
    """
    sign = -1.0 if point_inward else 1.0
    flip = AffineMap.scale([sign, sign, sign])
    return flip @ body.scale @ body.scale @ body.centering


class Interface:
    """
    Boundary between two media on an ellipsoidal surface.

    Attributes
    ----------
    normal : AffineMap
        Maps a world-space surface point to a (non-unit) normal
    index_ratio : float
        n_incident / n_transmitted
    index_ratio_squared : float
        Square of index_ratio, cached for bend()
    """

    __slots__ = ("_normal", "_index_ratio", "_index_ratio_squared")

    def __init__(self, normal: AffineMap, index_ratio: float):
        """
        Initialize an Interface.

        Parameters
        ----------
        normal : AffineMap
            Surface point -> normal direction map, see normal_map()
        index_ratio : float
            Positive refractive index ratio; 1.0 makes the interface inert

        Raises
        ------
        GeometryError
            If index_ratio is not a finite positive number
        """
        index_ratio = float(index_ratio)
        if not math.isfinite(index_ratio) or index_ratio <= 0.0:
            raise GeometryError(f"Index ratio must be finite and positive, got {index_ratio}")
        self._normal = normal
        self._index_ratio = index_ratio
        self._index_ratio_squared = index_ratio ** 2

    @classmethod
    def on(cls, body: Ellipsoid, point_inward: bool, index_ratio: float) -> 'Interface':
        """Create an interface on `body` with the normal map derived from it."""
        return cls(normal_map(body, point_inward), index_ratio)

    @property
    def normal(self) -> AffineMap:
        return self._normal

    @property
    def index_ratio(self) -> float:
        return self._index_ratio

    @property
    def index_ratio_squared(self) -> float:
        return self._index_ratio_squared

    @property
    def is_inert(self) -> bool:
        """Check if the interface leaves rays unbent (equal indices)."""
        return self._index_ratio == 1.0

    def normal_at(self, point: List[float] | np.ndarray) -> np.ndarray:
        """Unit normal at a world-space point on the surface."""
        return normalize(self._normal(point))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(normal={self._normal!r}, index_ratio={self._index_ratio:.4f})"


def bend(ray: Ray, interface: Interface) -> bool:
    """
    Refract or reflect a ray at its current origin.

    The ray's origin must already lie on the interface's surface (see
    advance()). Only the direction is updated.

    Parameters
    ----------
    ray : Ray
        Ray to bend, mutated in place
    interface : Interface
        Interface at the ray's origin

    Returns
    -------
    bool
        Always False: total internal reflection is a valid outcome,
        not a failure
    """
    if interface.is_inert:
        return False
    n = interface.normal_at(ray.origin)
    d = ray.direction
    a = -float(np.dot(d, n))
    b = interface.index_ratio_squared * (1.0 - a * a)
    if b <= 1.0:
        # refract
        eta = interface.index_ratio
        ray.direction = eta * d + (eta * a - math.sqrt(1.0 - b)) * n
    else:
        # total internal reflection
        ray.direction = d + 2.0 * a * n
    return False
