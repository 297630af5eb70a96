"""
surfaces.py - Ellipsoidal dome surfaces and ray intersection

An ellipsoid is defined by:
    - Center C = (cx, cy, cz)
    - Per-axis radii R = (rx, ry, rz), all positive
    - Dome axis A (unit vector)
    - Cosine of the dome's half opening angle, cos(α)

Only the part of the ellipsoid whose direction from the center lies within
α of the axis is optically active (the "dome"). cos(α) = -1 keeps the full
ellipsoid; cos(α) = 1 shrinks the dome to nothing.

Intersection works in unit-sphere space: the ellipsoid is translated to the
origin and scaled by 1/R, where it becomes the unit sphere. The six maps
between world and unit-sphere space are computed once per ellipsoid:

    centering         x -> x - C
    scale             x -> x / R
    center_scale      x -> (x - C) / R      (world -> unit sphere)
    uncentering       x -> x + C
    unscale           x -> x * R
    uncenter_unscale  x -> x * R + C        (unit sphere -> world)

Project: Ellipsoid Dome Ray Tracer
"""

import logging
import math

import numpy as np
from typing import List, Tuple

from .exceptions import GeometryError
from .rays import Ray, as_vec, normalize
from .transforms import AffineMap

logger = logging.getLogger(__name__)


class Ellipsoid:
    """
    Axis-aligned ellipsoid restricted to a conical dome.

    Instances are immutable; all derived transforms are cached at
    construction and reused for every ray.

    Attributes
    ----------
    center : np.ndarray
        Center of the ellipsoid
    radii : np.ndarray
        Semi-axis lengths along x, y and z
    axis : np.ndarray
        Unit direction of the dome's symmetry axis
    cos_half_angle : float
        Cosine of the angle between the axis and the dome's edge

    Examples
    --------
    An upward-pointing hemisphere with center (1, 2, 3) and radii (4, 5, 6):

    >>> body = Ellipsoid([1, 2, 3], [4, 5, 6], [0, 0, 1], 0.0)
    >>> body.center_scale([5, 2, 3])
    array([1., 0., 0.])
    """

    def __init__(
        self,
        center: List[float] | np.ndarray,
        radii: List[float] | np.ndarray,
        axis: List[float] | np.ndarray,
        cos_half_angle: float
    ):
        """
        Initialize an Ellipsoid.

        Parameters
        ----------
        center : array-like
            Center of the ellipsoid
        radii : array-like
            Positive radius along each coordinate axis
        axis : array-like
            Dome direction, normalized on construction
        cos_half_angle : float
            Cosine of the dome's half opening angle, in [-1, 1]

        Raises
        ------
        GeometryError
            If a radius is not a finite positive number, the axis has zero
            length, or cos_half_angle lies outside [-1, 1]
        """
        center = as_vec(center)
        radii = as_vec(radii)
        axis = as_vec(axis)
        cos_half_angle = float(cos_half_angle)

        if not np.all(np.isfinite(center)):
            raise GeometryError(f"Ellipsoid center must be finite, got {center}")
        if not np.all(np.isfinite(radii)) or np.any(radii <= 0.0):
            raise GeometryError(f"Ellipsoid radii must be finite and positive, got {radii}")
        if not np.all(np.isfinite(axis)):
            raise GeometryError(f"Dome axis must be finite, got {axis}")
        try:
            axis = normalize(axis)
        except ValueError as exc:
            raise GeometryError("Dome axis must have non-zero length") from exc
        if not -1.0 <= cos_half_angle <= 1.0:
            raise GeometryError(f"cos_half_angle must lie in [-1, 1], got {cos_half_angle}")

        for vec in (center, radii, axis):
            vec.flags.writeable = False
        self._center = center
        self._radii = radii
        self._axis = axis
        self._cos_half_angle = cos_half_angle

        self._uncentering = AffineMap.translate(center)
        self._unscale = AffineMap.scale(radii)
        self._centering = self._uncentering.inverse()
        self._scale = self._unscale.inverse()
        self._center_scale = self._scale @ self._centering
        self._uncenter_unscale = self._uncentering @ self._unscale

        logger.debug("Built %r", self)

    @classmethod
    def from_half_angle(
        cls,
        center: List[float] | np.ndarray,
        radii: List[float] | np.ndarray,
        axis: List[float] | np.ndarray,
        half_angle: float,
        degrees: bool = True
    ) -> 'Ellipsoid':
        """
        Create an ellipsoid from the dome's half opening angle.

        Parameters
        ----------
        center, radii, axis : array-like
            As for the constructor
        half_angle : float
            Angle between the dome axis and the dome's edge
        degrees : bool, optional
            If True, half_angle is in degrees (default: True)

        Returns
        -------
        Ellipsoid
            New ellipsoid storing cos(half_angle)
        """
        if degrees:
            half_angle = np.radians(half_angle)
        return cls(center, radii, axis, float(np.cos(half_angle)))

    @property
    def center(self) -> np.ndarray:
        return self._center

    @property
    def radii(self) -> np.ndarray:
        return self._radii

    @property
    def axis(self) -> np.ndarray:
        return self._axis

    @property
    def cos_half_angle(self) -> float:
        return self._cos_half_angle

    @property
    def half_angle(self) -> float:
        """Dome half opening angle in radians."""
        return math.acos(self._cos_half_angle)

    @property
    def centering(self) -> AffineMap:
        """World -> centered (translation only)."""
        return self._centering

    @property
    def scale(self) -> AffineMap:
        """Centered -> unit sphere (scaling only)."""
        return self._scale

    @property
    def center_scale(self) -> AffineMap:
        """World -> unit sphere."""
        return self._center_scale

    @property
    def uncentering(self) -> AffineMap:
        """Centered -> world (translation only)."""
        return self._uncentering

    @property
    def unscale(self) -> AffineMap:
        """Unit sphere -> centered (scaling only)."""
        return self._unscale

    @property
    def uncenter_unscale(self) -> AffineMap:
        """Unit sphere -> world."""
        return self._uncenter_unscale

    @property
    def is_full(self) -> bool:
        """Check if the dome covers the whole ellipsoid."""
        return self._cos_half_angle <= -1.0

    def in_dome(self, point: np.ndarray) -> bool:
        """
        Check if a centered point lies inside the dome's cone.

        Parameters
        ----------
        point : np.ndarray
            Point relative to the ellipsoid center (not rescaled)

        Returns
        -------
        bool
            True if the angle between point and axis is below the half angle
        """
        return float(np.dot(normalize(point), self._axis)) > self._cos_half_angle

    def __repr__(self) -> str:
        c = self._center
        r = self._radii
        a = self._axis
        return (
            f"{self.__class__.__name__}("
            f"center=[{c[0]:.4f}, {c[1]:.4f}, {c[2]:.4f}], "
            f"radii=[{r[0]:.4f}, {r[1]:.4f}, {r[2]:.4f}], "
            f"axis=[{a[0]:.4f}, {a[1]:.4f}, {a[2]:.4f}], "
            f"cos_half_angle={self._cos_half_angle:.4f})"
        )


# =============================================================================
# Intersection
# =============================================================================

def unit_sphere_distances(origin: np.ndarray, direction: np.ndarray) -> Tuple[float, float]:
    """
    Distances from a point to the unit sphere along a unit direction.

    Solves |origin + t * direction| = 1 for t.

    Parameters
    ----------
    origin : np.ndarray
        Ray origin in unit-sphere space
    direction : np.ndarray
        Unit ray direction in unit-sphere space

    Returns
    -------
    Tuple[float, float]
        (t_near, t_far). An entry is math.inf when it is not a forward
        hit: both are inf on a miss or when the sphere lies behind the
        ray, and t_near is inf when the origin is inside the sphere.
    """
    b = -float(np.dot(origin, direction))
    disc = b * b - float(np.dot(origin, origin)) + 1.0
    if disc >= 0.0:
        d = math.sqrt(disc)
        t_far = b + d
        if t_far >= 0.0:
            t_near = b - d
            # t_near == 0 is the surface the ray is leaving
            return (t_near, t_far) if t_near > 0.0 else (math.inf, t_far)
    return math.inf, math.inf


def advance(ray: Ray, body: Ellipsoid) -> bool:
    """
    Move a ray's origin to its first intersection with an ellipsoid's dome.

    Candidates are tested nearest first; the first one inside the dome is
    accepted. The ray's direction is never changed.

    Parameters
    ----------
    ray : Ray
        Ray to advance, mutated in place on success
    body : Ellipsoid
        Target surface

    Returns
    -------
    bool
        True if the intersection failed (origin left untouched),
        False if the origin was moved onto the dome
    """
    origin = body.center_scale(ray.origin)
    direction = normalize(body.scale.linear(ray.direction))
    for t in unit_sphere_distances(origin, direction):
        if math.isinf(t):
            continue
        point = body.unscale(origin + t * direction)
        if body.in_dome(point):
            ray.origin = body.uncentering(point)
            return False
    return True


# =============================================================================
# Factory Functions
# =============================================================================

def create_sphere(
    center: List[float] | np.ndarray,
    radius: float,
    axis: List[float] | np.ndarray = (0.0, 0.0, 1.0),
    cos_half_angle: float = -1.0
) -> Ellipsoid:
    """
    Create a spherical dome (all three radii equal).

    Parameters
    ----------
    center : array-like
        Center of the sphere
    radius : float
        Sphere radius
    axis : array-like, optional
        Dome direction (default: +z)
    cos_half_angle : float, optional
        Dome extent (default: -1.0, the full sphere)

    Returns
    -------
    Ellipsoid
        Spherical dome
    """
    return Ellipsoid(center, [radius, radius, radius], axis, cos_half_angle)


def create_hemisphere(
    center: List[float] | np.ndarray,
    radii: List[float] | np.ndarray,
    axis: List[float] | np.ndarray
) -> Ellipsoid:
    """Create the half of an ellipsoid facing `axis` (90 degree half angle)."""
    return Ellipsoid(center, radii, axis, 0.0)
