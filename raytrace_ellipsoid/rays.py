"""
rays.py - Vectors and the Ray class for ellipsoid dome ray tracing

A ray is defined by:
    - Origin point P = (x, y, z)
    - Unit direction D = (dx, dy, dz) where |D| = 1

Rays are mutated in place as they propagate through a sequence of
optic units: `advance` moves the origin, `bend` turns the direction.

Project: Ellipsoid Dome Ray Tracer
"""

import numpy as np
from typing import List


def as_vec(values: List[float] | np.ndarray) -> np.ndarray:
    """
    Convert a 3-sequence to a float64 vector.

    Parameters
    ----------
    values : array-like
        Three real components

    Returns
    -------
    np.ndarray
        New array of shape (3,)

    Raises
    ------
    ValueError
        If the input does not have exactly three components
    """
    vec = np.array(values, dtype=np.float64)
    if vec.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {vec.shape}")
    return vec


def normalize(vector: np.ndarray) -> np.ndarray:
    """
    Normalize a vector to unit length.

    Parameters
    ----------
    vector : np.ndarray
        Input vector of any dimension

    Returns
    -------
    np.ndarray
        Unit vector in same direction

    Raises
    ------
    ValueError
        If vector has zero magnitude
    """
    magnitude = np.linalg.norm(vector)
    if magnitude < 1e-15:
        raise ValueError("Cannot normalize zero vector")
    return vector / magnitude


class Ray:
    """
    Represents a ray travelling through a sequence of ellipsoidal surfaces.

    Attributes
    ----------
    origin : np.ndarray
        Current position of the ray [x, y, z]
    direction : np.ndarray
        Unit direction [dx, dy, dz]. Normalized on every assignment and
        read-only in place.

    Examples
    --------
    >>> ray = Ray()
    >>> ray.direction
    array([1., 0., 0.])

    >>> ray = Ray(origin=[1, 2, 10], direction=[0, 0, -2])
    >>> ray.direction
    array([ 0.,  0., -1.])
    """

    __slots__ = ("_origin", "_direction")

    def __init__(
        self,
        origin: List[float] | np.ndarray = (0.0, 0.0, 0.0),
        direction: List[float] | np.ndarray = (1.0, 0.0, 0.0)
    ):
        """
        Initialize a Ray object.

        Parameters
        ----------
        origin : array-like, optional
            Starting position [x, y, z] (default: the space origin)
        direction : array-like, optional
            Direction vector, will be normalized to unit length
            (default: along the first axis)
        """
        self.origin = origin
        self.direction = direction

    @property
    def origin(self) -> np.ndarray:
        """Current position of the ray."""
        return self._origin

    @origin.setter
    def origin(self, value: List[float] | np.ndarray) -> None:
        self._origin = as_vec(value)

    @property
    def direction(self) -> np.ndarray:
        """Unit propagation direction."""
        return self._direction

    @direction.setter
    def direction(self, value: List[float] | np.ndarray) -> None:
        direction = normalize(as_vec(value))
        direction.flags.writeable = False
        self._direction = direction

    def point_at(self, t: float) -> np.ndarray:
        """
        Get the point along the ray at parameter t.

        The parametric ray equation is: P(t) = origin + t * direction

        Parameters
        ----------
        t : float
            Parameter value (distance along ray)

        Returns
        -------
        np.ndarray
            Point [x, y, z] at parameter t
        """
        return self._origin + t * self._direction

    def copy(self) -> 'Ray':
        """Create an independent copy of the ray."""
        clone = Ray.__new__(Ray)
        clone._origin = self._origin.copy()
        # direction is read-only, so the clone shares it unchanged
        clone._direction = self._direction
        return clone

    @classmethod
    def from_two_points(
        cls,
        point1: List[float] | np.ndarray,
        point2: List[float] | np.ndarray
    ) -> 'Ray':
        """
        Create a ray defined by two points.

        Parameters
        ----------
        point1 : array-like
            Starting point [x, y, z]
        point2 : array-like
            Point that ray passes through [x, y, z]

        Returns
        -------
        Ray
            New ray from point1 toward point2
        """
        p1 = as_vec(point1)
        p2 = as_vec(point2)
        return cls(origin=p1, direction=p2 - p1)

    def __repr__(self) -> str:
        o = self._origin
        d = self._direction
        return (
            f"Ray at [{o[0]:.4f}, {o[1]:.4f}, {o[2]:.4f}], "
            f"direction [{d[0]:.4f}, {d[1]:.4f}, {d[2]:.4f}]"
        )
