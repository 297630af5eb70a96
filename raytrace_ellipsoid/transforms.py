"""
transforms.py - Affine maps with a diagonal linear part

Every map used by the tracer is a composition of translations and
per-axis scalings, so a transform is stored as

    x' = diagonal * x + translation

with `*` the component-wise product. Composition and inversion stay in
this form.

Project: Ellipsoid Dome Ray Tracer
"""

import numpy as np
from typing import List

from .exceptions import GeometryError
from .rays import as_vec


def _frozen(values: List[float] | np.ndarray) -> np.ndarray:
    vec = as_vec(values)
    vec.flags.writeable = False
    return vec


class AffineMap:
    """
    Translation plus axis-aligned scaling.

    Attributes
    ----------
    diagonal : np.ndarray
        Diagonal of the linear part (read-only)
    translation : np.ndarray
        Translation applied after the linear part (read-only)

    Examples
    --------
    >>> to_unit = AffineMap.scale([0.5, 0.5, 0.5]) @ AffineMap.translate([-1, 0, 0])
    >>> to_unit([3, 2, 2])
    array([1., 1., 1.])
    """

    __slots__ = ("_diagonal", "_translation")

    def __init__(
        self,
        diagonal: List[float] | np.ndarray = (1.0, 1.0, 1.0),
        translation: List[float] | np.ndarray = (0.0, 0.0, 0.0)
    ):
        self._diagonal = _frozen(diagonal)
        self._translation = _frozen(translation)

    @classmethod
    def identity(cls) -> 'AffineMap':
        return cls()

    @classmethod
    def translate(cls, offset: List[float] | np.ndarray) -> 'AffineMap':
        """Pure translation by `offset`."""
        return cls(translation=offset)

    @classmethod
    def scale(cls, factors: List[float] | np.ndarray) -> 'AffineMap':
        """Pure per-axis scaling by `factors`."""
        return cls(diagonal=factors)

    @property
    def diagonal(self) -> np.ndarray:
        return self._diagonal

    @property
    def translation(self) -> np.ndarray:
        return self._translation

    @property
    def is_linear(self) -> bool:
        """True if the map has no translation part."""
        return not np.any(self._translation)

    def __call__(self, point: List[float] | np.ndarray) -> np.ndarray:
        """Apply the full map to a point."""
        return self._diagonal * np.asarray(point, dtype=np.float64) + self._translation

    def linear(self, vector: List[float] | np.ndarray) -> np.ndarray:
        """
        Apply only the linear part, as appropriate for a direction.

        The result is generally not unit length.
        """
        return self._diagonal * np.asarray(vector, dtype=np.float64)

    def compose(self, inner: 'AffineMap') -> 'AffineMap':
        """
        Return the map applying `inner` first and then `self`.

        Parameters
        ----------
        inner : AffineMap
            Map applied first

        Returns
        -------
        AffineMap
            Composite with `composite(x) == self(inner(x))`
        """
        return AffineMap(
            diagonal=self._diagonal * inner._diagonal,
            translation=self._diagonal * inner._translation + self._translation
        )

    def __matmul__(self, inner: 'AffineMap') -> 'AffineMap':
        if not isinstance(inner, AffineMap):
            return NotImplemented
        return self.compose(inner)

    def inverse(self) -> 'AffineMap':
        """
        Return the exact inverse map.

        Raises
        ------
        GeometryError
            If any diagonal entry is zero (singular scaling)
        """
        if np.any(self._diagonal == 0.0):
            raise GeometryError(f"Cannot invert singular scaling {self._diagonal}")
        inv_diagonal = 1.0 / self._diagonal
        return AffineMap(diagonal=inv_diagonal, translation=-inv_diagonal * self._translation)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AffineMap):
            return NotImplemented
        return (
            np.array_equal(self._diagonal, other._diagonal)
            and np.array_equal(self._translation, other._translation)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"AffineMap(diagonal={self._diagonal.tolist()}, "
            f"translation={self._translation.tolist()})"
        )
