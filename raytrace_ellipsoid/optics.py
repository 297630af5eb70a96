"""
optics.py - Optic units and the per-surface tracing step

An optic unit is one ellipsoidal dome plus the interface on it. Tracing a
ray through a unit advances the ray onto the dome and, if it got there,
bends it. Units flagged with `register` act as detectors (a retina): the
sequence driver records where rays land on them.

Project: Ellipsoid Dome Ray Tracer
"""

import logging
from dataclasses import dataclass, field

import numpy as np
from typing import Iterable, List, Optional, Tuple

from .interfaces import Interface, bend
from .rays import Ray
from .surfaces import Ellipsoid, advance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpticUnit:
    """
    An ellipsoidal dome with a refractive interface.

    Attributes
    ----------
    body : Ellipsoid
        Surface geometry
    interface : Interface
        Normal map and index ratio on the surface
    register : bool
        Whether hits on this unit are recorded (detector surface)
    name : str
        Label for diagnostics
    """
    body: Ellipsoid
    interface: Interface
    register: bool = False
    name: str = ""

    @classmethod
    def build(
        cls,
        body: Ellipsoid,
        point_inward: bool,
        index_ratio: float,
        register: bool = False,
        name: str = ""
    ) -> 'OpticUnit':
        """
        Create an optic unit with the interface derived from the body.

        Parameters
        ----------
        body : Ellipsoid
            Surface geometry
        point_inward : bool
            If True, the interface normals face the ellipsoid's center
        index_ratio : float
            n_incident / n_transmitted at the surface
        register : bool, optional
            Mark the unit as a detector (default: False)
        name : str, optional
            Label for diagnostics

        Returns
        -------
        OpticUnit
            New optic unit
        """
        unit = cls(body, Interface.on(body, point_inward, index_ratio), register, name)
        logger.debug(
            "Built optic unit %r (point_inward=%s, index_ratio=%s, register=%s)",
            name, point_inward, index_ratio, register
        )
        return unit


def raytrace(ray: Ray, unit: OpticUnit) -> bool:
    """
    Advance a ray onto a unit's dome and bend it there.

    Bending is skipped when the ray misses the dome, since the ray's
    origin is then not a point on the surface.

    Parameters
    ----------
    ray : Ray
        Ray to trace, mutated in place
    unit : OpticUnit
        Unit to trace through

    Returns
    -------
    bool
        True if the ray missed the dome
    """
    return advance(ray, unit.body) or bend(ray, unit.interface)


@dataclass
class TraceResult:
    """
    Outcome of tracing one ray through a sequence of units.

    Attributes
    ----------
    failed : bool
        True if the ray missed one of the units
    failed_at : str or None
        Name of the unit the ray missed
    registered : list
        (unit name, hit point) for every detector unit the ray reached
    """
    failed: bool = False
    failed_at: Optional[str] = None
    registered: List[Tuple[str, np.ndarray]] = field(default_factory=list)


def trace_sequence(ray: Ray, units: Iterable[OpticUnit]) -> TraceResult:
    """
    Trace a ray through optic units in order, stopping at the first miss.

    Parameters
    ----------
    ray : Ray
        Ray to trace, mutated in place
    units : iterable of OpticUnit
        Units in the order the ray meets them

    Returns
    -------
    TraceResult
        Failure state and the points registered on detector units
    """
    result = TraceResult()
    for unit in units:
        if raytrace(ray, unit):
            logger.debug("Ray missed optic unit %r: %r", unit.name, ray)
            result.failed = True
            result.failed_at = unit.name
            break
        if unit.register:
            result.registered.append((unit.name, ray.origin.copy()))
    return result


# =============================================================================
# Example
# =============================================================================

if __name__ == "__main__":
    from .logging_config import setup_logging

    setup_logging(logging.DEBUG)

    # A lens dome over a hemispherical retina
    lens = OpticUnit.build(
        Ellipsoid.from_half_angle([0, 0, 2], [3, 3, 1], [0, 0, 1], 60),
        point_inward=False, index_ratio=1 / 1.5, name="cornea"
    )
    lens_back = OpticUnit.build(
        Ellipsoid.from_half_angle([0, 0, 2], [3, 3, 1], [0, 0, -1], 60),
        point_inward=True, index_ratio=1.5, name="lens back"
    )
    retina = OpticUnit.build(
        Ellipsoid.from_half_angle([0, 0, 0], [4, 4, 4], [0, 0, -1], 90),
        point_inward=True, index_ratio=1.0, register=True, name="retina"
    )

    for x in np.linspace(-1.0, 1.0, 5):
        ray = Ray(origin=[x, 0.0, 10.0], direction=[0.0, 0.0, -1.0])
        result = trace_sequence(ray, [lens, lens_back, retina])
        print(f"x0={x:+.2f}: failed={result.failed}, registered={result.registered}")
