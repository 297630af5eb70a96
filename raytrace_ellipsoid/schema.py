"""
schema.py - Declarative description of an optical system

Optic units can be described as plain data (e.g. a JSON file) and built
into Ellipsoid/OpticUnit objects. Validation errors are reported as
pydantic.ValidationError.

Example JSON:

    {
      "units": [
        {"name": "cornea",
         "body": {"center": [0, 0, 2], "radii": [3, 3, 1],
                  "axis": [0, 0, 1], "half_angle": 60},
         "point_inward": false, "index_ratio": 0.6667},
        {"name": "retina",
         "body": {"center": [0, 0, 0], "radii": [4, 4, 4],
                  "axis": [0, 0, -1], "half_angle": 90},
         "point_inward": true, "index_ratio": 1.0, "register": true}
      ]
    }

Project: Ellipsoid Dome Ray Tracer
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .optics import OpticUnit
from .surfaces import Ellipsoid

logger = logging.getLogger(__name__)

Triple = Tuple[float, float, float]


class EllipsoidConfig(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    center: Triple = (0.0, 0.0, 0.0)
    radii: Triple
    axis: Triple = (0.0, 0.0, 1.0)
    half_angle: float = Field(default=90.0, description="Angle between the dome axis and its edge.")
    degrees: bool = Field(default=True, description="If false, half_angle is in radians.")

    @field_validator("radii")
    @classmethod
    def _positive_radii(cls, value: Triple) -> Triple:
        if any(r <= 0.0 for r in value):
            raise ValueError(f"radii must be positive, got {value}")
        return value

    @field_validator("axis")
    @classmethod
    def _nonzero_axis(cls, value: Triple) -> Triple:
        if not any(value):
            raise ValueError("axis must have non-zero length")
        return value

    def build(self) -> Ellipsoid:
        return Ellipsoid.from_half_angle(
            self.center, self.radii, self.axis, self.half_angle, degrees=self.degrees
        )


class OpticUnitConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    name: str = ""
    body: EllipsoidConfig
    point_inward: bool
    index_ratio: float = Field(..., gt=0.0, description="n_incident / n_transmitted")
    detector: bool = Field(default=False, alias="register", description="Record hits on this unit.")

    def build(self) -> OpticUnit:
        return OpticUnit.build(
            self.body.build(),
            point_inward=self.point_inward,
            index_ratio=self.index_ratio,
            register=self.detector,
            name=self.name,
        )


class OpticalSystemConfig(BaseModel):
    units: List[OpticUnitConfig] = Field(default_factory=list)

    def build(self) -> List[OpticUnit]:
        """Build the optic units in the order the rays meet them."""
        return [unit.build() for unit in self.units]


def load_system(path: str | Path) -> List[OpticUnit]:
    """
    Read an optical system from a JSON file.

    Args:
        path: Location of the JSON description.

    Returns:
        The optic units, in order.
    """
    path = Path(path)
    logger.info("Loading optical system from: %s", path)
    config = OpticalSystemConfig.model_validate_json(path.read_text(encoding="utf-8"))
    units = config.build()
    logger.info("Loaded %d optic units.", len(units))
    return units
