"""Tests for the declarative optical system description."""

import json

import numpy as np
import pytest
from pydantic import ValidationError

from raytrace_ellipsoid import OpticUnit, Ray, trace_sequence
from raytrace_ellipsoid.schema import (
    EllipsoidConfig,
    OpticUnitConfig,
    OpticalSystemConfig,
    load_system,
)


SYSTEM = {
    "units": [
        {
            "name": "cornea",
            "body": {"center": [0, 0, 2], "radii": [3, 3, 1], "axis": [0, 0, 1], "half_angle": 60},
            "point_inward": False,
            "index_ratio": 1 / 1.5,
        },
        {
            "name": "retina",
            "body": {"center": [0, 0, 0], "radii": [4, 4, 4], "axis": [0, 0, -1], "half_angle": 90},
            "point_inward": True,
            "index_ratio": 1.0,
            "register": True,
        },
    ]
}


def test_build_system():
    units = OpticalSystemConfig.model_validate(SYSTEM).build()

    assert [unit.name for unit in units] == ["cornea", "retina"]
    assert all(isinstance(unit, OpticUnit) for unit in units)
    assert units[0].body.cos_half_angle == pytest.approx(0.5)
    assert units[0].interface.index_ratio == pytest.approx(1 / 1.5)
    assert not units[0].register
    assert units[1].register


def test_built_system_traces():
    units = OpticalSystemConfig.model_validate(SYSTEM).build()
    result = trace_sequence(Ray([0, 0, 10], [0, 0, -1]), units)

    assert not result.failed
    np.testing.assert_allclose(result.registered[0][1], [0.0, 0.0, -4.0])


def test_half_angle_in_radians():
    body = EllipsoidConfig(radii=(1, 1, 1), half_angle=np.pi, degrees=False).build()
    assert body.cos_half_angle == pytest.approx(-1.0)


def test_ellipsoid_defaults():
    body = EllipsoidConfig(radii=(1, 2, 3)).build()
    np.testing.assert_array_equal(body.center, [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(body.axis, [0.0, 0.0, 1.0])
    assert body.cos_half_angle == pytest.approx(0.0)


def test_detector_by_field_name():
    config = OpticUnitConfig(body={"radii": (1, 1, 1)}, point_inward=True, index_ratio=1.2, detector=True)
    assert config.build().register


@pytest.mark.parametrize(
    "body",
    [
        {"radii": (1, 0, 1)},
        {"radii": (1, 1, -1)},
        {"radii": (1, 1)},
        {"radii": (1, 1, 1), "axis": (0, 0, 0)},
        {"radii": (float("nan"), 1, 1)},
        {"radii": (1, float("inf"), 1)},
        {"radii": (1, 1, 1), "center": (0, float("inf"), 0)},
        {"radii": (1, 1, 1), "axis": (float("nan"), 0, 1)},
        {"radii": (1, 1, 1), "half_angle": float("nan")},
    ],
)
def test_invalid_body_rejected(body):
    with pytest.raises(ValidationError):
        EllipsoidConfig.model_validate(body)


@pytest.mark.parametrize("index_ratio", [0.0, -1.0, float("inf"), float("nan")])
def test_invalid_index_ratio_rejected(index_ratio):
    with pytest.raises(ValidationError):
        OpticUnitConfig(body={"radii": (1, 1, 1)}, point_inward=True, index_ratio=index_ratio)


def test_load_system(tmp_path):
    path = tmp_path / "eye.json"
    path.write_text(json.dumps(SYSTEM), encoding="utf-8")

    units = load_system(path)

    assert [unit.name for unit in units] == ["cornea", "retina"]


def test_load_system_invalid_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"units": [{"name": "x"}]}), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_system(str(path))


def test_load_system_non_finite_radius(tmp_path):
    system = json.loads(json.dumps(SYSTEM))
    system["units"][0]["body"]["radii"] = [float("nan"), 1, 1]
    path = tmp_path / "nan.json"
    path.write_text(json.dumps(system), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_system(path)
