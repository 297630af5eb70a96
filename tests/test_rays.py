"""Tests for the Ray class and vector helpers."""

import numpy as np
import pytest
from hypothesis import assume, given, strategies as st

from raytrace_ellipsoid import Ray, as_vec, normalize


component = st.floats(min_value=-100.0, max_value=100.0, allow_nan=False, allow_infinity=False)
vector = st.tuples(component, component, component)


def test_default_ray():
    ray = Ray()
    np.testing.assert_array_equal(ray.origin, [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(ray.direction, [1.0, 0.0, 0.0])


@given(direction=vector)
def test_direction_is_normalized_and_parallel(direction):
    assume(np.linalg.norm(direction) > 1e-6)
    ray = Ray(origin=[0, 0, 0], direction=direction)

    assert np.linalg.norm(ray.direction) == pytest.approx(1.0)
    np.testing.assert_allclose(np.cross(ray.direction, direction), 0.0, atol=1e-9)
    assert np.dot(ray.direction, direction) > 0.0


def test_direction_assignment_renormalizes():
    ray = Ray()
    ray.direction = [0.0, 3.0, 4.0]
    np.testing.assert_allclose(ray.direction, [0.0, 0.6, 0.8])


def test_origin_assignment_converts_to_float():
    ray = Ray()
    ray.origin = [1, 2, 3]
    assert ray.origin.dtype == np.float64
    np.testing.assert_array_equal(ray.origin, [1.0, 2.0, 3.0])


def test_zero_direction_raises():
    with pytest.raises(ValueError):
        Ray(origin=[0, 0, 0], direction=[0, 0, 0])


def test_normalize_zero_vector_raises():
    with pytest.raises(ValueError, match="zero vector"):
        normalize(np.zeros(3))


@pytest.mark.parametrize("values", [[1.0, 2.0], [1.0, 2.0, 3.0, 4.0], [[1.0, 2.0, 3.0]]])
def test_as_vec_rejects_wrong_shape(values):
    with pytest.raises(ValueError):
        as_vec(values)


def test_as_vec_copies_input():
    source = np.array([1.0, 2.0, 3.0])
    vec = as_vec(source)
    vec[0] = 10.0
    assert source[0] == 1.0


def test_point_at():
    ray = Ray(origin=[1, 1, 1], direction=[0, 0, 2])
    np.testing.assert_allclose(ray.point_at(3.0), [1.0, 1.0, 4.0])


def test_copy_is_exact():
    ray = Ray(origin=[1, 2, 10], direction=[-0.3, 0.4, -1])
    clone = ray.copy()

    np.testing.assert_array_equal(clone.origin, ray.origin)
    np.testing.assert_array_equal(clone.direction, ray.direction)


def test_direction_cannot_be_modified_in_place():
    ray = Ray(origin=[0, 0, 0], direction=[0, 3, 4])
    with pytest.raises(ValueError):
        ray.direction[0] = 5.0
    assert np.linalg.norm(ray.direction) == pytest.approx(1.0)


def test_copy_is_independent():
    ray = Ray(origin=[1, 2, 3], direction=[0, 1, 0])
    clone = ray.copy()
    clone.origin = [9, 9, 9]
    clone.direction = [1, 0, 0]

    np.testing.assert_array_equal(ray.origin, [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(ray.direction, [0.0, 1.0, 0.0])


def test_from_two_points():
    ray = Ray.from_two_points([1, 0, 0], [1, 0, -5])
    np.testing.assert_array_equal(ray.origin, [1.0, 0.0, 0.0])
    np.testing.assert_allclose(ray.direction, [0.0, 0.0, -1.0])


def test_repr():
    assert repr(Ray()) == "Ray at [0.0000, 0.0000, 0.0000], direction [1.0000, 0.0000, 0.0000]"
