import pytest

from raytrace_ellipsoid import Ellipsoid


@pytest.fixture
def upper_dome():
    """Upper half of the ellipsoid centered at (1, 2, 2) with radii (5, 4, 2)."""
    return Ellipsoid.from_half_angle([1, 2, 2], [5, 4, 2], [0, 0, 1], 90)


@pytest.fixture
def lower_dome():
    """Lower half of the same ellipsoid."""
    return Ellipsoid.from_half_angle([1, 2, 2], [5, 4, 2], [0, 0, -1], 90)
