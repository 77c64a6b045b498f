"""Shared fixtures and helpers."""

import pytest

from phongforge.world import default_world


@pytest.fixture
def world():
    """The two-sphere default world with one light at (-10, 10, -10)."""
    return default_world()


def assert_color_close(actual, expected, tol=1e-3):
    """Compare colors with a looser tolerance than Color.__eq__."""
    for a, e in zip(actual.to_array(), expected.to_array()):
        assert abs(a - e) < tol, f"{actual} != {expected}"
