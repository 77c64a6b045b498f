"""Tests for Ray class."""

import pytest

from phongforge.ray import Ray
from phongforge.matrix import translation, scaling
from phongforge.tuples import point, vector
from phongforge.errors import InvalidGeometryError


class TestRayCreation:
    """Test Ray construction."""

    def test_stores_origin_and_direction(self):
        origin = point(1, 2, 3)
        direction = vector(4, 5, 6)
        ray = Ray(origin, direction)
        assert ray.origin == origin
        assert ray.direction == direction

    def test_rejects_vector_origin(self):
        with pytest.raises(InvalidGeometryError):
            Ray(vector(1, 2, 3), vector(0, 0, 1))

    def test_rejects_point_direction(self):
        with pytest.raises(InvalidGeometryError):
            Ray(point(1, 2, 3), point(0, 0, 1))

    def test_rejects_zero_direction(self):
        with pytest.raises(InvalidGeometryError):
            Ray(point(0, 0, -5), vector(0, 0, 0))

    def test_direction_need_not_be_unit(self):
        ray = Ray(point(0, 0, 0), vector(0, 0, 3))
        assert ray.direction.magnitude() == 3.0


class TestRayPosition:
    """Test Ray.position()."""

    def test_position(self):
        ray = Ray(point(2, 3, 4), vector(1, 0, 0))
        assert ray.position(0) == point(2, 3, 4)
        assert ray.position(1) == point(3, 3, 4)
        assert ray.position(-1) == point(1, 3, 4)
        assert ray.position(2.5) == point(4.5, 3, 4)


class TestRayTransform:
    """Test Ray.transform()."""

    def test_translate(self):
        ray = Ray(point(1, 2, 3), vector(0, 1, 0))
        r2 = ray.transform(translation(3, 4, 5))
        assert r2.origin == point(4, 6, 8)
        assert r2.direction == vector(0, 1, 0)

    def test_scale(self):
        ray = Ray(point(1, 2, 3), vector(0, 1, 0))
        r2 = ray.transform(scaling(2, 3, 4))
        assert r2.origin == point(2, 6, 12)
        assert r2.direction == vector(0, 3, 0)

    def test_source_ray_unchanged(self):
        ray = Ray(point(1, 2, 3), vector(0, 1, 0))
        ray.transform(translation(3, 4, 5))
        assert ray.origin == point(1, 2, 3)


class TestRayRepr:
    """Test Ray string representation."""

    def test_repr(self):
        s = repr(Ray(point(1, 2, 3), vector(0, 1, 0)))
        assert "Ray" in s
        assert "origin" in s
        assert "direction" in s
