"""Tests for materials and Phong lighting."""

import pytest
import math

from phongforge.materials import Material, lighting
from phongforge.lights import PointLight
from phongforge.patterns import StripePattern
from phongforge.color import Color, BLACK, WHITE
from phongforge.shapes import Sphere
from phongforge.tuples import point, vector

HALF_SQRT2 = math.sqrt(2) / 2


@pytest.fixture
def material():
    return Material()


@pytest.fixture
def position():
    return point(0, 0, 0)


class TestMaterial:
    """Test Material defaults and equality."""

    def test_defaults(self, material):
        assert material.color == Color(1, 1, 1)
        assert material.ambient == 0.1
        assert material.diffuse == 0.9
        assert material.specular == 0.9
        assert material.shininess == 200.0
        assert material.reflective == 0.0
        assert material.pattern is None

    def test_equality_uses_epsilon(self):
        assert Material(ambient=0.1) == Material(ambient=0.10001)
        assert Material(ambient=0.1) != Material(ambient=0.2)

    def test_equality_includes_pattern(self):
        assert Material(pattern=StripePattern(WHITE, BLACK)) != Material()
        assert Material(pattern=StripePattern(WHITE, BLACK)) == Material(pattern=StripePattern(WHITE, BLACK))


class TestLighting:
    """Test the Phong lighting function."""

    def test_eye_between_light_and_surface(self, material, position):
        eye_v = vector(0, 0, -1)
        normal_v = vector(0, 0, -1)
        light = PointLight(point(0, 0, -10), Color(1, 1, 1))
        result = lighting(material, Sphere(), light, position, eye_v, normal_v)
        assert result == Color(1.9, 1.9, 1.9)

    def test_eye_offset_45(self, material, position):
        eye_v = vector(0, HALF_SQRT2, -HALF_SQRT2)
        normal_v = vector(0, 0, -1)
        light = PointLight(point(0, 0, -10), Color(1, 1, 1))
        result = lighting(material, Sphere(), light, position, eye_v, normal_v)
        assert result == Color(1.0, 1.0, 1.0)

    def test_light_offset_45(self, material, position):
        eye_v = vector(0, 0, -1)
        normal_v = vector(0, 0, -1)
        light = PointLight(point(0, 10, -10), Color(1, 1, 1))
        result = lighting(material, Sphere(), light, position, eye_v, normal_v)
        assert result == Color(0.7364, 0.7364, 0.7364)

    def test_eye_in_reflection_path(self, material, position):
        eye_v = vector(0, -HALF_SQRT2, -HALF_SQRT2)
        normal_v = vector(0, 0, -1)
        light = PointLight(point(0, 10, -10), Color(1, 1, 1))
        result = lighting(material, Sphere(), light, position, eye_v, normal_v)
        assert result == Color(1.6364, 1.6364, 1.6364)

    def test_light_behind_surface(self, material, position):
        eye_v = vector(0, 0, -1)
        normal_v = vector(0, 0, -1)
        light = PointLight(point(0, 0, 10), Color(1, 1, 1))
        result = lighting(material, Sphere(), light, position, eye_v, normal_v)
        assert result == Color(0.1, 0.1, 0.1)

    def test_surface_in_shadow(self, material, position):
        eye_v = vector(0, 0, -1)
        normal_v = vector(0, 0, -1)
        light = PointLight(point(0, 0, -10), Color(1, 1, 1))
        result = lighting(material, Sphere(), light, position, eye_v, normal_v, in_shadow=True)
        assert result == Color(0.1, 0.1, 0.1)

    def test_light_at_point(self, material, position):
        eye_v = vector(0, 0, -1)
        normal_v = vector(0, 0, -1)
        light = PointLight(position, Color(1, 1, 1))
        result = lighting(material, Sphere(), light, position, eye_v, normal_v)
        assert result == Color(0.1, 0.1, 0.1)

    def test_light_intensity_modulates_color(self, position):
        m = Material(color=Color(1, 0.5, 0.25), ambient=1, diffuse=0, specular=0)
        light = PointLight(point(0, 0, -10), Color(0.5, 1, 2))
        result = lighting(m, Sphere(), light, position, vector(0, 0, -1), vector(0, 0, -1))
        assert result == Color(0.5, 0.5, 0.5)

    def test_with_pattern(self):
        m = Material(
            pattern=StripePattern(Color(1, 1, 1), Color(0, 0, 0)),
            ambient=1,
            diffuse=0,
            specular=0
        )
        eye_v = vector(0, 0, -1)
        normal_v = vector(0, 0, -1)
        light = PointLight(point(0, 0, -10), Color(1, 1, 1))
        c1 = lighting(m, Sphere(), light, point(0.9, 0, 0), eye_v, normal_v, False)
        c2 = lighting(m, Sphere(), light, point(1.1, 0, 0), eye_v, normal_v, False)
        assert c1 == Color(1, 1, 1)
        assert c2 == Color(0, 0, 0)

    def test_result_is_unclamped(self):
        m = Material(ambient=1, diffuse=1, specular=1)
        light = PointLight(point(0, 0, -10), Color(1, 1, 1))
        result = lighting(m, Sphere(), light, point(0, 0, 0), vector(0, 0, -1), vector(0, 0, -1))
        assert result == Color(3, 3, 3)
