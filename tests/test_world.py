"""Tests for World intersection, shadows, shading and reflection."""

import pytest
import math

from phongforge.world import World, default_world, DEFAULT_REMAINING
from phongforge.intersections import Intersection, prepare_computations
from phongforge.lights import PointLight
from phongforge.materials import Material
from phongforge.shapes import Sphere, Plane
from phongforge.color import Color, BLACK, WHITE
from phongforge.matrix import translation, scaling
from phongforge.ray import Ray
from phongforge.tuples import point, vector

from conftest import assert_color_close

HALF_SQRT2 = math.sqrt(2) / 2


class TestWorldCreation:
    """Test World construction."""

    def test_empty_world(self):
        w = World()
        assert w.shapes == []
        assert w.lights == []

    def test_default_world(self):
        w = default_world()
        assert w.lights == [PointLight(point(-10, 10, -10), Color(1, 1, 1))]
        s1, s2 = w.shapes
        assert s1.material == Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2)
        assert s2.transform == scaling(0.5, 0.5, 0.5)
        assert s1 in w
        assert s2 in w
        assert len(w) == 2

    def test_add(self):
        w = World()
        s = Sphere()
        w.add(s)
        w.add_light(PointLight(point(0, 0, 0), WHITE))
        assert s in w
        assert len(w.lights) == 1


class TestWorldIntersect:
    """Test World.intersect()."""

    def test_sorted_union(self, world):
        xs = world.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert [round(i.t, 6) for i in xs] == [4, 4.5, 5.5, 6]

    def test_miss(self, world):
        assert world.intersect(Ray(point(0, 0, -5), vector(0, 1, 0))) == []


class TestShadows:
    """Test World.is_shadowed()."""

    def test_nothing_collinear(self, world):
        assert world.is_shadowed(point(0, 10, 0)) is False

    def test_object_between_point_and_light(self, world):
        assert world.is_shadowed(point(10, -10, 10)) is True

    def test_object_behind_light(self, world):
        assert world.is_shadowed(point(-20, 20, -20)) is False

    def test_object_behind_point(self, world):
        assert world.is_shadowed(point(-2, 2, -2)) is False

    def test_explicit_light(self, world):
        other = PointLight(point(10, -10, 10), WHITE)
        assert world.is_shadowed(point(-10, 10, -10), other) is True

    def test_no_lights(self):
        assert World(shapes=[Sphere()]).is_shadowed(point(0, 0, -5)) is False

    def test_point_at_light(self, world):
        assert world.is_shadowed(point(-10, 10, -10)) is False


class TestShadeHit:
    """Test World.shade_hit()."""

    def test_outside(self, world):
        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        comps = prepare_computations(Intersection(4, world.shapes[0]), r)
        assert world.shade_hit(comps) == Color(0.38066, 0.47583, 0.2855)

    def test_inside(self, world):
        world.lights = [PointLight(point(0, 0.25, 0), Color(1, 1, 1))]
        r = Ray(point(0, 0, 0), vector(0, 0, 1))
        comps = prepare_computations(Intersection(0.5, world.shapes[1]), r)
        assert_color_close(world.shade_hit(comps), Color(0.90498, 0.90498, 0.90498))

    def test_in_shadow(self):
        s1 = Sphere()
        s2 = Sphere(translation(0, 0, 10))
        w = World(shapes=[s1, s2], lights=[PointLight(point(0, 0, -10), Color(1, 1, 1))])
        r = Ray(point(0, 0, 5), vector(0, 0, 1))
        comps = prepare_computations(Intersection(4, s2), r)
        assert w.shade_hit(comps) == Color(0.1, 0.1, 0.1)

    def test_lights_are_summed(self, world):
        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        comps = prepare_computations(Intersection(4, world.shapes[0]), r)
        half = Color(0.5, 0.5, 0.5)
        world.lights = [
            PointLight(point(-10, 10, -10), half),
            PointLight(point(-10, 10, -10), half),
        ]
        assert world.shade_hit(comps) == Color(0.38066, 0.47583, 0.2855)

    def test_each_light_shadow_tested(self):
        s1 = Sphere()
        s2 = Sphere(translation(0, 0, 10))
        blocked = PointLight(point(0, 0, -10), Color(1, 1, 1))
        clear = PointLight(point(0, 0, 5), Color(1, 1, 1))
        r = Ray(point(0, 0, 5), vector(0, 0, 1))
        comps = prepare_computations(Intersection(4, s2), r)

        only_blocked = World(shapes=[s1, s2], lights=[blocked]).shade_hit(comps)
        only_clear = World(shapes=[s1, s2], lights=[clear]).shade_hit(comps)
        both = World(shapes=[s1, s2], lights=[blocked, clear]).shade_hit(comps)
        assert only_blocked == Color(0.1, 0.1, 0.1)
        assert both == only_blocked + only_clear
        assert only_clear.r > 0.1


class TestColorAt:
    """Test World.color_at()."""

    def test_miss(self, world):
        assert world.color_at(Ray(point(0, 0, -5), vector(0, 1, 0))) == BLACK

    def test_hit(self, world):
        c = world.color_at(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert c == Color(0.38066, 0.47583, 0.2855)

    def test_intersection_behind_ray(self, world):
        outer, inner = world.shapes
        outer.material.ambient = 1
        inner.material.ambient = 1
        c = world.color_at(Ray(point(0, 0, 0.75), vector(0, 0, -1)))
        assert c == inner.material.color

    def test_everything_behind_ray(self, world):
        assert world.color_at(Ray(point(0, 0, 5), vector(0, 0, 1))) == BLACK


class TestReflection:
    """Test World.reflected_color() and recursive reflection."""

    def test_non_reflective_material(self, world):
        r = Ray(point(0, 0, 0), vector(0, 0, 1))
        shape = world.shapes[1]
        shape.material.ambient = 1
        comps = prepare_computations(Intersection(1, shape), r)
        assert world.reflected_color(comps) == BLACK

    def test_reflective_material(self, world):
        shape = Plane(translation(0, -1, 0), Material(reflective=0.5))
        world.add(shape)
        r = Ray(point(0, 0, -3), vector(0, -HALF_SQRT2, HALF_SQRT2))
        comps = prepare_computations(Intersection(math.sqrt(2), shape), r)
        assert_color_close(world.reflected_color(comps), Color(0.19032, 0.2379, 0.14274))

    def test_shade_hit_with_reflection(self, world):
        shape = Plane(translation(0, -1, 0), Material(reflective=0.5))
        world.add(shape)
        r = Ray(point(0, 0, -3), vector(0, -HALF_SQRT2, HALF_SQRT2))
        comps = prepare_computations(Intersection(math.sqrt(2), shape), r)
        assert_color_close(world.shade_hit(comps), Color(0.87677, 0.92436, 0.82918))

    def test_mutually_reflective_surfaces_terminate(self):
        lower = Plane(translation(0, -1, 0), Material(reflective=1))
        upper = Plane(translation(0, 1, 0), Material(reflective=1))
        w = World(shapes=[lower, upper], lights=[PointLight(point(0, 0, 0), Color(1, 1, 1))])
        c = w.color_at(Ray(point(0, 0, 0), vector(0, 1, 0)))
        assert c.is_finite()

    def test_no_bounces_left(self, world):
        shape = Plane(translation(0, -1, 0), Material(reflective=0.5))
        world.add(shape)
        r = Ray(point(0, 0, -3), vector(0, -HALF_SQRT2, HALF_SQRT2))
        comps = prepare_computations(Intersection(math.sqrt(2), shape), r)
        assert world.reflected_color(comps, 0) == BLACK

    def test_mirror_adds_reflected_scene(self, world):
        mirror = Plane(translation(0, -1, 0), Material(reflective=1.0))
        world.add(mirror)
        r = Ray(point(0, 0, -3), vector(0, -HALF_SQRT2, HALF_SQRT2))
        comps = prepare_computations(Intersection(math.sqrt(2), mirror), r)

        direct = world.shade_hit(comps, 1)
        with_mirror = world.shade_hit(comps, 2)
        reflected = world.reflected_color(comps, 1)
        assert reflected != BLACK
        assert with_mirror == direct + reflected

    def test_default_bound(self):
        assert DEFAULT_REMAINING >= 1
