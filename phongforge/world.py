"""
The scene aggregate and the recursive shading algorithm.

Shading combines local Phong illumination from every light (each one
shadow-tested on its own) with mirror reflection traced recursively. The
recursion is bounded by a `remaining` bounce counter; there is no cycle
detection beyond it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from .color import BLACK, Color
from .intersections import Computations, Intersection, hit, prepare_computations
from .lights import PointLight
from .materials import Material, lighting
from .matrix import scaling
from .ray import Ray
from .shapes import Shape, Sphere
from .tuples import EPSILON, Tuple, approx_equal, point

# Reflection bounces allowed for a camera ray
DEFAULT_REMAINING = 5


@dataclass
class World:
    """Shapes and lights making up a scene.

    The world is treated as read-only while rendering, so pixels may be
    shaded concurrently without locking.
    """
    shapes: list[Shape] = field(default_factory=list)
    lights: list[PointLight] = field(default_factory=list)

    def add(self, *shapes: Shape) -> None:
        self.shapes.extend(shapes)

    def add_light(self, light: PointLight) -> None:
        self.lights.append(light)

    def __len__(self) -> int:
        return len(self.shapes)

    def __contains__(self, shape: Shape) -> bool:
        return any(s is shape for s in self.shapes)

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a ray with every shape; results sorted by ascending t."""
        xs: list[Intersection] = []
        for shape in self.shapes:
            xs.extend(shape.intersect(ray))
        xs.sort(key=lambda i: i.t)
        return xs

    def is_shadowed(self, world_point: Tuple, light: Optional[PointLight] = None) -> bool:
        """Check whether a shape lies between `world_point` and a light.

        Args:
            world_point: Point to test (usually an over point)
            light: Light to test against; defaults to the first light

        Returns:
            True if the nearest hit toward the light is closer than the light
            (False for a point at the light itself)
        """
        if light is None:
            if not self.lights:
                return False
            light = self.lights[0]

        to_light = light.position - world_point
        distance = to_light.magnitude()
        if distance < EPSILON:
            return False
        shadow_ray = Ray(world_point, to_light.normalize())

        h = hit(self.intersect(shadow_ray))
        return h is not None and h.t < distance

    def shade_hit(self, comps: Computations, remaining: int = DEFAULT_REMAINING) -> Color:
        """Color at a precomputed hit: direct lighting plus reflection."""
        material = comps.shape.material
        surface = BLACK
        for light in self.lights:
            shadowed = self.is_shadowed(comps.over_point, light)
            surface = surface + lighting(
                material,
                comps.shape,
                light,
                comps.over_point,
                comps.eye_vector,
                comps.normal_vector,
                shadowed
            )
        return surface + self.reflected_color(comps, remaining - 1)

    def reflected_color(self, comps: Computations, remaining: int = DEFAULT_REMAINING) -> Color:
        """Color seen in the mirror direction, scaled by reflectivity.

        Returns black once no bounces remain or the surface is not
        reflective.
        """
        reflective = comps.shape.material.reflective
        if remaining <= 0 or approx_equal(reflective, 0.0):
            return BLACK

        reflect_ray = Ray(comps.over_point, comps.reflect_vector)
        return self.color_at(reflect_ray, remaining) * reflective

    def color_at(self, ray: Ray, remaining: int = DEFAULT_REMAINING) -> Color:
        """Trace a ray into the world and return its color (black on a miss)."""
        h = hit(self.intersect(ray))
        if h is None:
            return BLACK
        comps = prepare_computations(h, ray)
        return self.shade_hit(comps, remaining)


def default_world() -> World:
    """A light and two concentric spheres; the standard shading fixture."""
    outer = Sphere(material=Material(
        color=Color(0.8, 1.0, 0.6),
        diffuse=0.7,
        specular=0.2
    ))
    inner = Sphere(transform=scaling(0.5, 0.5, 0.5))
    light = PointLight(point(-10, 10, -10), Color(1, 1, 1))
    return World(shapes=[outer, inner], lights=[light])
