"""
Geometric shapes for the ray tracer.

Every shape owns a transform (object-to-world) and a material. Subclasses
only implement the object-space rules (`local_intersect`, `local_normal_at`);
the base class moves rays and points between world and object space.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional
import itertools
import math

from .intersections import Intersection
from .materials import Material
from .matrix import IDENTITY, Matrix
from .ray import Ray
from .tuples import EPSILON, ORIGIN, Tuple, vector

# Shared by every shape kind; ids are unique for the life of the process
_shape_ids = itertools.count()


class Shape(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    def __init__(self, transform: Matrix = IDENTITY, material: Optional[Material] = None):
        """Create a shape.

        Args:
            transform: Object-to-world transform (must be invertible)
            material: Surface material (a default Material if None)
        """
        self.id = next(_shape_ids)
        self.transform = transform
        self.material = material if material is not None else Material()

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, matrix: Matrix) -> None:
        # Inverse is computed once here; raises NonInvertibleMatrixError
        self._inverse = matrix.inverse()
        self._inverse_transpose = self._inverse.transpose()
        self._transform = matrix

    @property
    def inverse_transform(self) -> Matrix:
        return self._inverse

    def world_to_object(self, world_point: Tuple) -> Tuple:
        """Convert a world-space point into object space."""
        return self._inverse @ world_point

    def normal_to_world(self, object_normal: Tuple) -> Tuple:
        """Convert an object-space normal into a unit world-space normal."""
        n = self._inverse_transpose @ object_normal
        return vector(n.x, n.y, n.z).normalize()

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a world-space ray with this shape.

        Returns:
            Intersections sorted by t; may be empty. Negative t values are kept.
        """
        return self.local_intersect(ray.transform(self._inverse))

    def normal_at(self, world_point: Tuple) -> Tuple:
        """Compute the unit surface normal at a world-space point."""
        local_point = self.world_to_object(world_point)
        return self.normal_to_world(self.local_normal_at(local_point))

    @abstractmethod
    def local_intersect(self, local_ray: Ray) -> list[Intersection]:
        """Intersect a ray already transformed into object space."""
        pass

    @abstractmethod
    def local_normal_at(self, local_point: Tuple) -> Tuple:
        """Object-space normal at an object-space point."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id})"


class Sphere(Shape):
    """A unit sphere centered at the object-space origin."""

    def local_intersect(self, local_ray: Ray) -> list[Intersection]:
        """Solve |O + tD|^2 = 1 with the quadratic formula.

        Both roots are returned even when they coincide (tangent ray).
        """
        sphere_to_ray = local_ray.origin - ORIGIN
        a = local_ray.direction.dot(local_ray.direction)
        b = 2 * local_ray.direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1

        discriminant = b * b - 4 * a * c
        if discriminant < 0:
            return []

        sqrtd = math.sqrt(discriminant)
        t1 = (-b - sqrtd) / (2 * a)
        t2 = (-b + sqrtd) / (2 * a)
        return [Intersection(t1, self), Intersection(t2, self)]

    def local_normal_at(self, local_point: Tuple) -> Tuple:
        return local_point - ORIGIN


class Plane(Shape):
    """The infinite object-space xz plane, normal +y."""

    def local_intersect(self, local_ray: Ray) -> list[Intersection]:
        # Parallel and coplanar rays never hit
        if abs(local_ray.direction.y) < EPSILON:
            return []
        t = -local_ray.origin.y / local_ray.direction.y
        return [Intersection(t, self)]

    def local_normal_at(self, local_point: Tuple) -> Tuple:
        return vector(0, 1, 0)


class TestShape(Shape):
    """A shape with no geometry that records the object-space ray it was given.

    Used to verify the world/object space conversions done by Shape.
    """

    __test__ = False

    def __init__(self, transform: Matrix = IDENTITY, material: Optional[Material] = None):
        super().__init__(transform, material)
        self.saved_ray: Optional[Ray] = None

    def local_intersect(self, local_ray: Ray) -> list[Intersection]:
        self.saved_ray = local_ray
        return []

    def local_normal_at(self, local_point: Tuple) -> Tuple:
        return vector(local_point.x, local_point.y, local_point.z)
