"""
Ray/shape intersections and the values precomputed for shading a hit.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, TYPE_CHECKING

from .tuples import EPSILON, Tuple

if TYPE_CHECKING:
    from .ray import Ray
    from .shapes import Shape


@dataclass(frozen=True)
class Intersection:
    """A ray parameter t at which a ray crosses the surface of `shape`."""
    t: float
    shape: Shape


def intersections(*xs: Intersection) -> list[Intersection]:
    """Aggregate intersections into a list sorted by ascending t."""
    return sorted(xs, key=lambda i: i.t)


def hit(xs: Iterable[Intersection]) -> Optional[Intersection]:
    """Return the nearest intersection with t > 0, or None.

    Intersections behind the ray origin are never a hit.
    """
    for i in sorted(xs, key=lambda i: i.t):
        if i.t > 0:
            return i
    return None


@dataclass
class Computations:
    """Shading inputs derived from a hit.

    Attributes:
        t: Ray parameter of the hit
        shape: The shape that was hit
        point: World-space hit point
        over_point: `point` nudged along the normal to avoid self-shadowing acne
        eye_vector: Unit vector toward the eye (negated ray direction)
        normal_vector: Surface normal, flipped to face the eye
        inside: True if the hit is on the inside surface
        reflect_vector: Ray direction mirrored about the normal
    """
    t: float
    shape: Shape
    point: Tuple
    over_point: Tuple
    eye_vector: Tuple
    normal_vector: Tuple
    inside: bool
    reflect_vector: Tuple


def prepare_computations(intersection: Intersection, ray: Ray) -> Computations:
    """Precompute the values needed to shade `intersection` seen along `ray`."""
    shape = intersection.shape
    point = ray.position(intersection.t)
    eye_vector = -ray.direction
    normal_vector = shape.normal_at(point)

    inside = normal_vector.dot(eye_vector) < 0
    if inside:
        normal_vector = -normal_vector

    return Computations(
        t=intersection.t,
        shape=shape,
        point=point,
        over_point=point + normal_vector * EPSILON,
        eye_vector=eye_vector,
        normal_vector=normal_vector,
        inside=inside,
        reflect_vector=ray.direction.reflect(normal_vector),
    )
