"""
Ray class for representing rays in 3D space.

A ray is defined by an origin point and a direction vector.
Ray(t) = origin + t * direction
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .errors import InvalidGeometryError
from .tuples import EPSILON, Tuple

if TYPE_CHECKING:
    from .matrix import Matrix


class Ray:
    """A ray with origin and direction.

    The parametric form is: P(t) = origin + t * direction. The direction is
    not required to be unit length. Object-space rays stay unnormalized, so t
    values agree between world and object space.
    """

    __slots__ = ('origin', 'direction')

    def __init__(self, origin: Tuple, direction: Tuple):
        """Create a ray with given origin and direction.

        Args:
            origin: The starting point of the ray (w=1)
            direction: The direction vector (w=0)

        Raises:
            InvalidGeometryError: if origin is not a point or direction is not a vector,
                or the direction has zero length
        """
        if not origin.is_point():
            raise InvalidGeometryError(f"Ray origin must be a point, got {origin!r}")
        if not direction.is_vector():
            raise InvalidGeometryError(f"Ray direction must be a vector, got {direction!r}")
        if direction.magnitude() < EPSILON * EPSILON:
            raise InvalidGeometryError(f"Ray direction must be non-zero, got {direction!r}")
        self.origin = origin
        self.direction = direction

    def position(self, t: float) -> Tuple:
        """Get the point along the ray at parameter t."""
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Return a new ray with origin and direction multiplied by `matrix`."""
        return Ray(matrix @ self.origin, matrix @ self.direction)

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"
