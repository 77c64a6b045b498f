"""
Procedural color patterns.

Implements:
- Stripe (alternates on floor(x))
- Gradient (linear blend over the fractional part of x)
- Ring (alternates on floor of the distance from the y axis)
- Checkers (alternates on floor(x) + floor(y) + floor(z))

Patterns are evaluated in pattern space: a world point is first moved into
the shape's object space, then through the inverse of the pattern's own
transform.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
import math

from .color import Color
from .matrix import IDENTITY, Matrix
from .tuples import Tuple

if TYPE_CHECKING:
    from .shapes import Shape


class Pattern(ABC):
    """Abstract base class for two-color patterns with their own transform."""

    def __init__(self, color_a: Color, color_b: Color, transform: Matrix = IDENTITY):
        self.color_a = color_a
        self.color_b = color_b
        self.transform = transform

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, matrix: Matrix) -> None:
        # Raises NonInvertibleMatrixError for singular transforms
        self._inverse = matrix.inverse()
        self._transform = matrix

    @property
    def inverse_transform(self) -> Matrix:
        return self._inverse

    @abstractmethod
    def pattern_at(self, point: Tuple) -> Color:
        """Get the pattern color at a point already in pattern space."""
        pass

    def pattern_at_shape(self, shape: Shape, world_point: Tuple) -> Color:
        """Get the pattern color at a world-space point on `shape`."""
        object_point = shape.world_to_object(world_point)
        pattern_point = self._inverse @ object_point
        return self.pattern_at(pattern_point)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pattern):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.color_a == other.color_a
            and self.color_b == other.color_b
            and self.transform == other.transform
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.color_a}, {self.color_b})"


class StripePattern(Pattern):
    """Stripes alternating along x, constant in y and z."""

    def pattern_at(self, point: Tuple) -> Color:
        if math.floor(point.x) % 2 == 0:
            return self.color_a
        return self.color_b


class GradientPattern(Pattern):
    """Linear blend from color_a to color_b, repeating every unit of x."""

    def pattern_at(self, point: Tuple) -> Color:
        distance = self.color_b - self.color_a
        fraction = point.x - math.floor(point.x)
        return self.color_a + distance * fraction


class RingPattern(Pattern):
    """Concentric rings around the y axis."""

    def pattern_at(self, point: Tuple) -> Color:
        if math.floor(math.sqrt(point.x * point.x + point.z * point.z)) % 2 == 0:
            return self.color_a
        return self.color_b


class CheckersPattern(Pattern):
    """A 3D checker pattern of unit cubes."""

    def pattern_at(self, point: Tuple) -> Color:
        total = math.floor(point.x) + math.floor(point.y) + math.floor(point.z)
        if total % 2 == 0:
            return self.color_a
        return self.color_b


class TestPattern(Pattern):
    """Returns the pattern-space coordinates as a color.

    Used to check the object and pattern transforms applied before sampling.
    """

    __test__ = False

    def __init__(self, transform: Matrix = IDENTITY):
        super().__init__(Color(0, 0, 0), Color(1, 1, 1), transform)

    def pattern_at(self, point: Tuple) -> Color:
        return Color(point.x, point.y, point.z)


PATTERN_TYPES = {
    'stripe': StripePattern,
    'gradient': GradientPattern,
    'ring': RingPattern,
    'checkers': CheckersPattern,
}
