"""
Phong materials and local illumination.

A material carries the reflectance coefficients for the Phong model and an
optional procedural pattern that overrides its flat color.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

from .color import BLACK, Color
from .lights import PointLight
from .patterns import Pattern
from .tuples import EPSILON, Tuple, approx_equal

if TYPE_CHECKING:
    from .shapes import Shape


@dataclass(eq=False)
class Material:
    """Phong reflectance parameters.

    Attributes:
        color: Flat surface color (ignored when a pattern is set)
        ambient: Fraction of light reflected regardless of geometry
        diffuse: Lambertian reflection coefficient
        specular: Highlight strength
        shininess: Highlight exponent (larger = tighter highlight)
        reflective: Mirror reflectivity in [0, 1]
        pattern: Optional procedural color pattern
    """
    color: Color = field(default_factory=lambda: Color(1.0, 1.0, 1.0))
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    pattern: Optional[Pattern] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Material):
            return NotImplemented
        return (
            self.color == other.color
            and approx_equal(self.ambient, other.ambient)
            and approx_equal(self.diffuse, other.diffuse)
            and approx_equal(self.specular, other.specular)
            and approx_equal(self.shininess, other.shininess)
            and approx_equal(self.reflective, other.reflective)
            and self.pattern == other.pattern
        )

    def color_at(self, shape: Optional[Shape], point: Tuple) -> Color:
        """Return the base surface color at a world-space point."""
        if self.pattern is None:
            return self.color
        if shape is None:
            return self.pattern.pattern_at(self.pattern.inverse_transform @ point)
        return self.pattern.pattern_at_shape(shape, point)


def lighting(
    material: Material,
    shape: Optional[Shape],
    light: PointLight,
    point: Tuple,
    eye_vector: Tuple,
    normal_vector: Tuple,
    in_shadow: bool = False
) -> Color:
    """Shade a point with the Phong model (ambient + diffuse + specular).

    Args:
        material: Surface material
        shape: Shape being shaded, used to map patterns into object space
        light: The light source
        point: World-space point being shaded
        eye_vector: Unit vector from the point toward the eye
        normal_vector: Unit surface normal, facing the eye
        in_shadow: If True only the ambient term is returned

    Returns:
        The unclamped shaded color
    """
    effective_color = material.color_at(shape, point) * light.intensity
    ambient = effective_color * material.ambient
    if in_shadow:
        return ambient

    to_light = light.position - point
    # A light at the shading point has no direction to diffuse or reflect from
    if to_light.magnitude() < EPSILON:
        return ambient

    light_vector = to_light.normalize()
    light_dot_normal = light_vector.dot(normal_vector)

    # Light on the other side of the surface
    if light_dot_normal <= 0:
        return ambient

    diffuse = effective_color * material.diffuse * light_dot_normal

    reflect_vector = (-light_vector).reflect(normal_vector)
    reflect_dot_eye = reflect_vector.dot(eye_vector)
    if reflect_dot_eye <= 0:
        specular = BLACK
    else:
        factor = reflect_dot_eye ** material.shininess
        specular = light.intensity * material.specular * factor

    return ambient + diffuse + specular
