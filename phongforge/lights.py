"""
Light sources for the ray tracer.

Only point lights are supported: they emit equally in all directions from a
single position, have no falloff, and produce hard shadows.
"""

from __future__ import annotations
from dataclasses import dataclass

from .color import Color
from .tuples import Tuple


@dataclass
class PointLight:
    """A point light with a position and an intensity (color)."""
    position: Tuple
    intensity: Color
