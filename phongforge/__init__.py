"""
PhongForge - A Python Whitted-style Ray Tracer

A small, exact ray tracer with support for:
- Affine-transformed spheres and planes
- Phong illumination with hard shadows from multiple point lights
- Recursive mirror reflection with a bounded bounce count
- Procedural patterns (stripe, gradient, ring, checkers)
- Multi-threaded tile rendering
- PPM and PNG output
"""

__version__ = "0.1.0"
__author__ = "PhongForge Team"

from .errors import (
    PhongForgeError, InvalidGeometryError, DimensionMismatchError,
    NonInvertibleMatrixError, DegenerateVectorError, SceneParseError
)
from .tuples import Tuple, point, vector, reflect, approx_equal, EPSILON, ORIGIN
from .color import Color, BLACK, WHITE
from .matrix import (
    Matrix, IDENTITY, translation, scaling, rotation_x, rotation_y, rotation_z,
    shearing, view_transform
)
from .ray import Ray
from .lights import PointLight
from .patterns import (
    Pattern, StripePattern, GradientPattern, RingPattern, CheckersPattern, TestPattern
)
from .materials import Material, lighting
from .intersections import Intersection, Computations, intersections, hit, prepare_computations
from .shapes import Shape, Sphere, Plane, TestShape
from .world import World, default_world, DEFAULT_REMAINING
from .canvas import Canvas
from .camera import Camera
from .renderer import Renderer, RenderSettings
from .scene_parser import SceneParser, load_scene, parse_scene
