"""
Scene description language parser.

Supports YAML (or JSON) scene files with:
- Camera configuration
- Render settings
- Materials library (with optional procedural patterns)
- Objects (spheres and planes with transforms and materials)
- Point lights

Example scene file:
```yaml
camera:
  width: 200
  height: 100
  field_of_view: 60
  from: [0, 1.5, -5]
  to: [0, 1, 0]
  up: [0, 1, 0]

render:
  max_depth: 5
  threads: 0

materials:
  floor:
    color: [1, 0.9, 0.9]
    specular: 0
    reflective: 0.2
    pattern:
      type: checkers
      colors: [[1, 1, 1], [0.1, 0.1, 0.1]]

objects:
  - type: plane
    material: floor

  - type: sphere
    transform:
      - [scale, 0.5, 0.5, 0.5]
      - [translate, 1.5, 0.5, -0.5]
    material:
      color: [0.5, 1, 0.1]
      diffuse: 0.7

lights:
  - position: [-10, 10, -10]
    intensity: [1, 1, 1]
```

Transforms are listed in the order they are applied; rotation angles are in
degrees, as is the camera field of view.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict
import json
import logging
import math

import yaml

from .camera import Camera
from .color import Color
from .errors import PhongForgeError, SceneParseError
from .lights import PointLight
from .materials import Material
from .matrix import (
    IDENTITY, Matrix, rotation_x, rotation_y, rotation_z, scaling, shearing,
    translation, view_transform
)
from .patterns import PATTERN_TYPES, Pattern
from .renderer import RenderSettings
from .shapes import Plane, Shape, Sphere
from .tuples import Tuple, point, vector
from .world import World

logger = logging.getLogger(__name__)

SHAPE_TYPES = {
    'sphere': Sphere,
    'plane': Plane,
}

MATERIAL_KEYS = ('color', 'ambient', 'diffuse', 'specular', 'shininess', 'reflective', 'pattern')

# name -> (argument count, factory)
TRANSFORM_OPS = {
    'translate': (3, translation),
    'scale': (3, scaling),
    'rotate_x': (1, lambda deg: rotation_x(math.radians(deg))),
    'rotate_y': (1, lambda deg: rotation_y(math.radians(deg))),
    'rotate_z': (1, lambda deg: rotation_z(math.radians(deg))),
    'shear': (6, shearing),
}

SceneResult = tuple[World, Camera, RenderSettings]


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.world = World()
        self.camera: Camera = None
        self.settings: RenderSettings = None

    def parse_file(self, filepath: str) -> SceneResult:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (world, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()
        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # Any other extension is read as YAML
                data = yaml.safe_load(content)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        logger.debug("Loaded scene description from %s", path)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> SceneResult:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (world, camera, settings)
        """
        if not isinstance(data, dict):
            raise SceneParseError(f"Scene must be a mapping, got {type(data).__name__}")

        # Parse materials first (objects reference them)
        if 'materials' in data:
            self._parse_materials(data['materials'])

        if 'objects' in data:
            self._parse_objects(data['objects'])

        if 'lights' in data:
            self._parse_lights(data['lights'])

        self._parse_camera(data.get('camera', {}))

        if 'render' in data:
            self._parse_settings(data['render'])
        else:
            self.settings = RenderSettings()

        logger.info(
            "Parsed scene: %d shapes, %d lights, %d materials",
            len(self.world.shapes), len(self.world.lights), len(self.materials)
        )
        return self.world, self.camera, self.settings

    def _parse_triple(self, data: Any, what: str) -> list[float]:
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"{what} must have 3 components, got {len(data)}")
            return [float(v) for v in data]
        raise SceneParseError(f"Cannot parse {what} from: {data}")

    def _parse_point(self, data: Any) -> Tuple:
        return point(*self._parse_triple(data, "Point"))

    def _parse_vector(self, data: Any) -> Tuple:
        return vector(*self._parse_triple(data, "Vector"))

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from a list or a #rrggbb string."""
        if isinstance(data, str):
            if data.startswith('#') and len(data) == 7:
                r = int(data[1:3], 16) / 255.0
                g = int(data[3:5], 16) / 255.0
                b = int(data[5:7], 16) / 255.0
                return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        return Color(*self._parse_triple(data, "Color"))

    def _parse_transform(self, ops: Any) -> Matrix:
        """Compose a list of [op, args...] entries, first entry applied first."""
        if ops is None:
            return IDENTITY
        if not isinstance(ops, list):
            raise SceneParseError(f"Transform must be a list, got: {ops}")

        matrix = IDENTITY
        for op in ops:
            if not isinstance(op, list) or not op:
                raise SceneParseError(f"Invalid transform entry: {op}")
            name, args = op[0], op[1:]
            if name not in TRANSFORM_OPS:
                raise SceneParseError(f"Unknown transform: {name}")
            arity, factory = TRANSFORM_OPS[name]
            if len(args) != arity:
                raise SceneParseError(f"{name} takes {arity} arguments, got {len(args)}")
            try:
                values = [float(a) for a in args]
            except (TypeError, ValueError) as e:
                raise SceneParseError(f"Invalid arguments for {name}: {args}") from e
            matrix = factory(*values) @ matrix
        return matrix

    def _parse_pattern(self, pattern_data: Dict[str, Any]) -> Pattern:
        pattern_type = str(pattern_data.get('type', 'stripe')).lower()
        if pattern_type not in PATTERN_TYPES:
            raise SceneParseError(f"Unknown pattern type: {pattern_type}")
        colors = pattern_data.get('colors', [[1, 1, 1], [0, 0, 0]])
        if not isinstance(colors, list) or len(colors) != 2:
            raise SceneParseError(f"Pattern needs exactly two colors, got: {colors}")
        color_a = self._parse_color(colors[0])
        color_b = self._parse_color(colors[1])
        transform = self._parse_transform(pattern_data.get('transform'))
        try:
            return PATTERN_TYPES[pattern_type](color_a, color_b, transform)
        except PhongForgeError as e:
            raise SceneParseError(f"Invalid {pattern_type} pattern: {e}") from e

    def _build_material(self, mat_data: Dict[str, Any]) -> Material:
        unknown = set(mat_data) - set(MATERIAL_KEYS)
        if unknown:
            raise SceneParseError(f"Unknown material properties: {sorted(unknown)}")

        material = Material()
        if 'color' in mat_data:
            material.color = self._parse_color(mat_data['color'])
        for key in ('ambient', 'diffuse', 'specular', 'shininess', 'reflective'):
            if key in mat_data:
                setattr(material, key, float(mat_data[key]))
        if 'pattern' in mat_data:
            material.pattern = self._parse_pattern(mat_data['pattern'])
        return material

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        for name, mat_data in materials_data.items():
            self.materials[name] = self._build_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Material:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            return Material()
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        if isinstance(mat_ref, dict):
            return self._build_material(mat_ref)
        raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        for obj_data in objects_data:
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            if obj_type not in SHAPE_TYPES:
                raise SceneParseError(f"Unknown object type: {obj_type}")
            material = self._get_material(obj_data.get('material'))
            transform = self._parse_transform(obj_data.get('transform'))
            try:
                shape: Shape = SHAPE_TYPES[obj_type](transform, material)
            except PhongForgeError as e:
                raise SceneParseError(f"Invalid {obj_type}: {e}") from e
            self.world.add(shape)

    def _parse_lights(self, lights_data: list) -> None:
        """Parse lights section."""
        for light_data in lights_data:
            light_type = str(light_data.get('type', 'point')).lower()
            if light_type != 'point':
                raise SceneParseError(f"Unknown light type: {light_type}")
            position = self._parse_point(light_data.get('position', [-10, 10, -10]))
            intensity = self._parse_color(light_data.get('intensity', [1, 1, 1]))
            self.world.add_light(PointLight(position, intensity))

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section."""
        width = int(camera_data.get('width', 100))
        height = int(camera_data.get('height', 100))
        if width < 1 or height < 1:
            raise SceneParseError(f"Camera size must be positive, got {width}x{height}")
        fov = math.radians(float(camera_data.get('field_of_view', 60)))
        from_point = self._parse_point(camera_data.get('from', [0, 0, -5]))
        to = self._parse_point(camera_data.get('to', [0, 0, 0]))
        up = self._parse_vector(camera_data.get('up', [0, 1, 0]))

        try:
            transform = view_transform(from_point, to, up)
            self.camera = Camera(width, height, fov, transform)
        except PhongForgeError as e:
            raise SceneParseError(f"Invalid camera: {e}") from e

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section."""
        try:
            self.settings = RenderSettings(
                max_depth=int(settings_data.get('max_depth', 5)),
                tile_size=int(settings_data.get('tile_size', 16)),
                num_threads=int(settings_data.get('threads', 0)),
                gamma=float(settings_data.get('gamma', 1.0))
            )
        except ValueError as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e


def load_scene(filepath: str) -> SceneResult:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (world, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> SceneResult:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (world, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
