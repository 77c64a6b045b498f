"""
Command-line entry point for rendering scenes.
"""

import argparse
import logging
import math
import sys
import time
from pathlib import Path

from .camera import Camera
from .color import Color
from .errors import PhongForgeError
from .lights import PointLight
from .logging_config import setup_logging
from .materials import Material
from .matrix import rotation_x, rotation_y, scaling, translation, view_transform
from .patterns import CheckersPattern, GradientPattern, RingPattern, StripePattern
from .renderer import Renderer, RenderSettings
from .scene_parser import load_scene
from .shapes import Plane, Sphere
from .tuples import point, vector
from .world import World

logger = logging.getLogger(__name__)


def create_demo_scene() -> World:
    """Create a demo scene: patterned walls, a mirror floor and three spheres."""
    world = World()

    floor = Plane(material=Material(
        pattern=CheckersPattern(Color(1, 1, 1), Color(0.2, 0.2, 0.2)),
        specular=0.0,
        reflective=0.25
    ))
    world.add(floor)

    back_wall = Plane(
        transform=translation(0, 0, 5) @ rotation_x(math.pi / 2),
        material=Material(
            pattern=RingPattern(Color(0.9, 0.8, 0.6), Color(0.6, 0.5, 0.3), scaling(0.5, 0.5, 0.5)),
            specular=0.0
        )
    )
    world.add(back_wall)

    # Middle sphere - striped
    middle = Sphere(
        transform=translation(-0.5, 1, 0.5),
        material=Material(
            pattern=StripePattern(
                Color(0.1, 1, 0.5), Color(0.1, 0.5, 1),
                rotation_y(math.pi / 4) @ scaling(0.2, 0.2, 0.2)
            ),
            diffuse=0.7,
            specular=0.3
        )
    )
    world.add(middle)

    # Right sphere - mirror
    right = Sphere(
        transform=translation(1.5, 0.5, -0.5) @ scaling(0.5, 0.5, 0.5),
        material=Material(color=Color(0.1, 0.1, 0.1), diffuse=0.3, reflective=0.8)
    )
    world.add(right)

    # Left sphere - gradient
    left = Sphere(
        transform=translation(-1.5, 0.33, -0.75) @ scaling(0.33, 0.33, 0.33),
        material=Material(
            pattern=GradientPattern(
                Color(1, 0.8, 0.1), Color(1, 0.1, 0.1),
                translation(-1, 0, 0) @ scaling(2, 2, 2)
            ),
            diffuse=0.7,
            specular=0.3
        )
    )
    world.add(left)

    world.add_light(PointLight(point(-10, 10, -10), Color(0.9, 0.9, 0.9)))
    world.add_light(PointLight(point(5, 8, -10), Color(0.2, 0.2, 0.25)))
    return world


def create_demo_camera(width: int, height: int) -> Camera:
    return Camera(
        width, height, math.pi / 3,
        view_transform(point(0, 1.5, -5), point(0, 1, 0), vector(0, 1, 0))
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='phongforge',
        description='PhongForge - A Python Whitted-style Ray Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  phongforge --output render.ppm
  phongforge --width 400 --height 200 --output demo.png
  phongforge --scene scenes/reflections.yaml --threads 8 --output out.png
        '''
    )

    parser.add_argument('--scene', type=str, default=None,
                        help='Scene file (YAML or JSON); built-in demo if omitted')
    parser.add_argument('--width', type=int, default=None, help='Image width (demo default: 200)')
    parser.add_argument('--height', type=int, default=None, help='Image height (demo default: 100)')
    parser.add_argument('--depth', type=int, default=None, help='Max reflection bounces (default: 5)')
    parser.add_argument('--threads', type=int, default=None, help='Number of threads (0=auto)')
    parser.add_argument('--output', type=str, default='output/render.ppm',
                        help='Output filename; .ppm or any format Pillow writes')
    parser.add_argument('--log-level', type=str, default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging level')
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.scene:
            print(f"Loading scene: {args.scene}")
            world, camera, settings = load_scene(args.scene)
            if args.width or args.height:
                camera = Camera(
                    args.width or camera.hsize,
                    args.height or camera.vsize,
                    camera.field_of_view,
                    camera.transform
                )
        else:
            print("Creating demo scene")
            world = create_demo_scene()
            camera = create_demo_camera(args.width or 200, args.height or 100)
            settings = RenderSettings()

        if args.depth is not None or args.threads is not None:
            settings = RenderSettings(
                max_depth=settings.max_depth if args.depth is None else args.depth,
                tile_size=settings.tile_size,
                num_threads=settings.num_threads if args.threads is None else args.threads,
                gamma=settings.gamma
            )
    except (PhongForgeError, ValueError) as e:
        logger.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\nRender Settings:")
    print(f"  Resolution: {camera.hsize}x{camera.vsize}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Threads: {settings.num_threads}")
    print(f"  Objects in scene: {len(world)}")
    print(f"  Lights: {len(world.lights)}")

    renderer = Renderer(settings)

    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '#' * filled + '-' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()
    try:
        canvas = renderer.render(world, camera)
    except PhongForgeError as e:
        logger.error("Render failed: %s", e)
        print(f"\nError: {e}", file=sys.stderr)
        return 1
    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {args.output}")
    canvas.save(output_path, gamma=settings.gamma)

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
