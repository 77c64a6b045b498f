"""
Camera module for generating primary rays.

The camera sits at the origin of its own space looking toward -z, with the
canvas one unit in front of it. Its transform is the world-to-camera
(view) transform, usually built with `view_transform`.
"""

from __future__ import annotations
from typing import Optional
import math

from .canvas import Canvas
from .matrix import IDENTITY, Matrix
from .ray import Ray
from .tuples import ORIGIN, point
from .world import DEFAULT_REMAINING, World


class Camera:
    """A pinhole camera mapping a pixel grid onto rays."""

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: Matrix = IDENTITY
    ):
        """Create a camera.

        Args:
            hsize: Horizontal size of the canvas in pixels
            vsize: Vertical size of the canvas in pixels
            field_of_view: Horizontal-or-vertical view angle (whichever
                side is longer), in radians
            transform: View transform (world to camera)

        Raises:
            ValueError: if either canvas dimension is less than 1
        """
        if hsize < 1 or vsize < 1:
            raise ValueError(f"Camera size must be at least 1x1, got {hsize}x{vsize}")
        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view
        self.transform = transform

        half_view = math.tan(field_of_view / 2)
        aspect = hsize / vsize
        if aspect >= 1:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = (self.half_width * 2) / hsize

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, matrix: Matrix) -> None:
        # Raises NonInvertibleMatrixError for singular transforms
        self._inverse = matrix.inverse()
        self._origin = self._inverse @ ORIGIN
        self._transform = matrix

    def ray_for_pixel(self, px: int, py: int) -> Ray:
        """Generate the world-space ray through the center of pixel (px, py).

        Increasing px moves toward +x on the canvas, which is -x in camera
        space because the camera looks down -z.
        """
        x_offset = (px + 0.5) * self.pixel_size
        y_offset = (py + 0.5) * self.pixel_size

        world_x = self.half_width - x_offset
        world_y = self.half_height - y_offset

        pixel = self._inverse @ point(world_x, world_y, -1)
        direction = (pixel - self._origin).normalize()
        return Ray(self._origin, direction)

    def render(self, world: World, remaining: Optional[int] = None) -> Canvas:
        """Render `world` pixel by pixel on the calling thread.

        Args:
            world: The scene
            remaining: Reflection bounces per camera ray (world default if None)

        Returns:
            A canvas of hsize x vsize colors
        """
        if remaining is None:
            remaining = DEFAULT_REMAINING

        canvas = Canvas(self.hsize, self.vsize)
        for y in range(self.vsize):
            for x in range(self.hsize):
                ray = self.ray_for_pixel(x, y)
                canvas.write_pixel(x, y, world.color_at(ray, remaining))
        return canvas

    def __repr__(self) -> str:
        return f"Camera({self.hsize}x{self.vsize}, fov={self.field_of_view:.4f})"
