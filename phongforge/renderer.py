"""
Renderer module - parallel image assembly.

Splits the image into tiles and shades them on a thread pool. Every pixel
is independent and the world and camera are only read during a render, so
workers share them without locking and each writes only its own tile.
"""

from __future__ import annotations
import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Callable

import numpy as np

from .camera import Camera
from .canvas import Canvas
from .world import DEFAULT_REMAINING, World

logger = logging.getLogger(__name__)

Tile = tuple[int, int, int, int]


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    max_depth: int = DEFAULT_REMAINING
    tile_size: int = 16
    num_threads: int = 0  # 0 = auto-detect
    gamma: float = 1.0

    def __post_init__(self):
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.tile_size < 1:
            raise ValueError(f"tile_size must be >= 1, got {self.tile_size}")
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4


class Renderer:
    """Tile-based renderer producing the same pixels as Camera.render."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, world: World, camera: Camera) -> Canvas:
        """Render the world as seen by the camera.

        Args:
            world: The scene to render
            camera: The camera to render from

        Returns:
            Canvas of camera.hsize x camera.vsize unclamped colors
        """
        canvas = Canvas(camera.hsize, camera.vsize)
        remaining = self.settings.max_depth

        tiles = self._generate_tiles(camera.hsize, camera.vsize)
        total_tiles = len(tiles)
        completed_tiles = [0]
        progress_lock = threading.Lock()
        logger.debug(
            "Rendering %dx%d in %d tiles on %d threads (max depth %d)",
            camera.hsize, camera.vsize, total_tiles, self.settings.num_threads, remaining
        )

        def render_tile(tile: Tile) -> tuple[Tile, np.ndarray]:
            """Render a single tile."""
            x0, y0, x1, y1 = tile
            tile_image = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.float64)

            for y in range(y0, y1):
                for x in range(x0, x1):
                    ray = camera.ray_for_pixel(x, y)
                    tile_image[y - y0, x - x0] = world.color_at(ray, remaining).to_array()

            with progress_lock:
                completed_tiles[0] += 1
                progress = completed_tiles[0] / total_tiles
            if self._progress_callback:
                self._progress_callback(progress)

            return tile, tile_image

        if self.settings.num_threads > 1 and total_tiles > 1:
            with ThreadPoolExecutor(max_workers=self.settings.num_threads) as executor:
                results = list(executor.map(render_tile, tiles))
        else:
            results = [render_tile(tile) for tile in tiles]

        for (x0, y0, _, _), tile_image in results:
            canvas.write_block(x0, y0, tile_image)

        if not canvas.is_finite():
            logger.warning("Render produced non-finite pixel values")

        return canvas

    def _generate_tiles(self, width: int, height: int) -> list[Tile]:
        """Split the image into tiles of at most tile_size x tile_size.

        Returns:
            List of tiles as (x0, y0, x1, y1) tuples
        """
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles
