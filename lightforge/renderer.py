"""
Renderer module - drives the camera over every pixel.

Implements:
- Tile-based rendering
- Multi-threaded tile dispatch
- Progress reporting

Every pixel depends only on the read-only world and its own ray, so tiles
can be rendered in any order and the result is identical.
"""

from __future__ import annotations
import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from .camera import Camera
from .canvas import Canvas
from .errors import ValidationError
from .world import DEFAULT_REMAINING, World

logger = logging.getLogger(__name__)


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    max_depth: int = DEFAULT_REMAINING
    tile_size: int = 16
    num_threads: int = 0  # 0 = auto-detect

    def __post_init__(self):
        if self.max_depth < 0:
            raise ValidationError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.tile_size <= 0:
            raise ValidationError(f"tile_size must be positive, got {self.tile_size}")
        if self.num_threads < 0:
            raise ValidationError(f"num_threads must be non-negative, got {self.num_threads}")
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4


class Renderer:
    """Whitted-style renderer with multi-threading support."""

    def __init__(self, settings: Optional[RenderSettings] = None):
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

    def render(self, camera: Camera, world: World) -> Canvas:
        """Render the world as seen by the camera.

        Args:
            camera: The camera to render from
            world: The scene to render

        Returns:
            Canvas of camera.hsize x camera.vsize pixels
        """
        canvas = Canvas(camera.hsize, camera.vsize)
        max_depth = self.settings.max_depth

        tiles = self._generate_tiles(camera.hsize, camera.vsize)
        total_tiles = len(tiles)
        completed_tiles = [0]  # Use list for mutable in closure
        progress_lock = threading.Lock()

        logger.debug(
            "Rendering %dx%d in %d tiles with %d thread(s), depth %d",
            camera.hsize, camera.vsize, total_tiles, self.settings.num_threads, max_depth
        )

        def render_tile(tile: Tuple[int, int, int, int]) -> Tuple[Tuple, np.ndarray]:
            """Render a single tile."""
            x0, y0, x1, y1 = tile
            tile_image = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.float64)

            for j in range(y1 - y0):
                for i in range(x1 - x0):
                    ray = camera.ray_for_pixel(x0 + i, y0 + j)
                    tile_image[j, i] = world.color_at(ray, max_depth).to_array()

            with progress_lock:
                completed_tiles[0] += 1
                if self._progress_callback:
                    self._progress_callback(completed_tiles[0] / total_tiles)

            return tile, tile_image

        if self.settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=self.settings.num_threads) as executor:
                results = list(executor.map(render_tile, tiles))
        else:
            results = [render_tile(tile) for tile in tiles]

        # Combine tiles into final image
        for (x0, y0, _, _), tile_image in results:
            canvas.write_block(x0, y0, tile_image)

        logger.debug("Finished rendering %d tiles", total_tiles)
        return canvas

    def _generate_tiles(self, width: int, height: int) -> list[Tuple[int, int, int, int]]:
        """Generate tiles for parallel rendering, row-major.

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


def render(camera: Camera, world: World, settings: Optional[RenderSettings] = None) -> Canvas:
    """Render the world through the camera with the given (or default) settings."""
    return Renderer(settings).render(camera, world)
