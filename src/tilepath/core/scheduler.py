"""Tile-based parallel renderer with streaming result aggregation.

This module partitions the image into small rectangular tiles and renders
them on a fixed-size pool of worker threads:
- One tile task per worker is dispatched up front
- Every finished tile arrives on a completion queue
- For each completion the coordinator dispatches the next undispatched tile
  and merges the finished one into the image buffer

A worker that finishes early is handed the next tile immediately, whatever
the cost of the tiles still running elsewhere. At most ``threads`` tiles are
in flight at any time.

The world and camera are shared read-only by all workers. Only the
coordinator writes to the image buffer, and each merge touches a rectangle
no other tile covers.

Example:
    >>> from tilepath.camera.thin_lens import Camera, CameraConfig
    >>> from tilepath.core.scheduler import RenderSettings, TileRenderer
    >>> from tilepath.scene.weekend import create_weekend_scene
    >>>
    >>> world, camera_config = create_weekend_scene(seed=7)
    >>> settings = RenderSettings(width=160, samples_per_pixel=8)
    >>> renderer = TileRenderer(settings, threads=4)
    >>> renderer.render(world, Camera.from_config(camera_config))
    >>> image = renderer.get_image_uint8()  # (height, width, 3), top row first
"""

from __future__ import annotations

import itertools
import math
import os
import queue
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

from tilepath.camera.thin_lens import Camera
from tilepath.core.integrator import MAX_DEPTH, ray_color
from tilepath.core.pixel import resolve_pixel
from tilepath.core.vector import Color, random_unit
from tilepath.geometry.hittable import Hittable

# Type alias for progress callback
# Callback receives (completed_tiles, total_tiles)
ProgressCallback = Callable[[int, int], None]

# Default tile edge length in pixels
DEFAULT_TILE_SIZE = 10


class TileRenderError(RuntimeError):
    """A worker failed to deliver a tile; the image cannot be completed."""


# =============================================================================
# Render Configuration
# =============================================================================


@dataclass(frozen=True)
class RenderSettings:
    """Image and sampling configuration for one render.

    Attributes:
        width: Image width in pixels.
        aspect_ratio: Width divided by height; the height is derived from it.
        samples_per_pixel: Number of jittered camera rays averaged per pixel.
        max_depth: Bounce budget passed to the path tracer.
        tile_width: Width of a scheduling tile in pixels.
        tile_height: Height of a scheduling tile in pixels.
    """

    width: int
    aspect_ratio: float = 16.0 / 9.0
    samples_per_pixel: int = 100
    max_depth: int = MAX_DEPTH
    tile_width: int = DEFAULT_TILE_SIZE
    tile_height: int = DEFAULT_TILE_SIZE

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError(f"Image width = {self.width} must be positive.")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio = {self.aspect_ratio} must be positive.")
        if self.height <= 0:
            raise ValueError(
                f"Image height derived from width {self.width} and aspect ratio "
                f"{self.aspect_ratio} is {self.height}; it must be positive."
            )
        if self.samples_per_pixel <= 0:
            raise ValueError(f"samples_per_pixel = {self.samples_per_pixel} must be positive.")
        if self.max_depth < 0:
            raise ValueError(f"max_depth = {self.max_depth} must not be negative.")
        if self.tile_width <= 0 or self.tile_height <= 0:
            raise ValueError(
                f"Tile size ({self.tile_width}x{self.tile_height}) must be positive."
            )

    @property
    def height(self) -> int:
        """Image height in pixels, truncated from width / aspect_ratio."""
        return int(self.width / self.aspect_ratio)


# =============================================================================
# Tiles
# =============================================================================


@dataclass
class Tile:
    """A rectangular pixel region and its resolved color buffer.

    Attributes:
        index: Row-major tile index (row 0 is the bottom of the image).
        x: Column of the tile's left edge.
        y: Row of the tile's bottom edge.
        width: Tile width in pixels (smaller at the right image edge).
        height: Tile height in pixels (smaller at the top image edge).
        buffer: Resolved 8-bit colors of shape (height, width, 3).
    """

    index: int
    x: int
    y: int
    width: int
    height: int
    buffer: npt.NDArray[np.uint8] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.buffer = np.zeros((self.height, self.width, 3), dtype=np.uint8)


def tile_grid(width: int, height: int, tile_width: int, tile_height: int) -> tuple[int, int]:
    """Number of tiles across and up the image.

    Returns:
        Tuple of (tiles_wide, tiles_high).
    """
    return math.ceil(width / tile_width), math.ceil(height / tile_height)


def partition_tiles(width: int, height: int, tile_width: int, tile_height: int) -> list[Tile]:
    """Split a width x height image into row-major tiles.

    Tiles in the last column and row are clipped to the image edge, so the
    tiles cover every pixel exactly once.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        tile_width: Nominal tile width.
        tile_height: Nominal tile height.

    Returns:
        The tiles, ordered by index.

    Raises:
        ValueError: If any argument is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions ({width}x{height}) must be positive.")
    if tile_width <= 0 or tile_height <= 0:
        raise ValueError(f"Tile size ({tile_width}x{tile_height}) must be positive.")

    tiles_wide, tiles_high = tile_grid(width, height, tile_width, tile_height)

    tiles = []
    for index in range(tiles_wide * tiles_high):
        x = (index % tiles_wide) * tile_width
        y = (index // tiles_wide) * tile_height
        tiles.append(
            Tile(
                index=index,
                x=x,
                y=y,
                width=min(tile_width, width - x),
                height=min(tile_height, height - y),
            )
        )
    return tiles


def render_tile(tile: Tile, world: Hittable, camera: Camera, settings: RenderSettings) -> Tile:
    """Render every pixel of a tile into its buffer.

    Each pixel averages samples_per_pixel camera rays, each jittered by an
    independent uniform offset within the pixel.

    Args:
        tile: The tile to fill. Owned by the calling worker until returned.
        world: The scene, shared read-only.
        camera: The camera, shared read-only.
        settings: Image and sampling configuration.

    Returns:
        The same tile, with its buffer filled.
    """
    samples = settings.samples_per_pixel
    depth = settings.max_depth
    u_scale = max(settings.width - 1, 1)
    v_scale = max(settings.height - 1, 1)

    for j in range(tile.height):
        row = tile.y + j
        for i in range(tile.width):
            col = tile.x + i
            pixel_color = Color(0.0, 0.0, 0.0)

            for _ in range(samples):
                u = (col + random_unit()) / u_scale
                v = (row + random_unit()) / v_scale
                pixel_color = pixel_color + ray_color(camera.ray_for(u, v), world, depth)

            tile.buffer[j, i] = resolve_pixel(pixel_color, samples)

    return tile


def default_thread_count() -> int:
    """Host-detected parallelism, at least 1.

    Counts the CPUs this process may run on where the platform reports
    affinity, falling back to the total CPU count elsewhere.
    """
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0)) or 1
    return os.cpu_count() or 1


# =============================================================================
# Tile Renderer
# =============================================================================


class TileRenderer:
    """Renders an image tile by tile on a pool of worker threads.

    Attributes:
        settings: Image and sampling configuration.
        threads: Number of worker threads (tiles in flight).
    """

    def __init__(self, settings: RenderSettings, threads: int | None = None) -> None:
        """Initialize the renderer.

        Args:
            settings: Image and sampling configuration.
            threads: Worker count. Defaults to the host's CPU count.

        Raises:
            ValueError: If threads is given and not positive.
        """
        if threads is None:
            threads = default_thread_count()
        if threads <= 0:
            raise ValueError(f"Thread count = {threads} must be positive.")

        self._settings = settings
        self._threads = threads
        self._image = np.zeros((settings.height, settings.width, 3), dtype=np.uint8)
        self._tiles_completed = 0

    @property
    def settings(self) -> RenderSettings:
        """Get the render settings."""
        return self._settings

    @property
    def threads(self) -> int:
        """Get the worker thread count."""
        return self._threads

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._settings.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._settings.height

    @property
    def tiles_completed(self) -> int:
        """Number of tiles merged by the last render."""
        return self._tiles_completed

    def render(
        self,
        world: Hittable,
        camera: Camera,
        callback: ProgressCallback | None = None,
    ) -> npt.NDArray[np.uint8]:
        """Render the full image.

        Args:
            world: The scene, read-only for the duration of the render.
            camera: The camera, read-only for the duration of the render.
            callback: Optional function called by the coordinator after each
                merge. Receives (completed_tiles, total_tiles).

        Returns:
            The image buffer of shape (height, width, 3), bottom row first.

        Raises:
            TileRenderError: If any tile task raised. The render is abandoned.
        """
        settings = self._settings
        tiles = partition_tiles(
            settings.width, settings.height, settings.tile_width, settings.tile_height
        )
        total = len(tiles)

        self._image.fill(0)
        self._tiles_completed = 0

        # Finished futures are pushed here by their done-callbacks
        completed: queue.Queue[Future[Tile]] = queue.Queue()
        dispatched: dict[Future[Tile], Tile] = {}
        undispatched = iter(tiles)

        with ThreadPoolExecutor(
            max_workers=self._threads, thread_name_prefix="tilepath-worker"
        ) as pool:

            def dispatch(tile: Tile) -> None:
                future = pool.submit(render_tile, tile, world, camera, settings)
                dispatched[future] = tile
                future.add_done_callback(completed.put)

            for tile in itertools.islice(undispatched, self._threads):
                dispatch(tile)

            while self._tiles_completed < total:
                future = completed.get()
                finished = self._take_tile(future, dispatched.pop(future))

                next_tile = next(undispatched, None)
                if next_tile is not None:
                    dispatch(next_tile)

                self._merge(finished)
                self._tiles_completed += 1

                if callback is not None:
                    callback(self._tiles_completed, total)

        return self._image

    @staticmethod
    def _take_tile(future: Future[Tile], tile: Tile) -> Tile:
        """Unwrap a finished tile task, making worker failure fatal."""
        try:
            return future.result()
        except Exception as exc:
            raise TileRenderError(
                f"Tile {tile.index} at ({tile.x}, {tile.y}) failed to render: {exc}"
            ) from exc

    def _merge(self, tile: Tile) -> None:
        """Copy a finished tile into its rectangle of the image buffer."""
        self._image[tile.y : tile.y + tile.height, tile.x : tile.x + tile.width] = tile.buffer

    def get_image(self) -> npt.NDArray[np.uint8]:
        """Get the image buffer as rendered, bottom row first.

        Returns:
            NumPy array of shape (height, width, 3) with dtype uint8.
        """
        return self._image

    def get_image_uint8(self) -> npt.NDArray[np.uint8]:
        """Get the image top row first, the orientation image files use.

        Returns:
            NumPy array of shape (height, width, 3) with dtype uint8.
        """
        return np.flipud(self._image).copy()

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"TileRenderer(width={self.width}, height={self.height}, "
            f"threads={self.threads}, tiles_completed={self.tiles_completed})"
        )
