"""Integration tests for end-to-end rendering pipeline.

This module tests the complete rendering pipeline from scene creation through
final image output. It verifies that all components work together correctly
and that the output meets basic quality criteria.

Tests are designed to be fast (low resolution, few samples, a reduced sphere
grid) while still exercising the full pipeline.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from tilepath.camera.thin_lens import Camera
from tilepath.core.scheduler import RenderSettings, TileRenderer, partition_tiles
from tilepath.core.vector import Vector3
from tilepath.geometry.hittable import HittableList
from tilepath.geometry.sphere import Sphere
from tilepath.materials.lambertian import Lambertian
from tilepath.preview.export import save_image
from tilepath.scene.weekend import WeekendSceneParams, create_weekend_scene

WIDTH = 32
ASPECT_RATIO = 16.0 / 9.0


@pytest.fixture(scope="module")
def weekend_render() -> TileRenderer:
    """Render the demo scene once for the whole module."""
    world, camera_config = create_weekend_scene(
        seed=2024, params=WeekendSceneParams(grid_extent=2, aspect_ratio=ASPECT_RATIO)
    )
    renderer = TileRenderer(
        RenderSettings(
            width=WIDTH,
            aspect_ratio=ASPECT_RATIO,
            samples_per_pixel=4,
            max_depth=8,
            tile_width=7,
            tile_height=5,
        ),
        threads=4,
    )
    renderer.render(world, Camera.from_config(camera_config))
    return renderer


class TestWeekendIntegration:
    """Integration tests for demo scene rendering."""

    def test_renders_every_tile(self, weekend_render: TileRenderer) -> None:
        """Test that the full pipeline completes."""
        settings = weekend_render.settings
        total = len(
            partition_tiles(WIDTH, settings.height, settings.tile_width, settings.tile_height)
        )
        assert weekend_render.tiles_completed == total
        assert weekend_render.get_image().shape == (settings.height, WIDTH, 3)

    def test_image_has_variation(self, weekend_render: TileRenderer) -> None:
        """Test that the render is not a flat color."""
        image = weekend_render.get_image_uint8()
        assert len(np.unique(image.reshape(-1, 3), axis=0)) > 10

    def test_top_row_is_sky(self, weekend_render: TileRenderer) -> None:
        """Test that the top of the frame sees mostly sky (saturated blue)."""
        image = weekend_render.get_image_uint8()
        assert np.mean(image[0, :, 2] == 255) > 0.5

    def test_image_is_not_black(self, weekend_render: TileRenderer) -> None:
        """Test that the scene is illuminated by the sky."""
        assert weekend_render.get_image().mean() > 50

    def test_save_ppm_and_png_agree(self, weekend_render: TileRenderer, tmp_path: Path) -> None:
        """Test that both output formats hold the same pixels."""
        ppm_path = save_image(weekend_render, tmp_path / "weekend.ppm")
        png_path = save_image(weekend_render, tmp_path / "weekend.png")

        lines = ppm_path.read_text(encoding="ascii").splitlines()
        ppm_pixels = np.array(
            [[int(v) for v in line.split()] for line in lines[3:]], dtype=np.uint8
        ).reshape(weekend_render.height, WIDTH, 3)

        with Image.open(png_path) as img:
            png_pixels = np.asarray(img)

        assert np.array_equal(ppm_pixels, png_pixels)
        assert np.array_equal(ppm_pixels, weekend_render.get_image_uint8())


def looking_down_negative_z() -> Camera:
    """Square pinhole camera at the origin with a 90 degree field of view."""
    return Camera(
        Vector3(0.0, 0.0, 0.0),
        Vector3(0.0, 0.0, -1.0),
        Vector3(0.0, 1.0, 0.0),
        90.0,
        1.0,
    )


class TestSingleSphereIntegration:
    """End-to-end tests through the camera, scheduler and merge."""

    def test_center_pixel_hits_sphere(self) -> None:
        """Test that the center pixel sees the sphere, not the sky.

        With one bounce the hit leaves no budget for the scattered ray, so
        a pixel that reaches the sphere resolves to black.
        """
        world = HittableList([Sphere(Vector3(0.0, 0.0, -1.0), 0.5, Lambertian((0.5, 0.5, 0.5)))])
        renderer = TileRenderer(
            RenderSettings(width=9, aspect_ratio=1.0, samples_per_pixel=1, max_depth=1),
            threads=2,
        )

        image = renderer.render(world, looking_down_negative_z())

        assert tuple(image[4, 4]) == (0, 0, 0)
        # Corners miss the sphere and see the sky
        assert image[0, 0].max() > 0
        assert image[8, 8].max() > 0

    def test_rows_merge_in_image_orientation(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a sphere above the view axis lands in the top rows."""
        monkeypatch.setattr("tilepath.core.scheduler.random_unit", lambda: 0.5)
        world = HittableList([Sphere(Vector3(0.0, 0.6, -1.0), 0.3, Lambertian((0.5, 0.5, 0.5)))])
        renderer = TileRenderer(
            RenderSettings(
                width=9,
                aspect_ratio=1.0,
                samples_per_pixel=1,
                max_depth=1,
                tile_width=3,
                tile_height=2,
            ),
            threads=3,
        )

        bottom_up = renderer.render(world, looking_down_negative_z())
        top_down = renderer.get_image_uint8()

        assert tuple(bottom_up[7, 4]) == (0, 0, 0)
        assert bottom_up[1, 4].max() > 0
        assert tuple(top_down[1, 4]) == (0, 0, 0)
        assert top_down[7, 4].max() > 0
