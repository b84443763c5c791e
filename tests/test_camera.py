"""Tests for the thin-lens camera.

Tests cover:
- CameraConfig validation
- Orthonormal basis construction
- Ray generation through the image center and corners
- Lens sampling for depth of field
"""

import math

import pytest

from tilepath.camera.thin_lens import Camera, CameraConfig
from tilepath.core.vector import Vector3, dot, normalize


@pytest.fixture
def front_config():
    """Camera at z=3 looking at the origin."""
    return CameraConfig(
        lookfrom=(0.0, 0.0, 3.0),
        lookat=(0.0, 0.0, 0.0),
        vup=(0.0, 1.0, 0.0),
        vfov=90.0,
        aspect_ratio=2.0,
    )


def close(a, b, tol=1e-9):
    return (a - b).length() < tol


class TestCameraConfig:
    """Tests for CameraConfig validation."""

    @pytest.mark.parametrize("vfov", [0.0, 180.0, -10.0])
    def test_rejects_bad_vfov(self, vfov):
        """Test that vfov must be within (0, 180)."""
        with pytest.raises(ValueError, match="field of view"):
            CameraConfig((0, 0, 1), (0, 0, 0), (0, 1, 0), vfov=vfov, aspect_ratio=1.0)

    def test_rejects_bad_aspect_ratio(self):
        """Test that aspect ratio must be positive."""
        with pytest.raises(ValueError, match="Aspect ratio"):
            CameraConfig((0, 0, 1), (0, 0, 0), (0, 1, 0), vfov=40.0, aspect_ratio=0.0)

    def test_rejects_negative_aperture(self):
        """Test that aperture cannot be negative."""
        with pytest.raises(ValueError, match="Aperture"):
            CameraConfig((0, 0, 1), (0, 0, 0), (0, 1, 0), 40.0, 1.0, aperture=-0.1)

    def test_rejects_non_positive_focus_distance(self):
        """Test that focus distance must be positive."""
        with pytest.raises(ValueError, match="Focus distance"):
            CameraConfig((0, 0, 1), (0, 0, 0), (0, 1, 0), 40.0, 1.0, focus_distance=0.0)

    def test_rejects_coincident_points(self):
        """Test that lookfrom and lookat must differ."""
        with pytest.raises(ValueError, match="different points"):
            CameraConfig((1, 1, 1), (1, 1, 1), (0, 1, 0), 40.0, 1.0)

    @pytest.mark.parametrize("vup", [(0, 1, 0), (0, -2, 0), (0, 0, 0)])
    def test_rejects_vup_parallel_to_view(self, vup):
        """Test that looking straight along vup leaves the basis undefined."""
        with pytest.raises(ValueError, match="parallel to the view direction"):
            CameraConfig((0, 5, 0), (0, 0, 0), vup, 40.0, 1.0)

    def test_accepts_vup_slightly_off_axis(self):
        """Test that a nearly vertical view with a tilted vup is valid."""
        config = CameraConfig((0, 5, 0), (0, 0, 0), (0, 1, 0.01), 40.0, 1.0)
        assert Camera.from_config(config).x.length() > 0.99

    def test_camera_rejects_vup_parallel_to_view(self):
        """Test that constructing a Camera directly is validated too."""
        with pytest.raises(ValueError, match="parallel to the view direction"):
            Camera(
                lookfrom=Vector3(0.0, 0.0, 3.0),
                lookat=Vector3(0.0, 0.0, 0.0),
                vup=Vector3(0.0, 0.0, 1.0),
                vfov=40.0,
                aspect_ratio=1.0,
            )


class TestCameraBasis:
    """Tests for the camera's orthonormal basis."""

    def test_axis_aligned_basis(self, front_config):
        """Test basis vectors for a camera looking down -Z."""
        camera = Camera.from_config(front_config)
        assert close(camera.z, Vector3(0.0, 0.0, 1.0))
        assert close(camera.x, Vector3(1.0, 0.0, 0.0))
        assert close(camera.y, Vector3(0.0, 1.0, 0.0))

    def test_basis_is_orthonormal_for_oblique_view(self):
        """Test that the basis is orthonormal for an arbitrary view."""
        camera = Camera(
            lookfrom=Vector3(3.0, 1.0, 2.0),
            lookat=Vector3(0.0, 0.0, -1.0),
            vup=Vector3(0.0, 1.0, 0.0),
            vfov=30.0,
            aspect_ratio=16.0 / 9.0,
        )
        for axis in (camera.x, camera.y, camera.z):
            assert abs(axis.length() - 1.0) < 1e-12
        assert abs(dot(camera.x, camera.y)) < 1e-12
        assert abs(dot(camera.y, camera.z)) < 1e-12
        assert abs(dot(camera.z, camera.x)) < 1e-12
        # z points back toward the camera position
        assert close(camera.z, normalize(Vector3(3.0, 1.0, 3.0)))

    def test_viewport_size(self, front_config):
        """Test viewport extent from vfov and aspect ratio."""
        camera = Camera.from_config(front_config)
        # vfov 90 gives viewport height 2 at unit focus distance
        assert abs(camera.vertical.length() - 2.0) < 1e-9
        assert abs(camera.horizontal.length() - 4.0) < 1e-9

    def test_camera_info(self, front_config):
        """Test the debug dictionary of camera vectors."""
        info = Camera.from_config(front_config).get_camera_info()
        assert set(info) == {"origin", "x", "y", "z", "horizontal", "vertical", "lower_left"}
        assert info["origin"] == (0.0, 0.0, 3.0)


class TestRayGeneration:
    """Tests for Camera.ray_for."""

    def test_center_ray_points_at_target(self, front_config):
        """Test that the center ray travels along the view direction."""
        camera = Camera.from_config(front_config)
        ray = camera.ray_for(0.5, 0.5)

        assert ray.origin == Vector3(0.0, 0.0, 3.0)
        assert close(ray.direction, Vector3(0.0, 0.0, -1.0))

    def test_corner_rays(self, front_config):
        """Test that (0, 0) and (1, 1) reach opposite viewport corners."""
        camera = Camera.from_config(front_config)

        lower_left = camera.ray_for(0.0, 0.0)
        upper_right = camera.ray_for(1.0, 1.0)

        assert close(lower_left.direction, Vector3(-2.0, -1.0, -1.0))
        assert close(upper_right.direction, Vector3(2.0, 1.0, -1.0))

    def test_focus_distance_scales_viewport(self):
        """Test that the center ray reaches the focus plane."""
        camera = Camera(
            lookfrom=Vector3(0.0, 0.0, 0.0),
            lookat=Vector3(0.0, 0.0, -1.0),
            vup=Vector3(0.0, 1.0, 0.0),
            vfov=60.0,
            aspect_ratio=1.0,
            focus_distance=5.0,
        )
        ray = camera.ray_for(0.5, 0.5)
        assert close(ray.direction, Vector3(0.0, 0.0, -5.0))


class TestLens:
    """Tests for depth of field sampling."""

    def test_pinhole_rays_share_origin(self, front_config):
        """Test that aperture 0 never jitters the ray origin."""
        camera = Camera.from_config(front_config)
        for _ in range(50):
            assert camera.ray_for(0.3, 0.7).origin == Vector3(0.0, 0.0, 3.0)

    def test_lens_offset_stays_in_disk(self):
        """Test that jittered origins lie on the lens disk around lookfrom."""
        camera = Camera(
            lookfrom=Vector3(0.0, 0.0, 3.0),
            lookat=Vector3(0.0, 0.0, 0.0),
            vup=Vector3(0.0, 1.0, 0.0),
            vfov=40.0,
            aspect_ratio=1.0,
            aperture=2.0,
            focus_distance=3.0,
        )
        origins = set()
        for _ in range(200):
            origin = camera.ray_for(0.5, 0.5).origin
            offset = origin - Vector3(0.0, 0.0, 3.0)
            assert offset.length() < camera.lens_radius
            assert abs(offset.z) < 1e-12
            origins.add(origin)
        assert len(origins) > 1

    def test_lens_rays_converge_on_focus_plane(self):
        """Test that every lens sample for a pixel hits the same focus point."""
        camera = Camera(
            lookfrom=Vector3(0.0, 0.0, 3.0),
            lookat=Vector3(0.0, 0.0, 0.0),
            vup=Vector3(0.0, 1.0, 0.0),
            vfov=40.0,
            aspect_ratio=1.5,
            aperture=0.5,
            focus_distance=3.0,
        )
        target = camera.lower_left_corner + camera.horizontal * 0.25 + camera.vertical * 0.75

        for _ in range(50):
            ray = camera.ray_for(0.25, 0.75)
            assert close(ray.at(1.0), target)
        assert math.isclose(camera.lens_radius, 0.25)
