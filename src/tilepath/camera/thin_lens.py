"""Thin-lens camera model for perspective ray generation with depth of field.

This module implements a positionable camera that generates primary rays.
The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view in degrees
- Arbitrary aspect ratios
- Depth of field via a finite aperture focused at focus_distance

The camera builds an orthonormal basis (x, y, z) from the view parameters:
- z: points from lookat toward lookfrom (opposite view direction)
- x: points right in the image plane
- y: points up in the image plane

With aperture = 0 the camera degenerates to a pinhole and every ray starts
at lookfrom.

Example:
    >>> from tilepath.camera.thin_lens import Camera, CameraConfig
    >>>
    >>> # Create camera looking at origin from z=3
    >>> config = CameraConfig(
    ...     lookfrom=(0.0, 0.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=16.0 / 9.0,
    ... )
    >>> camera = Camera.from_config(config)
    >>> ray = camera.ray_for(0.5, 0.5)  # Ray through image center
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from tilepath.core.ray import Ray
from tilepath.core.vector import Point3, Vector3, cross, normalize, random_in_unit_disk

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class CameraConfig:
    """Configuration for a thin-lens (perspective) camera.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
        aperture: Lens diameter. 0 disables depth of field.
        focus_distance: Distance from lookfrom to the plane of perfect focus.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float
    aperture: float = 0.0
    focus_distance: float = 1.0

    def __post_init__(self) -> None:
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"Vertical field of view = {self.vfov} must be in (0, 180) degrees.")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio = {self.aspect_ratio} must be positive.")
        if self.aperture < 0.0:
            raise ValueError(f"Aperture = {self.aperture} must not be negative.")
        if self.focus_distance <= 0.0:
            raise ValueError(f"Focus distance = {self.focus_distance} must be positive.")
        if tuple(self.lookfrom) == tuple(self.lookat):
            raise ValueError("lookfrom and lookat must be different points.")
        view = Vector3(*self.lookfrom) - Vector3(*self.lookat)
        if cross(Vector3(*self.vup), view).near_zero():
            raise ValueError(
                f"vup = {tuple(self.vup)} is parallel to the view direction "
                "(or zero); the camera orientation is undefined."
            )


# =============================================================================
# Camera
# =============================================================================


class Camera:
    """Immutable per-render camera mapping image coordinates to rays.

    Attributes:
        origin: Camera position.
        x: Right basis vector.
        y: Up basis vector.
        z: Backward basis vector (opposite the view direction).
        horizontal: Full viewport width vector at the focus plane.
        vertical: Full viewport height vector at the focus plane.
        lower_left_corner: Lower-left corner of the viewport at the focus plane.
        lens_radius: Half the aperture.
    """

    def __init__(
        self,
        lookfrom: Point3,
        lookat: Point3,
        vup: Vector3,
        vfov: float,
        aspect_ratio: float,
        aperture: float = 0.0,
        focus_distance: float = 1.0,
    ) -> None:
        """Compute the basis and viewport geometry.

        Args:
            lookfrom: Camera position.
            lookat: Target point.
            vup: World up direction.
            vfov: Vertical field of view in degrees.
            aspect_ratio: Image width / height.
            aperture: Lens diameter (0 = pinhole).
            focus_distance: Distance to the plane of focus.

        Raises:
            ValueError: If vup is parallel to the view direction.
        """
        theta = math.radians(vfov)
        h = math.tan(theta / 2.0)

        # Viewport dimensions at unit distance
        viewport_height = 2.0 * h
        viewport_width = viewport_height * aspect_ratio

        self.z = normalize(lookfrom - lookat)
        right = cross(vup, self.z)
        if right.near_zero():
            raise ValueError(f"vup = {vup!r} is parallel to the view direction.")
        self.x = normalize(right)
        self.y = cross(self.z, self.x)

        self.origin = lookfrom
        self.horizontal = self.x * (viewport_width * focus_distance)
        self.vertical = self.y * (viewport_height * focus_distance)

        # Origin - z*focus (move forward) - horizontal/2 (left) - vertical/2 (down)
        self.lower_left_corner = (
            self.origin - self.horizontal / 2.0 - self.vertical / 2.0 - self.z * focus_distance
        )
        self.lens_radius = aperture / 2.0

    @classmethod
    def from_config(cls, config: CameraConfig) -> Camera:
        """Build a camera from a CameraConfig."""
        return cls(
            lookfrom=Vector3(*config.lookfrom),
            lookat=Vector3(*config.lookat),
            vup=Vector3(*config.vup),
            vfov=config.vfov,
            aspect_ratio=config.aspect_ratio,
            aperture=config.aperture,
            focus_distance=config.focus_distance,
        )

    def ray_for(self, u: float, v: float) -> Ray:
        """Generate a ray through normalized image coordinates (u, v).

        The coordinates are normalized:
        - u = 0: left edge, u = 1: right edge
        - v = 0: bottom edge, v = 1: top edge

        When the lens radius is positive the ray origin is jittered across
        the lens disk, blurring everything off the focus plane.

        Args:
            u: Horizontal coordinate.
            v: Vertical coordinate.

        Returns:
            A Ray toward the specified point on the focus plane. The
            direction is not normalized.
        """
        origin = self.origin
        if self.lens_radius > 0.0:
            rd = random_in_unit_disk() * self.lens_radius
            origin = origin + self.x * rd.x + self.y * rd.y

        direction = self.lower_left_corner + self.horizontal * u + self.vertical * v - origin
        return Ray(origin, direction)

    def get_camera_info(self) -> dict[str, tuple[float, float, float]]:
        """Get camera vectors for debugging.

        Returns:
            Dictionary with origin, x, y, z, horizontal, vertical, lower_left.
        """
        return {
            "origin": self.origin.to_tuple(),
            "x": self.x.to_tuple(),
            "y": self.y.to_tuple(),
            "z": self.z.to_tuple(),
            "horizontal": self.horizontal.to_tuple(),
            "vertical": self.vertical.to_tuple(),
            "lower_left": self.lower_left_corner.to_tuple(),
        }
