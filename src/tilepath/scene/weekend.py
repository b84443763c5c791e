"""Demo scene: a field of random small spheres around three feature spheres.

The scene consists of:
- A huge Lambertian sphere acting as the ground
- A glass sphere in the center, flanked by a brushed-silver metal sphere
  on the left and a very fuzzy gold metal sphere on the right
- A grid of small spheres with random materials
  (70% Lambertian, 20% metal, 10% dielectric)

The camera looks from (3, 1, 2) toward the center sphere with a narrow field
of view and a small aperture focused on the target.

Example:
    >>> from tilepath.camera.thin_lens import Camera
    >>> from tilepath.scene.weekend import create_weekend_scene
    >>>
    >>> world, camera_config = create_weekend_scene(seed=42)
    >>> camera = Camera.from_config(camera_config)
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from tilepath.camera.thin_lens import CameraConfig
from tilepath.core.vector import Color, Point3
from tilepath.geometry.hittable import HittableList
from tilepath.geometry.sphere import Sphere
from tilepath.materials.dielectric import Dielectric
from tilepath.materials.lambertian import Lambertian
from tilepath.materials.material import Material
from tilepath.materials.metal import Metal

# =============================================================================
# Scene Parameters
# =============================================================================


@dataclass
class WeekendSceneParams:
    """Parameters for configuring the demo scene.

    Attributes:
        grid_extent: Small spheres are placed on integer cells in
            [-grid_extent, grid_extent) along x and z.
        small_radius: Radius of the random small spheres.
        aspect_ratio: Camera aspect ratio.
        vfov: Vertical field of view in degrees.
        aperture: Lens diameter.
    """

    grid_extent: int = 10
    small_radius: float = 0.2
    aspect_ratio: float = 16.0 / 9.0
    vfov: float = 30.0
    aperture: float = 0.1


# =============================================================================
# Scene Constants
# =============================================================================

GROUND_CENTER = (0.0, -1000.5, -1.0)
GROUND_RADIUS = 1000.0
GROUND_ALBEDO = (0.8, 0.8, 0.6)

FEATURE_RADIUS = 0.5
CENTER_SPHERE_IOR = 1.5
LEFT_SPHERE_ALBEDO = (0.8, 0.8, 0.8)
LEFT_SPHERE_FUZZ = 0.3
RIGHT_SPHERE_ALBEDO = (0.8, 0.6, 0.2)
RIGHT_SPHERE_FUZZ = 0.9

# Height of the ground surface the small spheres rest on
GROUND_LEVEL = -0.5

# Cumulative thresholds for choosing a small sphere's material
LAMBERTIAN_THRESHOLD = 0.7
METAL_THRESHOLD = 0.9

CAMERA_LOOKFROM = (3.0, 1.0, 2.0)
CAMERA_LOOKAT = (0.0, 0.0, -1.0)
CAMERA_VUP = (0.0, 1.0, 0.0)


# =============================================================================
# Scene Factory
# =============================================================================


def _random_material(rng: random.Random) -> Material:
    """Pick a random material for a small sphere."""
    choice = rng.random()

    if choice < LAMBERTIAN_THRESHOLD:
        albedo = Color(rng.random(), rng.random(), rng.random()) * Color(
            rng.random(), rng.random(), rng.random()
        )
        return Lambertian(albedo)

    if choice < METAL_THRESHOLD:
        albedo = Color(rng.uniform(0.5, 1.0), rng.uniform(0.5, 1.0), rng.uniform(0.5, 1.0))
        return Metal(albedo, fuzz=rng.random())

    return Dielectric(rng.random() + 1.0)


def create_weekend_scene(
    seed: int | None = None,
    params: WeekendSceneParams | None = None,
) -> tuple[HittableList, CameraConfig]:
    """Create the demo scene and its camera configuration.

    Args:
        seed: Seed for the sphere layout and materials. None draws a fresh
            layout each call.
        params: Optional WeekendSceneParams. If None, uses the defaults.

    Returns:
        A tuple of (world, camera_config).
    """
    if params is None:
        params = WeekendSceneParams()

    rng = random.Random(seed)
    world = HittableList()

    world.add(Sphere(Point3(*GROUND_CENTER), GROUND_RADIUS, Lambertian(GROUND_ALBEDO)))
    world.add(Sphere(Point3(0.0, 0.0, -1.0), FEATURE_RADIUS, Dielectric(CENTER_SPHERE_IOR)))
    world.add(
        Sphere(
            Point3(-1.0, 0.0, -1.0),
            FEATURE_RADIUS,
            Metal(LEFT_SPHERE_ALBEDO, fuzz=LEFT_SPHERE_FUZZ),
        )
    )
    world.add(
        Sphere(
            Point3(1.0, 0.0, -1.0),
            FEATURE_RADIUS,
            Metal(RIGHT_SPHERE_ALBEDO, fuzz=RIGHT_SPHERE_FUZZ),
        )
    )

    radius = params.small_radius
    for x in range(-params.grid_extent, params.grid_extent):
        for z in range(-params.grid_extent, params.grid_extent):
            center = Point3(
                x + 0.9 * rng.random(),
                GROUND_LEVEL + radius,
                z + 0.9 * rng.random(),
            )
            world.add(Sphere(center, radius, _random_material(rng)))

    focus_distance = math.dist(CAMERA_LOOKFROM, CAMERA_LOOKAT)
    camera_config = CameraConfig(
        lookfrom=CAMERA_LOOKFROM,
        lookat=CAMERA_LOOKAT,
        vup=CAMERA_VUP,
        vfov=params.vfov,
        aspect_ratio=params.aspect_ratio,
        aperture=params.aperture,
        focus_distance=focus_distance,
    )

    return world, camera_config
