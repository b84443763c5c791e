"""Path tracing integrator for Monte Carlo light transport.

This module implements the recursive ray-color estimator. A ray is
intersected with the scene; on a hit the surface material scatters it and
the estimator recurses on the scattered ray, multiplying the result by the
material's attenuation. Rays that escape the scene pick up the sky gradient.

Each call follows a single scattered ray per bounce, so one call is a
single-sample estimate; averaging many calls per pixel converges toward the
rendered image.

Example:
    >>> from tilepath.core.integrator import ray_color
    >>> from tilepath.geometry.hittable import HittableList
    >>> color = ray_color(camera.ray_for(0.5, 0.5), HittableList(), depth=50)
"""

from __future__ import annotations

import math

from tilepath.core.ray import Ray
from tilepath.core.vector import Color, normalize
from tilepath.geometry.hittable import Hittable

# =============================================================================
# Rendering Constants
# =============================================================================

# Default bounce budget per camera ray
MAX_DEPTH = 50

# t_min skips hits at t ~ 0 caused by floating-point error in the scattered
# ray origin ("shadow acne")
T_MIN = 0.001
T_MAX = math.inf

BLACK = Color(0.0, 0.0, 0.0)

# Sky gradient endpoints (t=0 at the bottom, t=1 at the top)
SKY_BOTTOM = Color(1.0, 1.0, 1.0)
SKY_TOP = Color(0.5, 0.7, 1.0)


def sky_color(ray: Ray) -> Color:
    """Background color for a ray that escapes the scene.

    Linearly blends white and sky blue by the height of the unit direction.

    Args:
        ray: The escaping ray.

    Returns:
        The sky color seen along the ray.
    """
    unit_direction = normalize(ray.direction)
    t = 0.5 * (unit_direction.y + 1.0)
    return SKY_BOTTOM * (1.0 - t) + SKY_TOP * t


def ray_color(ray: Ray, world: Hittable, depth: int) -> Color:
    """Estimate the color carried back along a ray.

    Args:
        ray: The ray to trace.
        world: The scene to intersect.
        depth: Remaining bounce budget. At 0 no more light is gathered.

    Returns:
        The estimated linear RGB radiance.
    """
    if depth <= 0:
        return BLACK

    hit = world.intersect(ray, T_MIN, T_MAX)
    if hit is None:
        return sky_color(ray)

    result = hit.material.scatter(ray, hit)
    if result is None:
        return BLACK

    return result.attenuation * ray_color(result.scattered, world, depth - 1)
