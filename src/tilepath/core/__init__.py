"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vector: Vector3 value type, vector utilities and random sampling
    ray: Ray data structure, reflection/refraction helpers
    integrator: Recursive path tracing estimator (ray_color)
    pixel: Sample averaging, gamma correction and quantization
    scheduler: Tile partitioning and the threaded tile renderer

The core module handles the rendering equation integration, implementing
single-sample recursive Monte Carlo path tracing with a fixed bounce budget
and tile-parallel accumulation of samples per pixel.
"""

from .ray import Ray, reflect, refract, schlick_reflectance
from .vector import (
    Color,
    Point3,
    Vector3,
    cross,
    dot,
    normalize,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_range,
    random_unit,
    random_unit_vector,
    random_vector,
)

# Note: integrator and scheduler are NOT imported here to avoid circular imports.
# Import directly from tilepath.core.integrator or tilepath.core.scheduler when needed.

__all__ = [
    "Ray",
    "reflect",
    "refract",
    "schlick_reflectance",
    "Vector3",
    "Point3",
    "Color",
    "dot",
    "cross",
    "normalize",
    "random_unit",
    "random_range",
    "random_vector",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_in_unit_disk",
]
