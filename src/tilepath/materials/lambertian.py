"""Lambertian (ideal diffuse) material implementation.

This module implements the Lambertian material, which models ideal diffuse
reflection: scattered rays leave the surface with a cosine-weighted
distribution around the normal.

Sampling ``normal + random_unit_vector()`` produces exactly that
distribution, so the Monte Carlo weight reduces to the albedo:

    attenuation = (BRDF * cos_theta) / pdf = albedo

Example:
    >>> from tilepath.materials.lambertian import Lambertian
    >>> matte = Lambertian((0.8, 0.8, 0.0))
    >>> # result = matte.scatter(ray, hit)  # always a ScatterResult
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tilepath.core.ray import Ray
from tilepath.core.vector import random_unit_vector
from tilepath.materials.material import AlbedoLike, Material, ScatterResult, validate_albedo

if TYPE_CHECKING:
    from tilepath.geometry.hittable import HitRecord


class Lambertian(Material):
    """Lambertian (ideal diffuse) material.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
            Represents the fraction of light reflected for each color channel.
    """

    def __init__(self, albedo: AlbedoLike) -> None:
        self.albedo = validate_albedo(albedo)

    def scatter(self, ray_in: Ray, hit: HitRecord) -> ScatterResult:
        """Sample a diffuse bounce.

        Lambertian surfaces never absorb a ray outright; darkening comes only
        from the albedo.

        Args:
            ray_in: The incoming ray (unused; diffuse scattering is
                independent of the incoming direction).
            hit: The intersection record.

        Returns:
            A ScatterResult with attenuation equal to the albedo.
        """
        direction = hit.normal + random_unit_vector()

        # Catch the degenerate case where the random vector cancels the normal
        if direction.near_zero():
            direction = hit.normal

        return ScatterResult(self.albedo, Ray(hit.point, direction))

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo!r})"
