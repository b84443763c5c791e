"""Metal (specular reflective) material implementation.

This module implements the metal material, which models specular reflection
with optional fuzziness. Perfect metals (fuzz=0) produce mirror-like
reflections, while fuzzier metals scatter reflected rays within a ball
around the mirror direction.

The reflection formula is:
    R = I - 2(I . N)N

where I is the incident direction and N is the surface normal.

Example:
    >>> from tilepath.materials.metal import Metal
    >>> gold = Metal((0.8, 0.6, 0.2), fuzz=0.3)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tilepath.core.ray import Ray, reflect
from tilepath.core.vector import dot, random_in_unit_sphere
from tilepath.materials.material import AlbedoLike, Material, ScatterResult, validate_albedo

if TYPE_CHECKING:
    from tilepath.geometry.hittable import HitRecord

# Fuzz values above this are clamped; larger perturbations swamp the reflection
MAX_FUZZ = 1.0


class Metal(Material):
    """Metal (specular reflective) material.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
        fuzz: Radius of the random perturbation applied to the mirror
            direction, in [0, 1]. 0 = perfect mirror.
    """

    def __init__(self, albedo: AlbedoLike, fuzz: float = 0.0) -> None:
        if fuzz < 0.0:
            raise ValueError(
                f"Fuzz = {fuzz} is negative. "
                "Fuzz must be between 0 (perfect mirror) and 1 (maximum fuzz)."
            )
        self.albedo = validate_albedo(albedo)
        self.fuzz = min(float(fuzz), MAX_FUZZ)

    def scatter(self, ray_in: Ray, hit: HitRecord) -> ScatterResult | None:
        """Reflect the incoming ray about the surface normal.

        The reflected direction is perturbed by fuzz * random_in_unit_sphere().
        The ray is absorbed if the perturbed direction points back into the
        surface.

        Args:
            ray_in: The incoming ray.
            hit: The intersection record.

        Returns:
            A ScatterResult with attenuation equal to the albedo, or None
            if the ray is absorbed.
        """
        reflected = reflect(ray_in.direction, hit.normal)
        scattered = Ray(hit.point, reflected + random_in_unit_sphere() * self.fuzz)

        if dot(scattered.direction, hit.normal) <= 0.0:
            return None

        return ScatterResult(self.albedo, scattered)

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo!r}, fuzz={self.fuzz!r})"
