"""Dielectric (glass/water) material implementation.

This module implements the dielectric material, which models transparent
materials like glass and water with refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when (n1 / n2) * sin(theta1) > 1

The material randomly chooses between reflection and refraction based on
the Fresnel reflectance probability, which increases at grazing angles.

Example:
    >>> from tilepath.materials.dielectric import Dielectric
    >>> glass = Dielectric(1.5)
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from tilepath.core.ray import Ray, reflect, refract, schlick_reflectance
from tilepath.core.vector import Color, dot, normalize, random_unit
from tilepath.materials.material import Material, ScatterResult

if TYPE_CHECKING:
    from tilepath.geometry.hittable import HitRecord

# Clear dielectrics do not tint transmitted or reflected light
WHITE = Color(1.0, 1.0, 1.0)


def refraction_ratio(ior: float, front_face: bool) -> float:
    """Ratio of refractive indices for a ray crossing the surface.

    If hitting from outside (air to material): 1 / ior.
    If hitting from inside (material to air): ior.
    """
    return 1.0 / ior if front_face else ior


def cannot_refract(eta_ratio: float, cos_theta: float) -> bool:
    """Check for total internal reflection.

    This occurs when sin(theta_t) = eta_ratio * sin(theta_i) would exceed 1.

    Args:
        eta_ratio: Ratio of refractive indices (n_incident / n_transmitted).
        cos_theta: Cosine of the incident angle.

    Returns:
        True if no refracted ray exists.
    """
    sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
    return eta_ratio * sin_theta > 1.0


class Dielectric(Material):
    """Dielectric (glass/water) material.

    Attributes:
        ior: Index of refraction. Common values:
            - Air: 1.0
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4
    """

    def __init__(self, ior: float) -> None:
        if ior <= 0.0:
            raise ValueError(f"Index of refraction = {ior} must be positive.")
        self.ior = float(ior)

    def scatter(self, ray_in: Ray, hit: HitRecord) -> ScatterResult:
        """Reflect or refract the incoming ray.

        Reflects on total internal reflection, or with probability given by
        Schlick's reflectance; refracts otherwise. Dielectrics never absorb.

        Args:
            ray_in: The incoming ray.
            hit: The intersection record; front_face selects the side.

        Returns:
            A ScatterResult with white attenuation.
        """
        eta_ratio = refraction_ratio(self.ior, hit.front_face)
        unit_direction = normalize(ray_in.direction)

        cos_theta = min(dot(-unit_direction, hit.normal), 1.0)

        if (
            cannot_refract(eta_ratio, cos_theta)
            or schlick_reflectance(cos_theta, eta_ratio) > random_unit()
        ):
            direction = reflect(unit_direction, hit.normal)
        else:
            direction = refract(unit_direction, hit.normal, eta_ratio)

        return ScatterResult(WHITE, Ray(hit.point, direction))

    def __repr__(self) -> str:
        return f"Dielectric(ior={self.ior!r})"
