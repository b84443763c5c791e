"""Ray data structure and the reflection/refraction helpers built on it.

This module provides the Ray type and the optics utilities shared by the
materials: mirror reflection, Snell's-law refraction and Schlick's
reflectance approximation.

Example:
    >>> from tilepath.core.ray import Ray
    >>> from tilepath.core.vector import Vector3
    >>> ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -1.0))
    >>> ray.at(5.0)  # Point 5 units along the ray
    Vector3(0.0, 0.0, -5.0)
"""

from __future__ import annotations

import math

from tilepath.core.vector import Point3, Vector3, dot


class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. It is not required to be
            normalized; the path tracer passes scattered directions through
            unchanged.
    """

    __slots__ = ("origin", "direction")

    def __init__(self, origin: Point3, direction: Vector3) -> None:
        self.origin = origin
        self.direction = direction

    def at(self, t: float) -> Point3:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point origin + t * direction.
        """
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin!r}, direction={self.direction!r})"


def reflect(incident: Vector3, normal: Vector3) -> Vector3:
    """Reflect an incident vector about a normal.

    Computes v - 2 * dot(v, n) * n. The normal should be unit length.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal.

    Returns:
        The reflected direction vector.
    """
    return incident - normal * (2.0 * dot(incident, normal))


def refract(unit_incident: Vector3, normal: Vector3, eta_ratio: float) -> Vector3:
    """Refract a unit incident vector through a surface using Snell's law.

    The caller is responsible for ruling out total internal reflection first.

    Args:
        unit_incident: The incoming direction (normalized).
        normal: The surface normal, facing against the incident ray.
        eta_ratio: The ratio of refractive indices (n_incident / n_transmitted).

    Returns:
        The refracted direction vector.
    """
    cos_theta = min(dot(-unit_incident, normal), 1.0)
    r_out_perp = (unit_incident + normal * cos_theta) * eta_ratio
    r_out_parallel = normal * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel


def schlick_reflectance(cosine: float, eta_ratio: float) -> float:
    """Compute Fresnel reflectance using Schlick's approximation.

    Args:
        cosine: Cosine of the angle between the incident direction and normal.
        eta_ratio: Ratio of refractive indices.

    Returns:
        The approximate probability that the ray is reflected.
    """
    r0 = (1.0 - eta_ratio) / (1.0 + eta_ratio)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5
