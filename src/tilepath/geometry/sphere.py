"""Sphere primitive with ray-sphere intersection.

The intersection uses the half-b form of the quadratic formula: with
``h = dot(oc, D)`` in place of ``b = 2 * dot(oc, D)`` the factors of two and
four cancel symbolically, which keeps the discriminant well conditioned.

Example:
    >>> from tilepath.core.vector import Vector3
    >>> from tilepath.geometry.sphere import Sphere
    >>> from tilepath.materials.lambertian import Lambertian
    >>> sphere = Sphere(Vector3(0.0, 0.0, -1.0), 0.5, Lambertian((0.5, 0.5, 0.5)))
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from tilepath.core.ray import Ray
from tilepath.core.vector import Point3, dot
from tilepath.geometry.hittable import HitRecord, Hittable

if TYPE_CHECKING:
    from tilepath.materials.material import Material


class Sphere(Hittable):
    """A sphere defined by center point, radius and surface material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        material: The material assigned to the whole surface.
    """

    __slots__ = ("center", "radius", "material")

    def __init__(self, center: Point3, radius: float, material: Material) -> None:
        if radius <= 0.0:
            raise ValueError(f"Sphere radius = {radius} must be positive.")
        self.center = center
        self.radius = float(radius)
        self.material = material

    def intersect(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Test for ray-sphere intersection.

        Solves |O + tD - C|^2 = r^2 for t. Expanding gives

            a*t^2 + 2*h*t + c = 0

        where:
            oc = O - C
            a = dot(D, D)
            h = dot(oc, D)  (half of the traditional b)
            c = dot(oc, oc) - r^2

        The nearer root is tried first, then the farther one; a root is
        accepted only when it lies strictly inside (t_min, t_max).

        Args:
            ray: The ray to test.
            t_min: Minimum accepted ray parameter (avoids self-intersection).
            t_max: Maximum accepted ray parameter.

        Returns:
            A HitRecord for the accepted root, or None on a miss.
        """
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        h = dot(oc, ray.direction)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0.0:
            return None

        sqrt_d = math.sqrt(discriminant)
        root = (-h - sqrt_d) / a
        if not t_min < root < t_max:
            root = (-h + sqrt_d) / a
            if not t_min < root < t_max:
                return None

        point = ray.at(root)
        outward_normal = (point - self.center) / self.radius
        return HitRecord.from_outward_normal(ray, root, point, outward_normal, self.material)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center!r}, radius={self.radius!r}, material={self.material!r})"
