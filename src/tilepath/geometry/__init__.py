"""Geometry module for shape primitives and scene aggregation.

Components:
    hittable: HitRecord, the Hittable interface and HittableList
    sphere: Sphere primitive with ray-sphere intersection

Ray-object intersection follows the pattern:
    record = shape.intersect(ray, t_min, t_max)  # HitRecord or None
"""

from .hittable import HitRecord, Hittable, HittableList
from .sphere import Sphere

__all__ = [
    "HitRecord",
    "Hittable",
    "HittableList",
    "Sphere",
]
