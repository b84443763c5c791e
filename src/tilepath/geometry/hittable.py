"""Intersection interface shared by every shape in the scene.

This module defines the HitRecord produced by an intersection query, the
abstract Hittable base class, and HittableList, the ordered collection that
answers "what does this ray hit first?" for the whole scene.

Intersection is a pure query: ``intersect`` returns a new HitRecord for the
nearest accepted hit or None, and never mutates shared state, so a single
world can be read concurrently by every render worker.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tilepath.core.ray import Ray
from tilepath.core.vector import Point3, Vector3, dot

if TYPE_CHECKING:
    from tilepath.materials.material import Material


@dataclass(frozen=True)
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        point: The 3D point where the ray intersected the surface.
        normal: The unit surface normal, always facing against the incoming
            ray (flipped from the geometric normal on back-face hits).
        t: The ray parameter at the intersection.
        front_face: True if the ray hit the outside of the surface, i.e. the
            geometric outward normal already faced the ray.
        material: The material of the surface that was struck.
    """

    point: Point3
    normal: Vector3
    t: float
    front_face: bool
    material: Material

    @classmethod
    def from_outward_normal(
        cls,
        ray: Ray,
        t: float,
        point: Point3,
        outward_normal: Vector3,
        material: Material,
    ) -> HitRecord:
        """Build a record, orienting the normal against the incoming ray.

        Args:
            ray: The ray that produced the hit.
            t: The ray parameter at the hit.
            point: The hit point.
            outward_normal: The unit geometric normal pointing out of the shape.
            material: The material at the hit point.

        Returns:
            A HitRecord whose normal opposes ray.direction.
        """
        front_face = dot(ray.direction, outward_normal) < 0.0
        normal = outward_normal if front_face else -outward_normal
        return cls(
            point=point,
            normal=normal,
            t=t,
            front_face=front_face,
            material=material,
        )


class Hittable(ABC):
    """An object a ray can intersect."""

    @abstractmethod
    def intersect(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Find the nearest intersection with t strictly inside (t_min, t_max).

        Args:
            ray: The ray to test.
            t_min: Lower bound of accepted ray parameters (exclusive).
            t_max: Upper bound of accepted ray parameters (exclusive).

        Returns:
            The HitRecord of the nearest accepted intersection, or None.
        """


class HittableList(Hittable):
    """Ordered collection of hittables treated as a single scene.

    The list is populated before rendering and only read during it.
    """

    def __init__(self, objects: Iterable[Hittable] = ()) -> None:
        self._objects: list[Hittable] = list(objects)

    def add(self, obj: Hittable) -> None:
        """Append an object to the scene."""
        self._objects.append(obj)

    def clear(self) -> None:
        """Remove every object from the scene."""
        self._objects.clear()

    @property
    def objects(self) -> tuple[Hittable, ...]:
        """The scene members in insertion order."""
        return tuple(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self._objects)

    def intersect(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Return the globally nearest hit across all members.

        Folds over the members, shrinking the upper bound of the search
        interval to the nearest hit found so far, so each later member only
        reports hits in front of the current candidate.
        """
        closest: HitRecord | None = None
        nearest = t_max
        for obj in self._objects:
            record = obj.intersect(ray, t_min, nearest)
            if record is not None:
                closest = record
                nearest = record.t
        return closest
