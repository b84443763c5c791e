"""Base material interface.

A material decides what happens to a ray that strikes a surface: it either
scatters, producing an attenuation color and a new ray, or absorbs the ray.
Concrete materials (Lambertian, Metal, Dielectric) subclass Material and
implement scatter().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, NamedTuple

from tilepath.core.ray import Ray
from tilepath.core.vector import Color

if TYPE_CHECKING:
    from tilepath.geometry.hittable import HitRecord

# Albedo may be given as a Color or as a plain (R, G, B) sequence
AlbedoLike = Color | Sequence[float]


class ScatterResult(NamedTuple):
    """Outcome of a successful scatter.

    Attributes:
        attenuation: Per-channel fraction of light carried by the new ray.
        scattered: The outgoing ray, starting at the hit point.
    """

    attenuation: Color
    scattered: Ray


class Material(ABC):
    """A surface's response to an incoming ray."""

    @abstractmethod
    def scatter(self, ray_in: Ray, hit: HitRecord) -> ScatterResult | None:
        """Scatter an incoming ray at a hit point.

        Args:
            ray_in: The ray that struck the surface.
            hit: The intersection record for the struck surface.

        Returns:
            A ScatterResult, or None if the ray is absorbed.
        """


def validate_albedo(albedo: AlbedoLike) -> Color:
    """Convert an albedo to a Color, checking energy conservation.

    Args:
        albedo: The reflectance color as a Color or (R, G, B) sequence.
            Each component should be in [0, 1].

    Returns:
        The albedo as a Color.

    Raises:
        ValueError: If the albedo does not have three components.
        ValueError: If any component is outside [0, 1].
    """
    components = tuple(albedo)
    if len(components) != 3:
        raise ValueError(f"Albedo must have 3 components, got {len(components)}.")

    for i, component in enumerate(components):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )

    return Color(*components)
