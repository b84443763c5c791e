"""Materials module for surface scattering models.

Components:
    material: Material base class and ScatterResult
    lambertian: Ideal diffuse (Lambertian) reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like materials with refraction (Schlick Fresnel)

Each material implements scatter(ray_in, hit), returning either a
ScatterResult (attenuation, scattered ray) or None when the ray is absorbed.
"""

from .dielectric import Dielectric, cannot_refract, refraction_ratio
from .lambertian import Lambertian
from .material import Material, ScatterResult, validate_albedo
from .metal import Metal

__all__ = [
    "Material",
    "ScatterResult",
    "validate_albedo",
    "Lambertian",
    "Metal",
    "Dielectric",
    "cannot_refract",
    "refraction_ratio",
]
