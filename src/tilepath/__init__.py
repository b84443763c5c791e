"""Offline Monte Carlo path tracer with tile-parallel rendering.

This package renders scenes of spheres by recursive path tracing, with support for:
- Diffuse, metal and dielectric materials
- A look-at camera with depth of field
- Multi-sample anti-aliasing with gamma-corrected 8-bit output
- Tile-based rendering on a pool of worker threads

Subpackages:
    core: Vectors, rays, the path tracer, pixel resolution and the tile scheduler
    geometry: Hittable interface, hit records and the sphere primitive
    materials: Lambertian, metal and dielectric scattering
    camera: Thin-lens camera with ray generation
    scene: Demo scene construction
    preview: PPM and PNG image export
"""

__version__ = "0.1.0"
