"""Preview module for image output.

Components:
    export: PPM and PNG image export utilities

Example:
    >>> from tilepath.preview import save_image
    >>> save_image(renderer, "image.ppm")  # or "image.png"
"""

from .export import (
    format_ppm,
    ppm_header,
    save_image,
    save_png_from_array,
    save_ppm_from_array,
    write_ppm,
)

__all__ = [
    "format_ppm",
    "ppm_header",
    "write_ppm",
    "save_ppm_from_array",
    "save_png_from_array",
    "save_image",
]
