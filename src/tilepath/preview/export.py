"""Image export utilities for rendered images.

This module provides functions for saving rendered images to files.
Images passed in here are already resolved 8-bit arrays of shape (H, W, 3)
with the top row first; TileRenderer.get_image_uint8() produces that layout.

Supported formats:
    - PPM (ASCII "P3", one "R G B" line per pixel)
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from tilepath.preview.export import save_image
    >>> from tilepath.core.scheduler import RenderSettings, TileRenderer
    >>>
    >>> renderer = TileRenderer(RenderSettings(width=320))
    >>> renderer.render(world, camera)
    >>> save_image(renderer, "image.ppm")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from tilepath.core.scheduler import TileRenderer

# Maximum channel value declared in the PPM header
PPM_MAX_VALUE = 255


def _check_image(image: npt.NDArray[np.uint8]) -> None:
    """Raise if image is not an (H, W, 3) uint8 array."""
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Image must have shape (H, W, 3), got {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Image must have dtype uint8, got {image.dtype}")


def ppm_header(width: int, height: int) -> str:
    """Build the P3 header for a width x height image."""
    return f"P3\n{width} {height}\n{PPM_MAX_VALUE}\n"


def format_ppm(image: npt.NDArray[np.uint8]) -> str:
    """Encode an image as ASCII PPM text.

    Args:
        image: 8-bit image of shape (H, W, 3), top row first.

    Returns:
        The header followed by one "R G B" line per pixel, row by row.

    Raises:
        ValueError: If the array is not an (H, W, 3) uint8 image.
    """
    _check_image(image)
    height, width, _ = image.shape
    lines = [f"{r} {g} {b}\n" for r, g, b in image.reshape(-1, 3).tolist()]
    return ppm_header(width, height) + "".join(lines)


def write_ppm(image: npt.NDArray[np.uint8], stream: TextIO) -> None:
    """Write an image as ASCII PPM to an open text stream.

    Args:
        image: 8-bit image of shape (H, W, 3), top row first.
        stream: Destination text stream.
    """
    stream.write(format_ppm(image))


def save_ppm_from_array(image: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save a NumPy array as an ASCII PPM file.

    Args:
        image: 8-bit image of shape (H, W, 3), top row first.
        filepath: Output file path.

    Raises:
        OSError: If the file cannot be created or written.
    """
    text = format_ppm(image)
    with open(filepath, "w", encoding="ascii", newline="\n") as f:
        f.write(text)


def save_png_from_array(image: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save a NumPy array as a PNG file.

    Args:
        image: 8-bit image of shape (H, W, 3), top row first.
        filepath: Output file path (should end in .png).

    Raises:
        OSError: If the file cannot be created or written.
    """
    _check_image(image)
    pil_image = PILImage.fromarray(image)
    pil_image.save(filepath)


def save_image(renderer: TileRenderer, filepath: str | Path) -> Path:
    """Save a rendered image, choosing the format from the file suffix.

    A ".png" suffix writes PNG; anything else writes ASCII PPM.

    Args:
        renderer: The TileRenderer holding a finished render.
        filepath: Output file path.

    Returns:
        The output path.

    Raises:
        OSError: If the file cannot be created or written.
    """
    path = Path(filepath)
    image = renderer.get_image_uint8()

    if path.suffix.lower() == ".png":
        save_png_from_array(image, path)
    else:
        save_ppm_from_array(image, path)

    return path
