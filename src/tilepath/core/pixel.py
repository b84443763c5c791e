"""Pixel resolution: sample averaging, gamma correction and quantization.

Accumulated sample sums are turned into 8-bit channel values by:
1. Dividing by the number of samples
2. Gamma-2 correction (square root per channel)
3. Clamping to [0, 0.999]
4. Scaling to [0, 256) and truncating

After the clamp every channel lies in [0, 1), so the quantized value is at
most 255.
"""

from __future__ import annotations

import math

from tilepath.core.vector import Color

# Upper clamp applied after gamma correction
MAX_INTENSITY = 0.999

# Number of quantization levels per channel
LEVELS = 256


def gamma_correct(value: float) -> float:
    """Apply gamma-2 correction to a linear channel value.

    Negative and NaN inputs map to 0.
    """
    if not value > 0.0:
        return 0.0
    return math.sqrt(value)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value to [low, high]."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def resolve_channel(total: float, samples_per_pixel: int) -> int:
    """Resolve one accumulated channel to an integer in [0, 255]."""
    corrected = gamma_correct(total / samples_per_pixel)
    return int(clamp(corrected, 0.0, MAX_INTENSITY) * LEVELS)


def resolve_pixel(color: Color, samples_per_pixel: int) -> tuple[int, int, int]:
    """Resolve an accumulated sample sum to an 8-bit RGB triple.

    Args:
        color: Sum of the linear colors of every sample for the pixel.
        samples_per_pixel: Number of samples in the sum.

    Returns:
        Tuple of (R, G, B) integers in [0, 255].

    Raises:
        ValueError: If samples_per_pixel is not positive.
    """
    if samples_per_pixel <= 0:
        raise ValueError(f"samples_per_pixel = {samples_per_pixel} must be positive.")

    return (
        resolve_channel(color.x, samples_per_pixel),
        resolve_channel(color.y, samples_per_pixel),
        resolve_channel(color.z, samples_per_pixel),
    )
