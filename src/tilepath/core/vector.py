"""Three-component vector type used for points, directions and colors.

This module provides the Vector3 value type and the vector utility and random
sampling functions used throughout the path tracer. The same type doubles as
a point (``Point3``) and as a linear RGB color (``Color``); multiplying two
vectors is component-wise, which is how colors are attenuated along a path.

Random sampling draws from the module-level generator of :mod:`random`, which
is safe to share between worker threads.

Example:
    >>> from tilepath.core.vector import Vector3, dot, normalize
    >>> a = Vector3(1.0, 2.0, 2.0)
    >>> a.length()
    3.0
    >>> normalize(a)
    Vector3(0.3333333333333333, 0.6666666666666666, 0.6666666666666666)
"""

from __future__ import annotations

import math
import random
from collections.abc import Iterator

# Threshold below which every component must fall for near_zero()
NEAR_ZERO_EPSILON = 1e-8


class Vector3:
    """An (x, y, z) triple of floats compared and hashed by value.

    Attributes:
        x: First component (red channel when used as a color).
        y: Second component (green channel when used as a color).
        z: Third component (blue channel when used as a color).
    """

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Vector3 | float) -> Vector3:
        if isinstance(other, Vector3):
            return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vector3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vector3:
        return Vector3(self.x * other, self.y * other, self.z * other)

    def __truediv__(self, scalar: float) -> Vector3:
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __getitem__(self, index: int) -> float:
        if index == 0:
            return self.x
        if index == 1:
            return self.y
        if index == 2:
            return self.z
        raise IndexError(f"Invalid Vector3 index {index}")

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __len__(self) -> int:
        return 3

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __repr__(self) -> str:
        return f"Vector3({self.x!r}, {self.y!r}, {self.z!r})"

    def __str__(self) -> str:
        return f"{self.x} {self.y} {self.z}"

    def length(self) -> float:
        """Compute the Euclidean length of the vector."""
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        """Compute the squared length, avoiding the square root."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def near_zero(self) -> bool:
        """Check if every component is below NEAR_ZERO_EPSILON in magnitude.

        Used to catch degenerate scatter directions before they are
        normalized or traced.
        """
        s = NEAR_ZERO_EPSILON
        return abs(self.x) < s and abs(self.y) < s and abs(self.z) < s

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the components as a plain tuple."""
        return (self.x, self.y, self.z)


# Aliases that document intent at call sites
Point3 = Vector3
Color = Vector3


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vector3, b: Vector3) -> float:
    """Compute the dot product a . b."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vector3, b: Vector3) -> Vector3:
    """Compute the cross product a x b."""
    return Vector3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def normalize(v: Vector3) -> Vector3:
    """Scale a vector to unit length.

    The input is not validated: normalizing a zero-length vector raises
    ZeroDivisionError. Callers guard against degenerate vectors with
    Vector3.near_zero() before reaching this point.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
    """
    return v / v.length()


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_unit() -> float:
    """Uniform random scalar in [0, 1)."""
    return random.random()


def random_range(low: float, high: float) -> float:
    """Uniform random scalar in [low, high)."""
    return low + (high - low) * random.random()


def random_vector(low: float = 0.0, high: float = 1.0) -> Vector3:
    """Random vector with each component drawn uniformly from [low, high)."""
    return Vector3(
        random_range(low, high),
        random_range(low, high),
        random_range(low, high),
    )


def random_in_unit_sphere() -> Vector3:
    """Generate a random point strictly inside the unit ball.

    Uses rejection sampling: candidates are drawn from the enclosing cube
    until one has squared length below 1.

    Returns:
        A random point with length < 1.
    """
    while True:
        p = random_vector(-1.0, 1.0)
        if p.length_squared() < 1.0:
            return p


def random_unit_vector() -> Vector3:
    """Random unit vector, the normalized form of random_in_unit_sphere()."""
    return normalize(random_in_unit_sphere())


def random_in_unit_disk() -> Vector3:
    """Generate a random point inside the unit disk in the xy-plane.

    Used for lens sampling in the depth-of-field camera.

    Returns:
        A random point (x, y, 0) with x^2 + y^2 < 1.
    """
    while True:
        p = Vector3(random_range(-1.0, 1.0), random_range(-1.0, 1.0), 0.0)
        if p.length_squared() < 1.0:
            return p
