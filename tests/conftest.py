"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules, including seeding
of the module-level random generator so sampled tests are reproducible.
"""

import random

import pytest

from tilepath.core.vector import Vector3
from tilepath.geometry.hittable import HitRecord
from tilepath.materials.lambertian import Lambertian


@pytest.fixture(autouse=True)
def seed_random():
    """Seed the random generator before each test.

    This ensures tests are isolated from each other's random draws.
    """
    random.seed(42)
    yield


@pytest.fixture
def gray():
    """A mid-gray Lambertian material."""
    return Lambertian((0.5, 0.5, 0.5))


@pytest.fixture
def make_hit(gray):
    """Factory for hit records on a surface facing +Y at the origin."""

    def _make_hit(
        normal=Vector3(0.0, 1.0, 0.0),
        front_face=True,
        material=None,
        point=Vector3(0.0, 0.0, 0.0),
        t=1.0,
    ):
        return HitRecord(
            point=point,
            normal=normal,
            t=t,
            front_face=front_face,
            material=material if material is not None else gray,
        )

    return _make_hit
