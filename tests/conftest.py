"""Pytest configuration for raycore tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def scene():
    """Create a fresh Scene for each test."""
    from raycore.scene.world import Scene

    return Scene()


@pytest.fixture
def unit_sphere():
    """An untransformed unit sphere at the origin."""
    from raycore.geometry.sphere import Sphere

    return Sphere(0)
