"""Pytest configuration for spheretrace tests.

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


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear scene data before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here so the Taichi fields are created after ti.init()
    from src.spheretrace.materials.diffuse import clear_diffuse_materials
    from src.spheretrace.scene.intersection import clear_scene
    from src.spheretrace.scene.lights import clear_lights

    def _clear_all():
        clear_scene()
        clear_diffuse_materials()
        clear_lights()

        from src.spheretrace.core.integrator import clear_render_target

        clear_render_target()

    _clear_all()

    yield

    _clear_all()
