"""Tests for the default two-sphere scene."""

import math

import pytest


class TestDefaultScene:
    """Tests for create_default_scene()."""

    def test_scene_contents(self):
        """Test the scene holds the two reference spheres and one light."""
        from src.spheretrace.scene.default_scene import create_default_scene

        scene, camera = create_default_scene()

        assert scene.get_sphere_count() == 2
        assert scene.get_light_count() == 1
        assert camera.fov == pytest.approx(math.pi / 3.0)

        chartreuse, red = scene.spheres
        assert chartreuse.center == (-3.0, 0.0, -16.0)
        assert chartreuse.radius == 2.0
        assert scene.get_material_info(chartreuse.material_id).diffuse_color == (0.5, 0.8, 0.3)
        assert red.center == (2.0, 1.0, -16.0)
        assert red.radius == 5.0
        assert scene.get_material_info(red.material_id).diffuse_color == (1.0, 0.5, 0.5)

    def test_without_light(self):
        """Test the light can be left out."""
        from src.spheretrace.scene.default_scene import create_default_scene

        scene, _ = create_default_scene(with_light=False)
        assert scene.get_light_count() == 0

    def test_custom_fov(self):
        """Test the camera takes the requested field of view."""
        from src.spheretrace.scene.default_scene import create_default_scene

        _, camera = create_default_scene(fov=math.pi / 4.0)
        assert camera.fov == pytest.approx(math.pi / 4.0)

    def test_unlit_center_pixel_is_red(self):
        """Test the image center sees the red sphere's bare color without lights."""
        from src.spheretrace.camera.pinhole import setup_camera
        from src.spheretrace.core.integrator import render_pixel, setup_render_target
        from src.spheretrace.scene.default_scene import create_default_scene

        _, camera = create_default_scene(with_light=False)
        setup_camera(camera)
        setup_render_target(65, 65)

        assert render_pixel(32, 32) == pytest.approx((1.0, 0.5, 0.5), abs=1e-6)

    def test_corner_pixel_is_background(self):
        """Test the top-left corner misses both spheres."""
        from src.spheretrace.camera.pinhole import setup_camera
        from src.spheretrace.core.integrator import render_pixel, setup_render_target
        from src.spheretrace.scene.default_scene import create_default_scene

        _, camera = create_default_scene()
        setup_camera(camera)
        setup_render_target(512, 512)

        assert render_pixel(0, 0) == (0.0, 0.0, 0.0)
