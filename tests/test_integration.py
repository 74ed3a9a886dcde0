"""Integration tests for the end-to-end rendering pipeline.

This module tests the complete pipeline from scene creation through the
final image file, including the command-line entry point's rendering path.

Tests are designed to be fast (low resolution) while still exercising the
full pipeline.

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run, so main() (which
calls ti.init) is not invoked here.
"""

from __future__ import annotations

import json

import numpy as np
import pytest


class TestDefaultSceneIntegration:
    """Integration tests for the default two-sphere render."""

    def test_end_to_end_ppm(self, tmp_path):
        """Test the default scene renders and saves a well-formed PPM."""
        from examples.render_spheres import render_spheres

        output = render_spheres(
            width=64, height=64, output_path=str(tmp_path / "out.ppm"), quiet=True
        )

        data = output.read_bytes()
        header = b"P6 64 64 255\n"
        assert data.startswith(header)
        assert len(data) == len(header) + 3 * 64 * 64

    def test_render_has_background_and_spheres(self, tmp_path):
        """Test the corner shows the background and the center shows the red sphere."""
        from examples.render_spheres import render_spheres
        from src.spheretrace.preview.export import read_ppm

        output = render_spheres(
            width=65, height=65, output_path=str(tmp_path / "out.ppm"), quiet=True
        )
        width, height, pixels = read_ppm(output)
        image = np.frombuffer(pixels, dtype=np.uint8).reshape(height, width, 3)

        assert tuple(image[0, 0]) == (0, 0, 0)
        # Red sphere plus a uniform light term: red saturates, green and blue match
        assert image[32, 32, 0] == 255
        assert image[32, 32, 1] == image[32, 32, 2]
        assert image[32, 32, 1] > 127

    def test_png_output(self, tmp_path):
        """Test non-PPM extensions are written through Pillow."""
        from PIL import Image as PILImage

        from examples.render_spheres import render_spheres

        output = render_spheres(
            width=32, height=16, output_path=str(tmp_path / "out.png"), quiet=True
        )
        with PILImage.open(output) as img:
            assert img.format == "PNG"
            assert img.size == (32, 16)

    def test_progress_output(self, tmp_path, capsys):
        """Test status lines are printed unless quiet."""
        from examples.render_spheres import render_spheres

        render_spheres(width=8, height=8, output_path=str(tmp_path / "out.ppm"))
        out = capsys.readouterr().out
        assert "2 spheres, 1 lights (8x8)" in out
        assert "Saved to:" in out

    def test_scene_file(self, tmp_path):
        """Test a JSON scene file replaces the default scene."""
        from examples.render_spheres import render_spheres
        from src.spheretrace.preview.export import read_ppm

        scene_path = tmp_path / "scene.json"
        scene_path.write_text(
            json.dumps(
                {
                    "materials": [{"diffuse_color": [0.2, 0.4, 0.6]}],
                    "spheres": [{"center": [0, 0, -10], "radius": 100.0, "material_id": 0}],
                    "lights": [],
                }
            )
        )

        output = render_spheres(
            width=4,
            height=4,
            scene_path=str(scene_path),
            output_path=str(tmp_path / "out.ppm"),
            quiet=True,
        )
        _, _, pixels = read_ppm(output)
        expected = bytes(
            (np.array([0.2, 0.4, 0.6], dtype=np.float32) * np.float32(255.0)).astype(np.uint8)
        )
        assert pixels == expected * 16

    @pytest.mark.parametrize(
        "scene",
        [
            {"spheres": [5]},
            {"materials": [{"colour": [1, 0, 0]}]},
            {
                "materials": [{"diffuse_color": [1, 0, 0]}],
                "spheres": [{"center": [0, 0, -5], "radius": "2", "material_id": 0}],
            },
        ],
    )
    def test_bad_scene_file_raises_value_error(self, tmp_path, scene):
        """Test malformed scene files surface as ValueError for the entry point."""
        from examples.render_spheres import render_spheres

        scene_path = tmp_path / "scene.json"
        scene_path.write_text(json.dumps(scene))

        with pytest.raises(ValueError):
            render_spheres(
                width=4,
                height=4,
                scene_path=str(scene_path),
                output_path=str(tmp_path / "out.ppm"),
                quiet=True,
            )
        assert not (tmp_path / "out.ppm").exists()

    def test_invalid_settings_raise(self, tmp_path):
        """Test invalid render settings raise ValueError before rendering."""
        from examples.render_spheres import render_spheres

        with pytest.raises(ValueError):
            render_spheres(width=0, output_path=str(tmp_path / "out.ppm"), quiet=True)
        with pytest.raises(ValueError):
            render_spheres(fov_degrees=180.0, output_path=str(tmp_path / "out.ppm"), quiet=True)

    def test_unwritable_output_raises(self, tmp_path):
        """Test an output path in a missing directory raises OSError."""
        from examples.render_spheres import render_spheres

        with pytest.raises(OSError):
            render_spheres(
                width=4, height=4, output_path=str(tmp_path / "no" / "out.ppm"), quiet=True
            )


class TestArgumentParsing:
    """Tests for the command-line parser."""

    def test_defaults(self):
        """Test defaults reproduce the reference render."""
        from examples.render_spheres import parse_args

        args = parse_args([])
        assert (args.width, args.height, args.fov) == (512, 512, 60.0)
        assert args.scene is None
        assert args.output == "output.ppm"
        assert args.arch == "cpu"
        assert args.quiet is False

    def test_overrides(self):
        """Test every option is parsed."""
        from examples.render_spheres import parse_args

        args = parse_args(
            [
                "--width", "64",
                "--height", "32",
                "--fov", "45",
                "--scene", "scene.json",
                "--output", "out.png",
                "--arch", "gpu",
                "--quiet",
            ]
        )
        assert (args.width, args.height, args.fov) == (64, 32, 45.0)
        assert (args.scene, args.output, args.arch, args.quiet) == (
            "scene.json",
            "out.png",
            "gpu",
            True,
        )

    def test_bad_arch_exits(self):
        """Test an unknown backend is rejected by argparse."""
        from examples.render_spheres import parse_args

        with pytest.raises(SystemExit):
            parse_args(["--arch", "tpu"])
