#!/usr/bin/env python3
"""Render the sphere scene to an image file.

This script renders either the default two-sphere scene or a scene loaded
from a JSON file, casting one ray per pixel from a camera at the origin,
and writes the framebuffer as a binary PPM (or any format Pillow supports,
chosen by the output file extension).

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 512)
    --height HEIGHT     Image height in pixels (default: 512)
    --fov DEGREES       Field of view in degrees (default: 60)
    --scene PATH        JSON scene file (default: built-in two-sphere scene)
    --output OUTPUT     Output file path (default: output.ppm)
    --arch ARCH         Taichi backend, cpu or gpu (default: cpu)
    --quiet             Suppress progress output

Example:
    python -m examples.render_spheres --width 256 --height 256 --output spheres.png
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a scene of spheres.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=512,
        help="Image width in pixels (default: 512)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=512,
        help="Image height in pixels (default: 512)",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=60.0,
        help="Field of view in degrees (default: 60)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (default: built-in two-sphere scene)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="output.ppm",
        help="Output file path (default: output.ppm)",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_spheres(
    width: int = 512,
    height: int = 512,
    fov_degrees: float = 60.0,
    scene_path: str | None = None,
    output_path: str = "output.ppm",
    quiet: bool = False,
) -> Path:
    """Render a sphere scene and save it to a file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov_degrees: Field of view in degrees.
        scene_path: Optional JSON scene file. The default scene is used
            when None.
        output_path: Output file path.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.

    Raises:
        ValueError: If the render settings or the scene file are invalid.
        OSError: If the scene file cannot be read or the output written.
    """
    # Lazy imports to allow Taichi initialization first
    from src.spheretrace.camera.pinhole import PinholeCamera, setup_camera
    from src.spheretrace.core.config import RenderConfig
    from src.spheretrace.core.renderer import FrameRenderer
    from src.spheretrace.scene.default_scene import create_default_scene
    from src.spheretrace.scene.manager import SceneManager

    config = RenderConfig.from_degrees(
        width=width, height=height, fov_degrees=fov_degrees, output=output_path
    )
    config.validate()

    if scene_path is None:
        scene, camera = create_default_scene(fov=config.fov)
    else:
        scene = SceneManager()
        scene.load_json(scene_path)
        camera = PinholeCamera(fov=config.fov)

    if not quiet:
        print(
            f"Scene: {scene.get_sphere_count()} spheres, "
            f"{scene.get_light_count()} lights ({config.width}x{config.height})"
        )

    setup_camera(camera)

    start_time = time.time()
    renderer = FrameRenderer(config.width, config.height)
    renderer.render()

    output_file = Path(config.output)
    renderer.save(output_file)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    arch = ti.gpu if args.arch == "gpu" else ti.cpu
    ti.init(arch=arch)

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            fov_degrees=args.fov,
            scene_path=args.scene,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
