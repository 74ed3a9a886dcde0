"""Frame renderer wrapper around the integrator.

This module provides a convenient object around the module-level render
target of the integrator:
- Owns the image dimensions
- Renders a full frame in one call
- Hands out the float image, the byte framebuffer, or writes it to disk

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.core.renderer import FrameRenderer
    >>> from src.spheretrace.scene.default_scene import create_default_scene
    >>> from src.spheretrace.camera.pinhole import setup_camera
    >>>
    >>> scene, camera = create_default_scene()
    >>> setup_camera(camera)
    >>>
    >>> renderer = FrameRenderer(512, 512)
    >>> renderer.render()
    >>> renderer.save("output.ppm")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt

from src.spheretrace.core.integrator import (
    clear_render_target,
    colors_to_uint8,
    get_image_numpy,
    get_pixel_bytes,
    render_image,
    render_pixel,
    setup_render_target,
)
from src.spheretrace.preview.export import save_image


class FrameRenderer:
    """Renders complete frames into the integrator's render target.

    The renderer keeps its own width/height and delegates to the global
    integrator buffer (a Taichi field). Only one render target exists, so
    creating a second FrameRenderer re-targets the shared buffer.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize the renderer.

        Args:
            width: Image width in pixels (max 2048).
            height: Image height in pixels (max 2048).

        Raises:
            ValueError: If dimensions are non-positive or exceed the maximum.
        """
        self._width = width
        self._height = height
        self._rendered = False
        setup_render_target(width, height)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def rendered(self) -> bool:
        """Whether a frame has been rendered since the last reset."""
        return self._rendered

    def reset(self) -> None:
        """Clear the color buffer without changing dimensions."""
        clear_render_target()
        self._rendered = False

    def resize(self, width: int, height: int) -> None:
        """Resize the render target and clear it.

        Raises:
            ValueError: If dimensions are non-positive or exceed the maximum.
        """
        setup_render_target(width, height)
        self._width = width
        self._height = height
        self._rendered = False

    def render(self) -> None:
        """Render every pixel of the frame using the current scene and camera."""
        setup_render_target(self._width, self._height)
        render_image()
        self._rendered = True

    def render_pixel(self, pixel_i: int, pixel_j: int) -> tuple[float, float, float]:
        """Render one pixel and return its unclamped color."""
        return render_pixel(pixel_i, pixel_j)

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the unclamped colors as a (height, width, 3) float32 array."""
        return get_image_numpy()

    def get_image_uint8(self) -> npt.NDArray[np.uint8]:
        """Get the clamped, scaled colors as a (height, width, 3) uint8 array."""
        return colors_to_uint8(self.get_image_numpy())

    def get_pixel_bytes(self) -> bytes:
        """Get the framebuffer as 3 * width * height row-major RGB bytes."""
        return get_pixel_bytes()

    def save(self, filepath: str | Path) -> None:
        """Write the framebuffer to a file (PPM or any Pillow format).

        Raises:
            OSError: If the file cannot be written.
        """
        save_image(filepath, self._width, self._height, self.get_pixel_bytes())

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"FrameRenderer(width={self.width}, height={self.height}, "
            f"rendered={self.rendered})"
        )


def render_frame(width: int, height: int) -> bytes:
    """Render one frame with the current scene and camera and return its bytes.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        3 * width * height row-major RGB bytes.
    """
    renderer = FrameRenderer(width, height)
    renderer.render()
    return renderer.get_pixel_bytes()
