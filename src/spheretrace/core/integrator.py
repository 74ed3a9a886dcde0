"""Frame driver: per-pixel ray casting, shading and byte conversion.

This module owns the render target and the kernel that fills it. For each
pixel, in row-major order (rows outer, columns inner), it:

    1. generates the primary ray through the pixel center,
    2. asks the scene for the nearest hit within the view distance,
    3. shades the hit with the point lights, or falls back to a gradient
       background (j / h, i / w, (i + j) / (h + w)),
    4. stores the unclamped color.

The colors are turned into bytes afterwards by clamping each channel to
[0, 1], scaling by 255 and truncating, giving a flat row-major RGB buffer
of 3 * width * height bytes for the serializer.

The pixel loop is serialized, so the render is single-threaded and
reproducible; the kernel reads scene fields but never writes them.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.core.integrator import (
    ...     setup_render_target, render_image, get_pixel_bytes
    ... )
    >>> from src.spheretrace.scene.default_scene import create_default_scene
    >>> from src.spheretrace.camera.pinhole import setup_camera
    >>>
    >>> scene, camera = create_default_scene()
    >>> setup_camera(camera)
    >>> setup_render_target(512, 512)
    >>> render_image()
    >>> pixels = get_pixel_bytes()
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.spheretrace.camera.pinhole import get_ray
from src.spheretrace.core.config import MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH
from src.spheretrace.scene.intersection import intersect_scene
from src.spheretrace.scene.lights import shade

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Color buffer indexed [row, column], preallocated to max size
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target.

    Sets the active image dimensions and clears the color buffer. The buffer
    is preallocated to MAX_IMAGE_HEIGHT x MAX_IMAGE_WIDTH so kernels are
    compiled once regardless of image size.

    Args:
        width: Image width in pixels (1 to MAX_IMAGE_WIDTH).
        height: Image height in pixels (1 to MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are non-positive or exceed the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the color buffer to zero."""
    _color_buffer.fill(0.0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


def get_image() -> "ti.MatrixField":
    """Get the raw color buffer field.

    Note: This returns the full preallocated buffer. Use get_image_dimensions()
    to determine the active region.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()
    return _color_buffer


# =============================================================================
# Per-Pixel Evaluation
# =============================================================================


@ti.func
def background_color(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Gradient shown where no sphere is hit within range.

    Returns:
        (row / height, column / width, (column + row) / (height + width)).
    """
    return vec3(
        ti.cast(pixel_j, ti.f32) / ti.cast(height, ti.f32),
        ti.cast(pixel_i, ti.f32) / ti.cast(width, ti.f32),
        ti.cast(pixel_i + pixel_j, ti.f32) / ti.cast(height + width, ti.f32),
    )


@ti.func
def trace_pixel(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Compute the unclamped color of one pixel.

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The shaded color of the nearest hit, or the background color.
    """
    ray = get_ray(pixel_i, pixel_j, width, height)
    rec = intersect_scene(ray.origin, ray.direction)

    color = background_color(pixel_i, pixel_j, width, height)
    if rec.hit == 1:
        color = shade(rec)

    # A light sitting exactly on the hit point normalizes a zero vector
    for c in ti.static(range(3)):
        if tm.isnan(color[c]):
            color[c] = 0.0

    return color


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_frame(width: ti.i32, height: ti.i32):
    """Evaluate every pixel in row-major order into the color buffer."""
    ti.loop_config(serialize=True)
    for j in range(height):
        for i in range(width):
            _color_buffer[j, i] = trace_pixel(i, j, width, height)


@ti.kernel
def _render_single_pixel(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Evaluate a single pixel (testing and debugging)."""
    return trace_pixel(pixel_i, pixel_j, width, height)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_image() -> None:
    """Render every pixel of the active render target.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    _render_frame(width, height)


def render_pixel(pixel_i: int, pixel_j: int) -> tuple[float, float, float]:
    """Render a single pixel and return its unclamped color.

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).

    Returns:
        Tuple of (R, G, B) color values.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    color = _render_single_pixel(pixel_i, pixel_j, width, height)

    return (float(color[0]), float(color[1]), float(color[2]))


def get_image_numpy() -> npt.NDArray[np.float32]:
    """Get the rendered colors as a NumPy array.

    Values are not clamped. Row 0 is the top of the image.

    Returns:
        NumPy array of shape (height, width, 3) with dtype float32.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    full_image = _color_buffer.to_numpy()
    return full_image[:height, :width, :].astype(np.float32)


def colors_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert colors to bytes: clamp to [0, 1], scale by 255, truncate.

    Args:
        image: Array of color values with channels in the last axis.

    Returns:
        Array of the same shape with dtype uint8.
    """
    clamped = np.clip(np.asarray(image, dtype=np.float32), 0.0, 1.0)
    return (clamped * np.float32(255.0)).astype(np.uint8)


def get_pixel_bytes() -> bytes:
    """Get the framebuffer as a flat row-major RGB byte sequence.

    Returns:
        Exactly 3 * width * height bytes.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    return colors_to_uint8(get_image_numpy()).tobytes()
