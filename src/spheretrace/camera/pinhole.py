"""Fixed pinhole camera for primary ray generation.

The camera sits at the world origin and looks down the negative z-axis.
There is no orientation, lens or jitter: each pixel (i, j) of a w x h image
gets exactly one ray through its center,

    x =  (2 * (i + 0.5) / w - 1) * tan(fov / 2) * (w / h)
    y = -(2 * (j + 0.5) / h - 1) * tan(fov / 2)
    direction = normalize(x, y, -1)

so row 0 is the top of the image and column 0 its left edge.

Example:
    >>> import math
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.camera.pinhole import PinholeCamera, setup_camera, get_ray
    >>>
    >>> setup_camera(PinholeCamera(fov=math.pi / 3.0))
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(0, 0, 512, 512)  # Ray through the top-left pixel
"""

import math
from dataclasses import dataclass

import numpy as np
import taichi as ti

from src.spheretrace.core.ray import Ray, make_ray, normalize, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for the fixed pinhole camera.

    Attributes:
        fov: Field of view in radians. Applied vertically; the horizontal
            extent is scaled by the image aspect ratio.
    """

    fov: float = math.pi / 3.0


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_fov = ti.field(dtype=ti.f32, shape=())
_tan_half_fov = ti.field(dtype=ti.f32, shape=())


def setup_camera(camera: PinholeCamera) -> None:
    """Store the camera's field of view for ray generation.

    Must be called before rendering. tan(fov / 2) is computed once here
    rather than per pixel, in single precision.

    Args:
        camera: Camera configuration.
    """
    _camera_fov[None] = camera.fov
    # Evaluated in f32, the precision of every other ray quantity
    _tan_half_fov[None] = float(np.tan(np.float32(camera.fov) / np.float32(2.0)))


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def primary_direction(
    pixel_i: ti.i32,
    pixel_j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    tan_half_fov: ti.f32,
) -> vec3:
    """Compute the normalized direction through the center of a pixel.

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        tan_half_fov: tan(fov / 2).

    Returns:
        The unit direction from the origin through the pixel center.
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    x = (2.0 * (ti.cast(pixel_i, ti.f32) + 0.5) / w - 1.0) * tan_half_fov * (w / h)
    y = -(2.0 * (ti.cast(pixel_j, ti.f32) + 0.5) / h - 1.0) * tan_half_fov
    return normalize(vec3(x, y, -1.0))


@ti.func
def get_camera_origin() -> vec3:
    """Get the camera origin, which is always the world origin."""
    return vec3(0.0, 0.0, 0.0)


@ti.func
def get_ray(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray for a pixel using the configured camera.

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray from the origin with a unit direction through the pixel center.
    """
    direction = primary_direction(pixel_i, pixel_j, width, height, _tan_half_fov[None])
    return make_ray(get_camera_origin(), direction)


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, float | tuple[float, float, float]]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with origin, view direction, fov and tan_half_fov.
    """
    return {
        "origin": (0.0, 0.0, 0.0),
        "direction": (0.0, 0.0, -1.0),
        "fov": float(_camera_fov[None]),
        "tan_half_fov": float(_tan_half_fov[None]),
    }
