"""Core rendering module.

This module contains the fundamental building blocks of the renderer:

Components:
    ray: Ray data structure and vector utilities
    config: Render configuration (image size, field of view, output path)
    integrator: Shading, background and the per-pixel frame driver
    renderer: FrameRenderer wrapper owning one render target

The frame driver evaluates one primary ray per pixel in strict row-major
order: ray generation, nearest-hit query, shading (or background), then
clamp-and-scale conversion to an RGB byte triple.
"""

from .config import RenderConfig
from .ray import (
    Ray,
    distance,
    dot,
    length,
    make_ray,
    normalize,
    ray_at,
    vec3,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from src.spheretrace.core.integrator or src.spheretrace.core.renderer.

__all__ = [
    "Ray",
    "RenderConfig",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "dot",
    "normalize",
    "distance",
]
