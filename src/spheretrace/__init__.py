"""Python implementation of the spheretrace offline ray tracer.

This package renders a scene of spheres with one primary ray per pixel,
using Taichi kernels for the per-pixel work:
- Pinhole ray generation from a fixed camera at the origin
- Closest-approach ray-sphere tests with nearest-hit resolution
- Additive point-light diffuse shading
- Row-major RGB framebuffer output (PPM, or any format Pillow writes)

Subpackages:
    core: Ray type, vector utilities, render configuration and frame driver
    geometry: Sphere primitive and intersection test
    materials: Diffuse material registry
    scene: Scene storage, point lights, scene manager and default scene
    camera: Fixed pinhole camera with ray generation
    preview: Framebuffer serialization (PPM writer, Pillow export)
"""

__version__ = "0.1.0"
