"""Rays and the vector math shared by the render kernels.

A ray is a line of sight: one origin, one direction. The camera builds one
per pixel; the sphere test walks along it to the point of closest approach;
the shader measures distances from that point to each light. The helpers
below are thin ``@ti.func`` wrappers over ``taichi.math`` so every module
spells these operations the same way.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.core.ray import make_ray, ray_at, vec3
    >>> # Inside a kernel:
    >>> # ray = make_ray(vec3(0.0), vec3(0.0, 0.0, -1.0))
    >>> # ray_at(ray, 16.0) -> vec3(0.0, 0.0, -16.0)
"""

import taichi as ti
import taichi.math as tm

# Points, directions and RGB colors all use 32-bit float triples
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """Line of sight through a pixel.

    Attributes:
        origin: Where the ray starts. Always the camera origin for primary rays.
        direction: Which way it points. The camera hands out unit vectors,
            but consumers normalize again before measuring along it.
    """

    origin: vec3
    direction: vec3


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    return Ray(origin=origin, direction=direction)


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Point reached after travelling t along the ray.

    t is measured in units of the direction's length; with a unit direction
    it is a distance. Negative t walks backwards past the origin.
    """
    return ray.origin + t * ray.direction


@ti.func
def length(v: vec3) -> ti.f32:
    return tm.length(v)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    return tm.dot(a, b)


@ti.func
def normalize(v: vec3) -> vec3:
    """Scale v to unit length. A zero vector gives NaN components."""
    return tm.normalize(v)


@ti.func
def distance(a: vec3, b: vec3) -> ti.f32:
    """Euclidean distance between two points."""
    return tm.length(a - b)
