"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with closest-approach intersection

The intersection routine is a Taichi function (@ti.func) called from the
scene-level linear scan:
    record = hit_sphere(ray_origin, ray_direction, sphere)
"""

from .sphere import HitRecord, Sphere, hit_sphere, make_sphere

__all__ = [
    "Sphere",
    "HitRecord",
    "hit_sphere",
    "make_sphere",
]
