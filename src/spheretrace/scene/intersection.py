"""Scene-level nearest-hit resolution.

This module stores the scene's spheres and resolves, for one ray, the
nearest hit among all of them. Every sphere is tested (a flat linear scan,
no early exit); the record with the smallest hit distance wins, and on an
exact tie the sphere added first is kept.

The nearest candidate is then checked against MAX_VIEW_DISTANCE: anything
at or beyond it is reported as a miss so the background shows through.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.scene.intersection import (
    ...     SceneHitRecord, add_sphere, intersect_scene, clear_scene
    ... )
    >>> clear_scene()
    >>> add_sphere(vec3(-3, 0, -16), 2.0, material_id=0)
    >>> # Use intersect_scene within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.spheretrace.geometry.sphere import HitRecord, Sphere, hit_sphere
from src.spheretrace.materials.diffuse import get_diffuse_color

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Hits at or beyond this distance are treated as misses
MAX_VIEW_DISTANCE = 1000.0


@ti.dataclass
class SceneHitRecord:
    """Record of a ray-scene query with a copy of the hit material.

    Attributes:
        hit: Whether a sphere was hit within range (1 if hit, 0 if miss).
        point: Closest point on the ray's line to the hit sphere's center.
            Only valid if hit == 1.
        distance: Perpendicular distance from that point to the center.
            Only valid if hit == 1.
        material_id: The material ID of the hit sphere.
            Only valid if hit == 1. -1 indicates no material.
        diffuse_color: Copy of the hit material's diffuse color.
            Only valid if hit == 1.
    """

    hit: ti.i32
    point: vec3
    distance: ti.f32
    material_id: ti.i32
    diffuse_color: vec3


# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_material_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Clear all spheres from the scene.

    Resets the sphere count to zero. The actual field data is not
    cleared but will be overwritten when new spheres are added.
    """
    num_spheres[None] = 0


def add_sphere(center: vec3, radius: float, material_id: int = 0) -> int:
    """Add a sphere to the scene.

    Spheres are tested in insertion order, which decides ties between
    equally distant hits.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (should be positive).
        material_id: The diffuse material index for this sphere.

    Returns:
        The index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = center
    sphere_radii[idx] = radius
    sphere_material_ids[idx] = material_id
    num_spheres[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


@ti.func
def _hit_record_to_scene_hit_record(rec: HitRecord, material_id: ti.i32) -> SceneHitRecord:
    """Attach the material of the hit sphere to a primitive hit record."""
    return SceneHitRecord(
        hit=rec.hit,
        point=rec.point,
        distance=rec.distance,
        material_id=material_id,
        diffuse_color=get_diffuse_color(material_id),
    )


@ti.func
def _make_miss_record() -> SceneHitRecord:
    """Create a SceneHitRecord indicating no intersection."""
    return SceneHitRecord(
        hit=0,
        point=vec3(0.0, 0.0, 0.0),
        distance=0.0,
        material_id=-1,
        diffuse_color=vec3(0.0, 0.0, 0.0),
    )


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
    """Find the nearest sphere hit along a ray within MAX_VIEW_DISTANCE.

    Tests every sphere in insertion order and keeps the hit with the
    smallest distance. A later hit only replaces the current one when it
    is strictly closer, so the first-added sphere wins ties.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray (non-zero).

    Returns:
        The nearest in-range hit, or a miss record if the scene is empty,
        nothing was hit, or the nearest hit is at or beyond the cutoff.
    """
    result = _make_miss_record()

    n_spheres = num_spheres[None]
    for i in range(n_spheres):
        sphere = Sphere(center=sphere_centers[i], radius=sphere_radii[i])
        rec = hit_sphere(ray_origin, ray_direction, sphere)
        if rec.hit == 1:
            if result.hit == 0 or rec.distance < result.distance:
                result = _hit_record_to_scene_hit_record(rec, sphere_material_ids[i])

    if result.hit == 1 and result.distance >= MAX_VIEW_DISTANCE:
        result = _make_miss_record()

    return result
