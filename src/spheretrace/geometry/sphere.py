"""Sphere primitive with closest-approach ray intersection.

This module provides a Sphere dataclass and an intersection test that
measures how close the ray's supporting line passes to the sphere center.
It is not a quadratic root solve: the test reports a hit whenever the
perpendicular distance from the center to the line is within the radius,
and that perpendicular distance is what the hit record carries.

The line is infinite in both directions, so a sphere lying behind the ray
origin (negative projection) is hit as well.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.geometry.sphere import Sphere, HitRecord, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -16), radius=2.0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti

from src.spheretrace.core.ray import distance, dot, make_ray, normalize, ray_at, vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class HitRecord:
    """Record of a ray-sphere closest-approach test.

    Attributes:
        hit: Whether the line passed within the radius (1 if hit, 0 if miss).
        point: The point on the ray's line closest to the sphere center.
            Only valid if hit == 1.
        distance: Perpendicular distance from that point to the center.
            Only valid if hit == 1.
        projection: Signed distance along the normalized direction from the
            ray origin to the closest point. Negative when the sphere is
            behind the origin.
    """

    hit: ti.i32
    point: vec3
    distance: ti.f32
    projection: ti.f32


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere) -> HitRecord:
    """Test whether a ray's line passes within a sphere's radius.

    Projects the origin-to-center vector onto the normalized direction to
    find the closest point on the line:

        projection    = dot(center - origin, normalize(direction))
        closest_point = origin + normalize(direction) * projection
        distance      = |closest_point - center|

    and reports a hit when distance <= radius.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray. Need not be
            normalized, but must be non-zero.
        sphere: The sphere to test against.

    Returns:
        A HitRecord. Check the hit field to determine if the test passed.
    """
    line = make_ray(ray_origin, normalize(ray_direction))
    projection = dot(sphere.center - ray_origin, line.direction)
    closest_point = ray_at(line, projection)
    miss_distance = distance(closest_point, sphere.center)

    did_hit = 0
    if miss_distance <= sphere.radius:
        did_hit = 1

    return HitRecord(
        hit=did_hit,
        point=closest_point,
        distance=miss_distance,
        projection=projection,
    )


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius."""
    return Sphere(center=center, radius=radius)
