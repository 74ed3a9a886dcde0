"""Point lights and diffuse shading.

Each light is a position and a scalar intensity. Its contribution to a hit
is the length of the unit direction toward the light scaled by the hit's
distance, times the intensity, floored at zero:

    contribution = intensity * max(0, |normalize(position - point) * distance|)

The shader sums every light's contribution into one scalar and adds it to
all three channels of the material's diffuse color. Nothing is clamped
here; clamping happens when the framebuffer bytes are produced.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.scene.lights import add_light, shade
    >>> add_light(vec3(-20.0, 20.0, 20.0), 0.05)
    >>> # color = shade(scene_hit_record) within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.spheretrace.core.ray import length, normalize
from src.spheretrace.scene.intersection import SceneHitRecord

vec3 = tm.vec3


@ti.dataclass
class PointLight:
    """A point light.

    Attributes:
        position: Light position in world space.
        intensity: Unitless multiplier for the light's contribution.
    """

    position: vec3
    intensity: ti.f32


# Maximum number of lights supported in the scene
MAX_LIGHTS = 256

light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def clear_lights() -> None:
    """Remove all lights from the scene."""
    num_lights[None] = 0


def add_light(position: vec3, intensity: float) -> int:
    """Add a point light to the scene.

    Args:
        position: The light position.
        intensity: The light intensity.

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_positions[idx] = position
    light_intensities[idx] = intensity
    num_lights[None] = idx + 1
    return idx


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


@ti.func
def light_diffuse(light: PointLight, rec: SceneHitRecord) -> ti.f32:
    """Compute one light's diffuse contribution to a hit.

    Args:
        light: The light.
        rec: A scene hit record with hit == 1.

    Returns:
        intensity * max(0, |direction_to_light * rec.distance|).
    """
    direction_to_light = normalize(light.position - rec.point)
    return light.intensity * tm.max(0.0, length(direction_to_light * rec.distance))


@ti.func
def shade(rec: SceneHitRecord) -> vec3:
    """Accumulate every light's contribution onto the hit material.

    Args:
        rec: A scene hit record with hit == 1.

    Returns:
        rec.diffuse_color plus the summed light intensity on each channel.
    """
    diffuse_intensity = 0.0
    for i in range(num_lights[None]):
        light = PointLight(position=light_positions[i], intensity=light_intensities[i])
        diffuse_intensity += light_diffuse(light, rec)
    return rec.diffuse_color + vec3(diffuse_intensity, diffuse_intensity, diffuse_intensity)
