"""Scene module for scene storage, lighting and hit records.

Components:
    intersection: Sphere storage and nearest-hit resolution
    lights: Point light storage and diffuse shading
    manager: Scene manager coordinating materials, spheres and lights
    default_scene: The reference two-sphere scene

Scene data is kept in preallocated Structure-of-Arrays Taichi fields and is
only written between renders; render kernels read it.
"""

from .default_scene import create_default_scene
from .intersection import (
    MAX_SPHERES,
    MAX_VIEW_DISTANCE,
    SceneHitRecord,
    add_sphere,
    clear_scene,
    get_sphere_count,
    intersect_scene,
)
from .lights import (
    MAX_LIGHTS,
    PointLight,
    add_light,
    clear_lights,
    get_light_count,
    light_diffuse,
    shade,
)
from .manager import (
    LightInfo,
    MaterialInfo,
    SceneConfig,
    SceneManager,
    SphereInfo,
)

__all__ = [
    # Intersection module
    "SceneHitRecord",
    "add_sphere",
    "clear_scene",
    "get_sphere_count",
    "intersect_scene",
    "MAX_SPHERES",
    "MAX_VIEW_DISTANCE",
    # Lights module
    "PointLight",
    "add_light",
    "clear_lights",
    "get_light_count",
    "light_diffuse",
    "shade",
    "MAX_LIGHTS",
    # Manager module
    "SceneManager",
    "MaterialInfo",
    "SphereInfo",
    "LightInfo",
    "SceneConfig",
    # Default scene
    "create_default_scene",
]
