"""Default two-sphere scene.

The reference scene: two diffuse spheres sixteen units in front of the
camera, a small chartreuse one on the left partly overlapping a large red
one, lit by a single weak point light above and behind the camera.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.scene.default_scene import create_default_scene
    >>> from src.spheretrace.camera.pinhole import setup_camera
    >>>
    >>> scene, camera = create_default_scene()
    >>> setup_camera(camera)
"""

import math

from src.spheretrace.camera.pinhole import PinholeCamera
from src.spheretrace.scene.manager import SceneManager

CHARTREUSE = (0.5, 0.8, 0.3)
RED = (1.0, 0.5, 0.5)

CHARTREUSE_SPHERE_CENTER = (-3.0, 0.0, -16.0)
CHARTREUSE_SPHERE_RADIUS = 2.0
RED_SPHERE_CENTER = (2.0, 1.0, -16.0)
RED_SPHERE_RADIUS = 5.0

LIGHT_POSITION = (-20.0, 20.0, 20.0)
LIGHT_INTENSITY = 0.05

DEFAULT_FOV = math.pi / 3.0


def create_default_scene(
    fov: float = DEFAULT_FOV,
    with_light: bool = True,
) -> tuple[SceneManager, PinholeCamera]:
    """Create the default scene.

    The chartreuse sphere is added first, so it wins ties against the red
    one.

    Args:
        fov: Camera field of view in radians.
        with_light: If False, the scene has no lights and every hit shows
            its bare diffuse color.

    Returns:
        A tuple of (SceneManager, PinholeCamera).
    """
    scene = SceneManager()

    chartreuse = scene.add_material(CHARTREUSE)
    red = scene.add_material(RED)

    scene.add_sphere(CHARTREUSE_SPHERE_CENTER, CHARTREUSE_SPHERE_RADIUS, chartreuse)
    scene.add_sphere(RED_SPHERE_CENTER, RED_SPHERE_RADIUS, red)

    if with_light:
        scene.add_light(LIGHT_POSITION, LIGHT_INTENSITY)

    camera = PinholeCamera(fov=fov)

    return scene, camera
