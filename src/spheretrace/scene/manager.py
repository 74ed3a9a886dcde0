"""Scene manager coordinating materials, spheres and lights.

This module provides the high-level scene-building API. It registers
diffuse materials, spheres and point lights into the Taichi fields the
render kernels read, and keeps a Python-side record of everything added
so a scene can be exported to, and rebuilt from, a plain dictionary
(and therefore JSON).

Insertion order matters: spheres are tested in the order they are added,
and the first-added sphere wins when two hits are equally distant.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> red = scene.add_material(diffuse_color=(1.0, 0.5, 0.5))
    >>> scene.add_sphere(center=(2, 1, -16), radius=5.0, material_id=red)
    >>> scene.add_light(position=(-20, 20, 20), intensity=0.05)
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import taichi.math as tm

from src.spheretrace.materials.diffuse import (
    MAX_DIFFUSE_MATERIALS,
    add_diffuse_material,
    clear_diffuse_materials,
    get_diffuse_material_count,
)
from src.spheretrace.scene.intersection import (
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_sphere_count,
)
from src.spheretrace.scene.lights import (
    MAX_LIGHTS,
    add_light,
    clear_lights,
    get_light_count,
)

# Type alias for 3D vectors
vec3 = tm.vec3


@dataclass
class MaterialInfo:
    """Information about a registered material.

    Attributes:
        material_id: The material index.
        diffuse_color: The base color as provided during creation.
    """

    material_id: int
    diffuse_color: tuple[float, float, float]


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: The index in the sphere storage arrays.
        center: The center of the sphere.
        radius: The radius of the sphere.
        material_id: The material ID assigned to the sphere.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    material_id: int


@dataclass
class LightInfo:
    """Information about a point light in the scene.

    Attributes:
        light_index: The index in the light storage arrays.
        position: The light position.
        intensity: The light intensity.
    """

    light_index: int
    position: tuple[float, float, float]
    intensity: float


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        materials: List of material configurations.
        spheres: List of sphere configurations.
        lights: List of light configurations.
    """

    materials: list[dict[str, Any]] = field(default_factory=list)
    spheres: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)


def _as_triple(values: Any, name: str) -> tuple[float, float, float]:
    """Convert a 3-element sequence to a float tuple, raising ValueError otherwise."""
    try:
        x, y, z = values
        return (float(x), float(y), float(z))
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a sequence of 3 numbers, got {values!r}") from e


def _as_float(value: Any, name: str) -> float:
    """Convert a number to float, raising ValueError for anything else."""
    if isinstance(value, (str, bytes, bool)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e


def _as_index(value: Any, name: str) -> int:
    """Convert an integral number to int, raising ValueError otherwise."""
    number = _as_float(value, name)
    if not number.is_integer():
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(number)


# Allowed keys and defaults for each entry kind in a scene config
_ENTRY_DEFAULTS: dict[str, dict[str, Any]] = {
    "materials": {"diffuse_color": [0.5, 0.5, 0.5]},
    "spheres": {"center": [0.0, 0.0, 0.0], "radius": 1.0, "material_id": 0},
    "lights": {"position": [0.0, 0.0, 0.0], "intensity": 1.0},
}


def _read_entries(entries: Any, kind: str) -> list[dict[str, Any]]:
    """Check a config entry list and fill in defaults for missing keys.

    Raises:
        ValueError: If entries is not a list, an entry is not a dict, or an
            entry has a key that kind does not accept.
    """
    if not isinstance(entries, list):
        raise ValueError(f"Scene '{kind}' must be a list, got {type(entries).__name__}")

    defaults = _ENTRY_DEFAULTS[kind]
    result = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"{kind}[{i}] must be an object, got {entry!r}")
        unknown = set(entry) - set(defaults)
        if unknown:
            raise ValueError(f"Unknown keys in {kind}[{i}]: {sorted(unknown)}")
        result.append({**defaults, **entry})
    return result


class SceneManager:
    """Scene builder for materials, spheres and point lights.

    Creating a SceneManager clears the global scene storage; there is one
    scene per process, as the render kernels read module-level fields.

    Attributes:
        materials: List of MaterialInfo for all registered materials.
        spheres: List of SphereInfo for all spheres in the scene.
        lights: List of LightInfo for all lights in the scene.

    Example:
        >>> scene = SceneManager()
        >>> chartreuse = scene.add_material((0.5, 0.8, 0.3))
        >>> scene.add_sphere((-3, 0, -16), 2.0, chartreuse)
        >>> scene.add_diffuse_sphere((2, 1, -16), 5.0, (1.0, 0.5, 0.5))
        >>> scene.add_light((-20, 20, 20), 0.05)
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.materials: list[MaterialInfo] = []
        self.spheres: list[SphereInfo] = []
        self.lights: list[LightInfo] = []
        self._clear_all()

    def _clear_all(self) -> None:
        """Clear all scene data including Taichi fields."""
        clear_scene()
        clear_diffuse_materials()
        clear_lights()
        self.materials.clear()
        self.spheres.clear()
        self.lights.clear()

    def clear(self) -> None:
        """Clear the entire scene (spheres, materials and lights)."""
        self._clear_all()

    # =========================================================================
    # Material Management
    # =========================================================================

    def add_material(self, diffuse_color: tuple[float, float, float]) -> int:
        """Add a diffuse material to the scene.

        Args:
            diffuse_color: The base color as (R, G, B).

        Returns:
            The material ID.

        Raises:
            RuntimeError: If the maximum number of materials is exceeded.
            ValueError: If any color component is negative.
        """
        color = _as_triple(diffuse_color, "diffuse_color")
        material_id = add_diffuse_material(color)
        self.materials.append(MaterialInfo(material_id=material_id, diffuse_color=color))
        return material_id

    def get_material_count(self) -> int:
        """Get the total number of materials in the scene."""
        return get_diffuse_material_count()

    def get_material_info(self, material_id: int) -> MaterialInfo | None:
        """Get information about a material by ID, or None if not found."""
        if 0 <= material_id < len(self.materials):
            return self.materials[material_id]
        return None

    # =========================================================================
    # Primitive Management
    # =========================================================================

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material_id: int,
    ) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere.
            material_id: The material ID from add_material().

        Returns:
            The index of the added sphere.

        Raises:
            RuntimeError: If the maximum number of spheres is exceeded.
            ValueError: If material_id is invalid or radius is not positive.
        """
        material_id = _as_index(material_id, "material_id")
        radius = _as_float(radius, "radius")
        if material_id < 0 or material_id >= get_diffuse_material_count():
            raise ValueError(f"Invalid material_id: {material_id}")
        if radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")

        center = _as_triple(center, "center")
        sphere_index = add_sphere(vec3(center[0], center[1], center[2]), radius, material_id)

        self.spheres.append(
            SphereInfo(
                sphere_index=sphere_index,
                center=center,
                radius=radius,
                material_id=material_id,
            )
        )
        return sphere_index

    def add_diffuse_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        diffuse_color: tuple[float, float, float],
    ) -> tuple[int, int]:
        """Add a sphere with a new diffuse material.

        Returns:
            Tuple of (sphere_index, material_id).
        """
        material_id = self.add_material(diffuse_color)
        sphere_index = self.add_sphere(center, radius, material_id)
        return sphere_index, material_id

    # =========================================================================
    # Light Management
    # =========================================================================

    def add_light(self, position: tuple[float, float, float], intensity: float) -> int:
        """Add a point light to the scene.

        Args:
            position: The light position as (x, y, z).
            intensity: The light intensity. Must be non-negative.

        Returns:
            The index of the added light.

        Raises:
            RuntimeError: If the maximum number of lights is exceeded.
            ValueError: If intensity is negative.
        """
        intensity = _as_float(intensity, "intensity")
        if intensity < 0.0:
            raise ValueError(f"Light intensity must be non-negative, got {intensity}")

        position = _as_triple(position, "position")
        light_index = add_light(vec3(position[0], position[1], position[2]), intensity)

        self.lights.append(
            LightInfo(light_index=light_index, position=position, intensity=intensity)
        )
        return light_index

    # =========================================================================
    # Scene Queries
    # =========================================================================

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return get_sphere_count()

    def get_light_count(self) -> int:
        """Get the number of lights in the scene."""
        return get_light_count()

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig()

        for mat in self.materials:
            config.materials.append({"diffuse_color": list(mat.diffuse_color)})

        for sphere in self.spheres:
            config.spheres.append(
                {
                    "center": list(sphere.center),
                    "radius": sphere.radius,
                    "material_id": sphere.material_id,
                }
            )

        for light in self.lights:
            config.lights.append(
                {
                    "position": list(light.position),
                    "intensity": light.intensity,
                }
            )

        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and loads the configuration. Materials are
        loaded first so spheres can reference them by index. Missing keys
        take their defaults. If any entry is rejected the scene is left
        empty rather than partially loaded.

        Raises:
            ValueError: If the configuration contains invalid data or
                unknown keys.
            RuntimeError: If a storage capacity is exceeded.
        """
        materials = _read_entries(config.materials, "materials")
        spheres = _read_entries(config.spheres, "spheres")
        lights = _read_entries(config.lights, "lights")

        self.clear()
        try:
            for mat_config in materials:
                self.add_material(mat_config["diffuse_color"])

            for sphere_config in spheres:
                self.add_sphere(
                    sphere_config["center"],
                    sphere_config["radius"],
                    sphere_config["material_id"],
                )

            for light_config in lights:
                self.add_light(light_config["position"], light_config["intensity"])
        except (ValueError, RuntimeError):
            self.clear()
            raise

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {
            "materials": config.materials,
            "spheres": config.spheres,
            "lights": config.lights,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with 'materials', 'spheres', 'lights' keys.

        Raises:
            ValueError: If the dictionary has unknown top-level keys or
                contains invalid data.
        """
        unknown = set(data) - {"materials", "spheres", "lights"}
        if unknown:
            raise ValueError(f"Unknown scene keys: {sorted(unknown)}")

        config = SceneConfig(
            materials=data.get("materials", []),
            spheres=data.get("spheres", []),
            lights=data.get("lights", []),
        )
        self.from_config(config)

    def save_json(self, filepath: str | Path) -> None:
        """Write the scene to a JSON file."""
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    def load_json(self, filepath: str | Path) -> None:
        """Load the scene from a JSON file.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the file is not valid JSON or describes an
                invalid scene.
        """
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Scene file {filepath} must contain a JSON object")
        self.from_dict(data)

    # =========================================================================
    # Capacity Information
    # =========================================================================

    @staticmethod
    def get_max_spheres() -> int:
        """Get the maximum number of spheres supported."""
        return MAX_SPHERES

    @staticmethod
    def get_max_lights() -> int:
        """Get the maximum number of lights supported."""
        return MAX_LIGHTS

    @staticmethod
    def get_max_materials() -> int:
        """Get the maximum number of materials supported."""
        return MAX_DIFFUSE_MATERIALS
