"""Diffuse material registry.

A diffuse material is a single RGB color. It is the baseline of the shaded
color: point lights add a uniform intensity on top of it, and the sum is
only clamped when the framebuffer is written.

Materials are stored in a preallocated Taichi field and referenced by index
from the sphere storage, so a hit record can copy the color out in a kernel.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.materials.diffuse import add_diffuse_material
    >>> chartreuse = add_diffuse_material((0.5, 0.8, 0.3))
    >>> # get_diffuse_color(chartreuse) within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.dataclass
class DiffuseMaterial:
    """Diffuse material properties.

    Attributes:
        diffuse_color: Base color (RGB). Components are nominally in [0, 1]
            but are not clamped before output.
    """

    diffuse_color: vec3


@ti.func
def diffuse(material: DiffuseMaterial) -> vec3:
    """Return the material's diffuse color."""
    return material.diffuse_color


# =============================================================================
# Material Field Storage (for scene-level material management)
# =============================================================================

# Maximum number of diffuse materials in the scene
MAX_DIFFUSE_MATERIALS = 256

# Storage for diffuse material colors
diffuse_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_DIFFUSE_MATERIALS)
num_diffuse_materials = ti.field(dtype=ti.i32, shape=())


def clear_diffuse_materials() -> None:
    """Clear all diffuse materials.

    Resets the material count to zero. Existing data in the field will be
    overwritten when new materials are added.
    """
    num_diffuse_materials[None] = 0


def add_diffuse_material(diffuse_color: tuple[float, float, float]) -> int:
    """Add a diffuse material to the registry.

    Args:
        diffuse_color: The base color as an (R, G, B) tuple.

    Returns:
        The index of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If the color does not have three components or any
            component is negative.
    """
    if len(diffuse_color) != 3:
        raise ValueError(f"Diffuse color must have 3 components, got {len(diffuse_color)}")
    for i, component in enumerate(diffuse_color):
        if component < 0.0:
            raise ValueError(f"Diffuse color component {i} = {component} is negative")

    idx = num_diffuse_materials[None]
    if idx >= MAX_DIFFUSE_MATERIALS:
        raise RuntimeError(
            f"Maximum number of diffuse materials ({MAX_DIFFUSE_MATERIALS}) exceeded"
        )

    diffuse_colors[idx] = vec3(diffuse_color[0], diffuse_color[1], diffuse_color[2])
    num_diffuse_materials[None] = idx + 1
    return idx


def get_diffuse_material_count() -> int:
    """Get the number of diffuse materials in the registry."""
    return int(num_diffuse_materials[None])


def get_diffuse_color_python(material_idx: int) -> tuple[float, float, float]:
    """Read a material's color from Python (outside of kernels).

    Raises:
        IndexError: If the index is not a registered material.
    """
    if not 0 <= material_idx < num_diffuse_materials[None]:
        raise IndexError(f"No diffuse material with index {material_idx}")
    c = diffuse_colors[material_idx]
    return (float(c[0]), float(c[1]), float(c[2]))


@ti.func
def get_diffuse_material(material_idx: ti.i32) -> DiffuseMaterial:
    """Get a diffuse material by index (for use in kernels)."""
    return DiffuseMaterial(diffuse_color=diffuse_colors[material_idx])


@ti.func
def get_diffuse_color(material_idx: ti.i32) -> vec3:
    """Get the diffuse color for a material by index (for use in kernels)."""
    return diffuse_colors[material_idx]
