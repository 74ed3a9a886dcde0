"""Materials module.

Components:
    diffuse: Flat diffuse color material and its registry

The renderer has a single material model: a diffuse base color to which the
point lights' accumulated intensity is added uniformly per channel.
"""

from .diffuse import (
    MAX_DIFFUSE_MATERIALS,
    DiffuseMaterial,
    add_diffuse_material,
    clear_diffuse_materials,
    diffuse,
    get_diffuse_color,
    get_diffuse_color_python,
    get_diffuse_material,
    get_diffuse_material_count,
)

__all__ = [
    "DiffuseMaterial",
    "MAX_DIFFUSE_MATERIALS",
    "add_diffuse_material",
    "clear_diffuse_materials",
    "diffuse",
    "get_diffuse_color",
    "get_diffuse_color_python",
    "get_diffuse_material",
    "get_diffuse_material_count",
]
