"""Camera module for primary ray generation.

Components:
    pinhole: Fixed pinhole camera at the origin looking down -z

Camera responsibilities:
    - Map pixel (column, row) coordinates to unit ray directions
    - Scale the horizontal extent by the image aspect ratio
"""

from .pinhole import (
    PinholeCamera,
    get_camera_info,
    get_camera_origin,
    get_ray,
    primary_direction,
    setup_camera,
)

__all__ = [
    "PinholeCamera",
    "setup_camera",
    "get_ray",
    "primary_direction",
    "get_camera_origin",
    "get_camera_info",
]
