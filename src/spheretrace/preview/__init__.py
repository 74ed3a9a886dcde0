"""Preview module for framebuffer output.

Components:
    export: PPM writer and Pillow-based image export

Example:
    >>> from src.spheretrace.preview import save_image
    >>> from src.spheretrace.core.renderer import FrameRenderer
    >>>
    >>> renderer = FrameRenderer(512, 512)
    >>> renderer.render()
    >>> save_image("output.png", 512, 512, renderer.get_pixel_bytes())
"""

from src.spheretrace.preview.export import (
    pixels_to_array,
    ppm_header,
    read_ppm,
    save_image,
    write_ppm,
)

__all__ = [
    "ppm_header",
    "write_ppm",
    "read_ppm",
    "save_image",
    "pixels_to_array",
]
