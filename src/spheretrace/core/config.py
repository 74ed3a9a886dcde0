"""Render configuration.

Holds the per-render settings supplied from outside the core: image size,
field of view and output path. The defaults reproduce the reference render
(512x512 pixels, 60 degree field of view, ``output.ppm``).

Example:
    >>> from src.spheretrace.core.config import RenderConfig
    >>> config = RenderConfig(width=256, height=128)
    >>> config.validate()
    >>> config.aspect_ratio
    2.0
"""

import math
from dataclasses import dataclass

# Preallocated render target size; larger images are rejected up front
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

DEFAULT_WIDTH = 512
DEFAULT_HEIGHT = 512
DEFAULT_FOV = math.pi / 3.0
DEFAULT_OUTPUT = "output.ppm"


@dataclass
class RenderConfig:
    """Settings for a single render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in radians, in (0, pi).
        output: Output file path. ``.ppm`` is written directly, other
            extensions go through Pillow.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    fov: float = DEFAULT_FOV
    output: str = DEFAULT_OUTPUT

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    def validate(self) -> None:
        """Check the settings before a render.

        Raises:
            ValueError: If a dimension is non-positive or exceeds the
                preallocated render target, or if fov is outside (0, pi).
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.width > MAX_IMAGE_WIDTH or self.height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({self.width}x{self.height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )
        if not 0.0 < self.fov < math.pi:
            raise ValueError(f"Field of view must be in (0, pi) radians, got {self.fov}")

    @classmethod
    def from_degrees(
        cls,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        fov_degrees: float = 60.0,
        output: str = DEFAULT_OUTPUT,
    ) -> "RenderConfig":
        """Build a config with the field of view given in degrees."""
        return cls(width=width, height=height, fov=math.radians(fov_degrees), output=output)
