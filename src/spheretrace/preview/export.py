"""Framebuffer serialization.

The renderer hands over a width, a height and a flat row-major RGB byte
sequence of length 3 * width * height. This module writes it out:

    - PPM (binary P6) with a single-line header "P6 <width> <height> 255"
    - Any other format Pillow can write (PNG, BMP, ...), chosen by extension

I/O errors are not caught here; they propagate to the caller as OSError.

Example:
    >>> from src.spheretrace.preview.export import write_ppm
    >>> write_ppm("output.ppm", 2, 1, bytes([255, 0, 0, 0, 0, 255]))
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def _check_pixel_length(width: int, height: int, pixels: bytes) -> None:
    """Raise ValueError if pixels does not hold exactly width*height RGB triples."""
    expected = 3 * width * height
    if len(pixels) != expected:
        raise ValueError(
            f"Expected {expected} bytes for a {width}x{height} RGB image, got {len(pixels)}"
        )


def ppm_header(width: int, height: int) -> bytes:
    """Return the PPM header line, including its trailing newline."""
    return f"P6 {width} {height} 255\n".encode("ascii")


def write_ppm(filepath: str | Path, width: int, height: int, pixels: bytes) -> None:
    """Write a binary PPM (P6) file.

    Args:
        filepath: Output file path.
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Row-major RGB bytes, 3 * width * height long.

    Raises:
        ValueError: If the byte count does not match the dimensions.
        OSError: If the file cannot be created or written.
    """
    _check_pixel_length(width, height, pixels)
    with open(filepath, "wb") as f:
        f.write(ppm_header(width, height))
        f.write(pixels)


def pixels_to_array(width: int, height: int, pixels: bytes) -> npt.NDArray[np.uint8]:
    """View a flat RGB byte sequence as an (height, width, 3) uint8 array."""
    _check_pixel_length(width, height, pixels)
    return np.frombuffer(pixels, dtype=np.uint8).reshape(height, width, 3)


def save_image(filepath: str | Path, width: int, height: int, pixels: bytes) -> None:
    """Save a framebuffer, picking the format from the file extension.

    ``.ppm`` files are written with write_ppm so the header matches the
    reference output byte for byte; every other extension goes through
    Pillow.

    Args:
        filepath: Output file path.
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Row-major RGB bytes, 3 * width * height long.

    Raises:
        ValueError: If the byte count does not match the dimensions, or
            Pillow does not recognize the extension.
        OSError: If the file cannot be created or written.
    """
    path = Path(filepath)
    if path.suffix.lower() == ".ppm":
        write_ppm(path, width, height, pixels)
        return

    image = pixels_to_array(width, height, pixels)
    pil_image = PILImage.fromarray(image, mode="RGB")
    pil_image.save(path)


def read_ppm(filepath: str | Path) -> tuple[int, int, bytes]:
    """Read back a binary PPM written by write_ppm (or any P6 with maxval 255).

    Returns:
        Tuple of (width, height, pixels).

    Raises:
        ValueError: If the file is not an 8-bit binary PPM.
    """
    with PILImage.open(filepath) as pil_image:
        if pil_image.format != "PPM" or pil_image.mode != "RGB":
            raise ValueError(f"{filepath} is not an 8-bit RGB PPM image")
        width, height = pil_image.size
        return width, height, pil_image.tobytes()
