"""
PNG output for generated terrain maps.

Encoding is done by Pillow. Write failures are logged and re-raised; the
caller decides whether a failed write is fatal.
"""

import io
from pathlib import Path
from typing import Callable, Tuple, Union

import numpy as np
import structlog
from PIL import Image

logger = structlog.get_logger()


def _write_rgb(pixels: np.ndarray, path: Union[str, Path]) -> Path:
    path = Path(path)
    height, width = pixels.shape[:2]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(pixels).save(path, format="PNG")
    except OSError as e:
        logger.error("Failed to write image", path=str(path), error=str(e))
        raise
    logger.info("Image written", path=str(path), width=width, height=height)
    return path


def save_png(buffer, path: Union[str, Path]) -> Path:
    """
    Write a PixelBuffer to a PNG file.

    Args:
        buffer: PixelBuffer with a (height, width, 3) uint8 pixel array
        path: Destination file; parent directories are created

    Returns:
        Path of the written file
    """
    pixels = np.ascontiguousarray(buffer.pixels, dtype=np.uint8)
    return _write_rgb(pixels, path)


def write_image(
    width: int,
    height: int,
    pixel_color: Callable[[int, int], Tuple[int, int, int]],
    path: Union[str, Path],
) -> Path:
    """
    Write an image whose colors come from a per-pixel accessor.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        pixel_color: Called as pixel_color(x, y), returns (r, g, b)
        path: Destination file

    Returns:
        Path of the written file
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image size {width}x{height}")

    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    for y in range(height):
        for x in range(width):
            pixels[y, x] = np.clip(pixel_color(x, y), 0, 255)
    return _write_rgb(pixels, path)


def encode_png(buffer) -> bytes:
    """Encode a PixelBuffer as PNG bytes."""
    pixels = np.ascontiguousarray(buffer.pixels, dtype=np.uint8)
    stream = io.BytesIO()
    Image.fromarray(pixels).save(stream, format="PNG")
    return stream.getvalue()
