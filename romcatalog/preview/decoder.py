"""
Image decode/encode backed by Pillow.
"""

import logging
from pathlib import Path
from typing import Tuple

from PIL import Image

logger = logging.getLogger(__name__)


class DecodeError(Exception):
    """Image is corrupt or in an unsupported format."""
    pass


def decode_image(path: Path) -> Tuple[Image.Image, int, int]:
    """
    Decode an image file into memory.

    Args:
        path: Image file path

    Returns:
        Tuple of (image, width, height); the caller owns the image and
        must close it

    Raises:
        DecodeError: If the file cannot be read or decoded
    """
    try:
        img = Image.open(path)
        img.load()
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Cannot decode {path}: {e}")

    width, height = img.size
    return img, width, height


def encode_png(image: Image.Image, path: Path) -> None:
    """
    Save an image as PNG, creating parent directories.

    Raises:
        OSError: If the file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    image.save(path, format="PNG")
    logger.debug(f"Saved preview image {path}")
