"""Image loading into luminance buffers."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from eink_image.core.processor import to_grayscale

logger = logging.getLogger(__name__)


def open_image(path: str | Path) -> Image.Image:
    """Open and fully decode an image file.

    Raises:
        FileNotFoundError: if the path does not exist.
        ValueError: if Pillow cannot identify the file as an image.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        with Image.open(path) as img:
            img.load()
    except UnidentifiedImageError as e:
        raise ValueError(f"Unsupported or corrupt image: {path}") from e

    logger.info("Loaded %s (%s, %dx%d)", path, img.mode, img.width, img.height)
    return img


def load_luminance(path: str | Path) -> np.ndarray:
    """Open an image and reduce it to a uint8 luminance array."""
    return to_grayscale(open_image(path))
