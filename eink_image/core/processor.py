"""Image processing pipeline.

Grayscale → gamma → contrast → threshold/dither.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Callable

import numpy as np
from PIL import Image

from eink_image.core.contrast import enhance_contrast
from eink_image.core.dither import binarize
from eink_image.core.gamma import apply_gamma

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, str], None]


@dataclass(frozen=True)
class Settings:
    """Processing settings that affect output."""

    contrast: float = 1.3  # 0.0 to 2.0 (1.0 = no change)
    gamma: float = 2.2
    dither: bool = True
    diffusion: float = 0.8  # 0.0 to 1.0
    threshold: int = 128  # 0 to 255

    def describe(self) -> dict[str, float | int | bool]:
        """Plain dict view for reports."""
        return asdict(self)


def to_grayscale(img: Image.Image) -> np.ndarray:
    """Convert to a single-channel uint8 luminance array."""
    return np.array(img.convert("L"), dtype=np.uint8)


def _binarize_message(settings: Settings) -> str:
    if settings.dither:
        return "Applying Floyd-Steinberg dithering..."
    return "Applying threshold..."


def process_luminance(
    gray: np.ndarray,
    settings: Settings,
    on_progress: ProgressCallback | None = None,
) -> np.ndarray:
    """Run gamma, contrast and binarization over a luminance buffer.

    Args:
        gray: 2D uint8 array of shape (height, width). Not modified.
        settings: pipeline parameters.
        on_progress: optional callback(position, message), position out
                     of 100, called before each stage with its description.

    Returns:
        New uint8 array of the same shape with values in {0, 255}.
    """
    def report(position: int, message: str) -> None:
        if on_progress:
            on_progress(position, message)

    report(40, "Applying gamma correction...")
    corrected = apply_gamma(gray, settings.gamma)

    report(60, "Enhancing contrast...")
    enhanced = enhance_contrast(corrected, settings.contrast)

    report(70, _binarize_message(settings))
    return binarize(enhanced, settings)


def process_image(
    img: Image.Image,
    settings: Settings,
    on_progress: ProgressCallback | None = None,
) -> np.ndarray:
    """Process a decoded image through the full pipeline."""
    gray = to_grayscale(img)
    logger.debug("grayscale %dx%d from mode %s", gray.shape[1], gray.shape[0], img.mode)
    return process_luminance(gray, settings, on_progress)
