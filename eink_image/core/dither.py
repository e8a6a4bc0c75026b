"""Binarization: static threshold or Floyd-Steinberg error diffusion."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from eink_image.core.processor import Settings

logger = logging.getLogger(__name__)

# (dx, dy, weight) over a divisor of 16. Only targets not yet visited in
# raster order: east, southwest, south, southeast.
FLOYD_STEINBERG_KERNEL: tuple[tuple[int, int, int], ...] = (
    (1, 0, 7),
    (-1, 1, 3),
    (0, 1, 5),
    (1, 1, 1),
)
KERNEL_DIVISOR = 16.0

BLACK = 0
WHITE = 255


def apply_threshold(gray: np.ndarray, threshold: int) -> np.ndarray:
    """Map samples >= threshold to white and everything else to black."""
    logger.debug("threshold %d on %dx%d buffer", threshold, gray.shape[1], gray.shape[0])
    return np.where(gray >= threshold, WHITE, BLACK).astype(np.uint8)


def spread_error(
    errors: list[float],
    width: int,
    height: int,
    x: int,
    y: int,
    error: float,
) -> None:
    """Distribute a pixel's error to its unvisited neighbours.

    Args:
        errors: flat error accumulator indexed by ``y * width + x``.
        width: buffer width.
        height: buffer height.
        x: column of the pixel that produced ``error``.
        y: row of the pixel that produced ``error``.
        error: quantization error, already scaled by the diffusion amount.

    Targets outside the buffer are skipped, so edge pixels pass on less
    than their full error.
    """
    for dx, dy, weight in FLOYD_STEINBERG_KERNEL:
        nx, ny = x + dx, y + dy
        if 0 <= nx < width and ny < height:
            errors[ny * width + nx] += error * weight / KERNEL_DIVISOR


def floyd_steinberg(
    gray: np.ndarray,
    diffusion: float = 0.8,
    threshold: int = 128,
) -> np.ndarray:
    """Apply Floyd-Steinberg dithering to a uint8 grayscale buffer.

    Args:
        gray: 2D uint8 array of shape (height, width).
        diffusion: fraction of each pixel's error carried to its neighbours.
                   0.0 degenerates to plain thresholding; values above 1.0
                   are accepted as-is.
        threshold: effective value at or above which a pixel turns white.

    Returns:
        uint8 array of the same shape containing only 0 and 255.

    Each pixel's effective value is its original sample plus the error
    accumulated from earlier pixels. Errors never pass through the output
    buffer, so they do not compound through previous quantization results.
    """
    h, w = gray.shape
    logger.debug(
        "floyd-steinberg on %dx%d buffer (diffusion=%.3f, threshold=%d)",
        w, h, diffusion, threshold,
    )

    src = gray.ravel().tolist()
    errors = [0.0] * (w * h)
    out = np.empty(w * h, dtype=np.uint8)

    for y in range(h):
        row = y * w
        for x in range(w):
            effective = src[row + x] + errors[row + x]
            new = WHITE if effective >= threshold else BLACK
            out[row + x] = new
            spread_error(errors, w, h, x, y, (effective - new) * diffusion)

    return out.reshape(h, w)


def binarize(gray: np.ndarray, settings: Settings) -> np.ndarray:
    """Run the final two-level stage selected by ``settings.dither``."""
    if settings.dither:
        return floyd_steinberg(gray, settings.diffusion, settings.threshold)
    return apply_threshold(gray, settings.threshold)
