"""Linear contrast stretch around mid-gray."""

from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)


def enhance_contrast(gray: np.ndarray, contrast: float) -> np.ndarray:
    """Scale luminance away from (or toward) mid-gray.

    contrast: 1.0 = no change, 0.0 = flat mid-gray, > 1.0 pushes samples
    toward black/white. Results are clamped to [0, 255] and truncated.
    """
    logger.debug("contrast %.3f on %dx%d buffer", contrast, gray.shape[1], gray.shape[0])

    if contrast == 1.0:
        return gray.copy()

    normalized = gray.astype(np.float64) / 255.0
    enhanced = np.clip((normalized - 0.5) * contrast + 0.5, 0.0, 1.0)
    # astype truncates toward zero, matching a plain float -> int narrowing
    return (enhanced * 255.0).astype(np.uint8)
