"""Gamma remapping through a precomputed 256-entry lookup table."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class GammaLUT:
    """Power-law lookup table for one gamma value.

    Entry ``i`` holds ``round(255 * (i / 255) ** (1 / gamma))``. The table is
    built once per call and indexed directly, so ``pow`` runs 256 times
    regardless of image size.
    """

    gamma: float
    table: np.ndarray  # shape (256,), uint8

    @classmethod
    def build(cls, gamma: float) -> GammaLUT:
        inv = 1.0 / gamma
        levels = np.arange(256, dtype=np.float64) / 255.0
        # Round half away from zero; np.round would round half to even.
        corrected = np.floor(levels**inv * 255.0 + 0.5)
        table = np.clip(corrected, 0, 255).astype(np.uint8)
        table.setflags(write=False)
        return cls(gamma=gamma, table=table)

    def apply(self, gray: np.ndarray) -> np.ndarray:
        """Map every sample of a uint8 buffer through the table."""
        return self.table[gray]


def apply_gamma(gray: np.ndarray, gamma: float) -> np.ndarray:
    """Apply gamma correction to a uint8 luminance buffer.

    gamma = 1.0 is the identity; values above 1.0 brighten mid-tones.
    """
    logger.debug("gamma %.3f on %dx%d buffer", gamma, gray.shape[1], gray.shape[0])
    return GammaLUT.build(gamma).apply(gray)
