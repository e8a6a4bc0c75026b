"""Save luminance buffers as image files.

The output format follows the file extension, using any format Pillow
can write.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def supported_extensions() -> set[str]:
    """Extensions (lower-case, with dot) that Pillow can encode."""
    Image.init()
    return {ext for ext, fmt in Image.registered_extensions().items() if fmt in Image.SAVE}


def save_image(gray: np.ndarray, output_path: str | Path) -> Path:
    """Write a 2D uint8 buffer as an 8-bit grayscale image.

    Returns:
        The path written to.

    Raises:
        ValueError: if the buffer is not 2D uint8 or the extension
                    has no Pillow encoder.
        OSError: if the file cannot be written.
    """
    output_path = Path(output_path)
    if gray.ndim != 2 or gray.dtype != np.uint8:
        raise ValueError(
            f"Expected a 2D uint8 buffer, got {gray.ndim}D {gray.dtype}"
        )

    suffix = output_path.suffix.lower()
    if suffix not in supported_extensions():
        raise ValueError(f"Unsupported output format: {suffix or '(none)'}")

    img = Image.fromarray(np.ascontiguousarray(gray))
    img.save(output_path)
    logger.info("Saved %s (%dx%d)", output_path, img.width, img.height)
    return output_path
