"""Tests for the output writer."""

import numpy as np
import pytest
from PIL import Image

from eink_image.core.writer import save_image, supported_extensions


def _checkerboard(height=6, width=8):
    board = np.indices((height, width)).sum(axis=0) % 2
    return (board * 255).astype(np.uint8)


class TestSupportedExtensions:
    def test_common_formats(self):
        extensions = supported_extensions()
        for ext in (".png", ".bmp", ".jpg", ".gif"):
            assert ext in extensions


class TestSaveImage:
    def test_save_png(self, tmp_path):
        output = tmp_path / "out.png"
        gray = _checkerboard()

        written = save_image(gray, output)

        assert written == output
        assert output.exists()
        img = Image.open(str(output))
        assert img.format == "PNG"
        assert img.mode == "L"
        assert img.size == (8, 6)
        assert np.array_equal(np.array(img), gray)

    def test_save_bmp(self, tmp_path):
        output = tmp_path / "out.bmp"
        save_image(_checkerboard(), output)
        assert Image.open(str(output)).format == "BMP"

    def test_extension_is_case_insensitive(self, tmp_path):
        output = tmp_path / "OUT.PNG"
        save_image(_checkerboard(), output)
        assert output.exists()

    def test_unsupported_extension(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported output format"):
            save_image(_checkerboard(), tmp_path / "out.xyz")

    def test_missing_extension(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported output format"):
            save_image(_checkerboard(), tmp_path / "out")

    def test_rejects_color_buffer(self, tmp_path):
        rgb = np.zeros((4, 4, 3), dtype=np.uint8)
        with pytest.raises(ValueError, match="2D uint8"):
            save_image(rgb, tmp_path / "out.png")

    def test_rejects_float_buffer(self, tmp_path):
        with pytest.raises(ValueError, match="2D uint8"):
            save_image(np.zeros((4, 4)), tmp_path / "out.png")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(OSError):
            save_image(_checkerboard(), tmp_path / "missing" / "out.png")
