"""Unit tests for QrCodeImageGenerator."""

import io

import pytest
from PIL import Image

from surprise.infrastructure.codeimage.qr import QrCodeImageGenerator

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class TestQrCodeImageGenerator:
    def test_encode_returns_png(self):
        image = QrCodeImageGenerator().encode("https://app.example/surprise/Ab3_x-9QzLmN")
        assert image.startswith(PNG_SIGNATURE)

    def test_image_is_square_and_near_target_size(self):
        image = QrCodeImageGenerator(size=200).encode("https://app.example/surprise/abc")

        width, height = Image.open(io.BytesIO(image)).size

        assert width == height
        assert 100 < width <= 200

    def test_higher_error_correction_changes_output(self):
        url = "https://app.example/surprise/abc"
        low = QrCodeImageGenerator(error_correction="L").encode(url)
        high = QrCodeImageGenerator(error_correction="H").encode(url)
        assert low != high

    def test_unknown_level_rejected(self):
        with pytest.raises(KeyError):
            QrCodeImageGenerator(error_correction="Z")

    def test_media_type(self):
        assert QrCodeImageGenerator.media_type == "image/png"
