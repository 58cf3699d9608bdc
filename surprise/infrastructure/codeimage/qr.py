"""QR code rendering for share links."""

import io

import qrcode
from qrcode.constants import (
    ERROR_CORRECT_H,
    ERROR_CORRECT_L,
    ERROR_CORRECT_M,
    ERROR_CORRECT_Q,
)

from surprise.domain.surprise.port.code_image import CodeImageGenerator

ERROR_CORRECTION_LEVELS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}


class QrCodeImageGenerator(CodeImageGenerator):
    """Renders PNG QR codes with the qrcode library (Pillow backend).

    The module size is chosen so the image is as close to `size` pixels
    as whole modules allow, never smaller than one pixel per module.
    """

    media_type = "image/png"

    def __init__(self, size: int = 200, margin: int = 2, error_correction: str = "L") -> None:
        self.size = size
        self.margin = margin
        self.error_correction = ERROR_CORRECTION_LEVELS[error_correction]

    def encode(self, url: str) -> bytes:
        qr = qrcode.QRCode(
            error_correction=self.error_correction,
            border=self.margin,
        )
        qr.add_data(url)
        qr.make(fit=True)

        modules = qr.modules_count + 2 * self.margin
        qr.box_size = max(1, self.size // modules)

        image = qr.make_image(fill_color="black", back_color="white")
        buf = io.BytesIO()
        image.save(buf, format="PNG")
        return buf.getvalue()
