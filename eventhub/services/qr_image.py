"""
QR Image Encoder

Renders text into a black-on-white PNG QR code and returns it base64 encoded
(no data: prefix), the form stored in the qr_code columns.
"""

import base64
import io
import logging

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from eventhub.core.config import settings
from eventhub.core.exceptions import QREncodingError

logger = logging.getLogger(__name__)


class QRImageEncoder:
    def __init__(self, box_size: int = 10, border: int = 1,
                 fill_color: str = "black", back_color: str = "white"):
        self.box_size = box_size
        self.border = border
        self.fill_color = fill_color
        self.back_color = back_color

    def encode(self, text: str) -> str:
        if not text:
            raise QREncodingError("Cannot encode an empty QR code")

        try:
            qr = qrcode.QRCode(
                version=None,  # Grow to fit the payload
                error_correction=ERROR_CORRECT_M,
                box_size=self.box_size,
                border=self.border,
            )
            qr.add_data(text)
            qr.make(fit=True)

            img = qr.make_image(fill_color=self.fill_color, back_color=self.back_color)
            img_buffer = io.BytesIO()
            img.save(img_buffer, format="PNG")
            png_bytes = img_buffer.getvalue()
        except Exception as e:
            logger.error(f"QR image encoding failed for {len(text)} chars: {str(e)}")
            raise QREncodingError() from e

        if not png_bytes:
            raise QREncodingError()

        return base64.b64encode(png_bytes).decode()


def secure_encoder() -> QRImageEncoder:
    """Encoder for signed payload codes."""
    return QRImageEncoder(box_size=settings.QR_SECURE_BOX_SIZE, border=settings.QR_SECURE_BORDER)


def display_encoder() -> QRImageEncoder:
    """Encoder for quick-access URL codes."""
    return QRImageEncoder(box_size=settings.QR_DISPLAY_BOX_SIZE, border=settings.QR_DISPLAY_BORDER)
