"""
QR code rendering.

Symbols are encoded by the ``qrcode`` library; this module only decides how
the resulting module matrix is presented:

- ASCII: one text row per module row, two characters per module, no quiet
  zone. Dark modules are full blocks, light modules are spaces.
- PNG: a black-on-white bitmap with a quiet zone, scaled with whole-pixel
  modules so that both sides are at least the requested size.
"""

import io
import logging
import math
from typing import List, Optional

import qrcode
from qrcode.exceptions import DataOverflowError
from qrcode.image.pil import PilImage

from qrlink_app.config import settings
from qrlink_app.errors import BadRequest, RenderFailure
from qrlink_app.schemas.url import QRFormat, RenderedQR

logger = logging.getLogger(__name__)

DARK_MODULE = "█"
LIGHT_MODULE = " "


class QRRenderer:
    """Turns text into an ASCII or PNG QR symbol"""

    def __init__(
        self,
        default_size: int = 300,
        max_size: int = 4096,
        border: int = 4,
        error_correction: int = qrcode.constants.ERROR_CORRECT_M,
    ):
        self.default_size = default_size
        self.max_size = max_size
        self.border = border
        self.error_correction = error_correction

    def resolve_size(self, size: Optional[int]) -> int:
        """Requested minimum side length in pixels, or the default"""
        if size is None:
            return self.default_size
        if size <= 0:
            raise BadRequest(f"QR size must be a positive integer, got {size}")
        if size > self.max_size:
            raise BadRequest(f"QR size must not exceed {self.max_size} pixels")
        return size

    def encode(self, text: str, border: int = 0) -> qrcode.QRCode:
        """Fit ``text`` into the smallest symbol version that holds it"""
        qr = qrcode.QRCode(
            version=None,
            error_correction=self.error_correction,
            box_size=1,
            border=border,
        )
        qr.add_data(text)
        try:
            qr.make(fit=True)
        except (DataOverflowError, ValueError) as e:
            logger.warning("QR encoding failed for %d characters: %s", len(text), e)
            raise RenderFailure(f"QR code generation failed: {e}") from e
        return qr

    def module_matrix(self, text: str) -> List[List[bool]]:
        """Dark/light modules of the symbol, without quiet zone"""
        return self.encode(text).get_matrix()

    def render_ascii(self, text: str) -> str:
        rows = []
        for row in self.module_matrix(text):
            rows.append("".join(DARK_MODULE * 2 if dark else LIGHT_MODULE * 2 for dark in row))
        return "\n".join(rows)

    def render_png(self, text: str, size: Optional[int] = None) -> bytes:
        min_side = self.resolve_size(size)
        qr = self.encode(text, border=self.border)

        # Whole-pixel modules, rounded up so the image is never smaller than asked
        modules_per_side = qr.modules_count + 2 * self.border
        qr.box_size = max(1, math.ceil(min_side / modules_per_side))

        try:
            image = qr.make_image(image_factory=PilImage, fill_color="black", back_color="white")
            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
        except (OSError, ValueError) as e:
            logger.error("PNG encoding failed: %s", e)
            raise RenderFailure(f"PNG encoding failed: {e}") from e
        return buffer.getvalue()

    def render(self, text: str, output_format: QRFormat, size: Optional[int] = None) -> RenderedQR:
        size = self.resolve_size(size)
        if output_format == QRFormat.ASCII:
            return RenderedQR(content=self.render_ascii(text).encode("utf-8"), media_type="text/plain")
        return RenderedQR(content=self.render_png(text, size), media_type="image/png")


def create_renderer() -> QRRenderer:
    return QRRenderer(
        default_size=settings.qr_default_size,
        max_size=settings.qr_max_size,
        border=settings.qr_border,
    )
