from __future__ import annotations

import base64
import logging

import anyio
from reportlab.graphics import renderSVG
from reportlab.graphics.barcode.qr import QrCodeWidget
from reportlab.graphics.shapes import Drawing

from parking.errors import CodeGenerationError

logger = logging.getLogger("qr_codes")

QR_SIZE_POINTS = 200
DATA_URL_PREFIX = "data:image/svg+xml;base64,"


def render_qr_svg(data: str, size: int = QR_SIZE_POINTS) -> str:
    """Render `data` as a square QR code and return the SVG document."""

    widget = QrCodeWidget(data)
    x1, y1, x2, y2 = widget.getBounds()
    width = x2 - x1
    height = y2 - y1
    drawing = Drawing(size, size, transform=[size / width, 0, 0, size / height, 0, 0])
    drawing.add(widget)
    return renderSVG.drawToString(drawing)


def render_qr_data_url(data: str, size: int = QR_SIZE_POINTS) -> str:
    svg = render_qr_svg(data, size)
    return DATA_URL_PREFIX + base64.b64encode(svg.encode("utf-8")).decode("ascii")


async def generate_code_image(data: str) -> str:
    """Render the QR data URL in a worker thread so the event loop stays free."""

    try:
        return await anyio.to_thread.run_sync(render_qr_data_url, data)
    except Exception as exc:
        logger.exception("Error generating QR code: %s", exc)
        raise CodeGenerationError(error=str(exc)) from exc
