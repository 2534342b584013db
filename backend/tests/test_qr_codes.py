from __future__ import annotations

import base64

import pytest

from parking.errors import CodeGenerationError
from parking.services import qr_codes
from parking.services.qr_codes import DATA_URL_PREFIX, generate_code_image, render_qr_data_url, render_qr_svg

INTENT = "upi://pay?pa=alice@gpay&pn=SmartParking&am=50&tn=Parking Reservation for Slot 7"


def test_render_qr_svg_is_svg_document():
    svg = render_qr_svg(INTENT)
    assert "<svg" in svg
    assert "</svg>" in svg


def test_render_qr_data_url_embeds_base64_svg():
    url = render_qr_data_url(INTENT)
    assert url.startswith(DATA_URL_PREFIX)

    decoded = base64.b64decode(url[len(DATA_URL_PREFIX):]).decode("utf-8")
    assert "<svg" in decoded


def test_different_intents_give_different_images():
    assert render_qr_data_url(INTENT) != render_qr_data_url(INTENT.replace("am=50", "am=60"))


@pytest.mark.anyio
async def test_generate_code_image_runs_renderer():
    url = await generate_code_image(INTENT)
    assert url.startswith(DATA_URL_PREFIX)


@pytest.mark.anyio
async def test_generate_code_image_wraps_renderer_failure(monkeypatch):
    def broken(data):
        raise ValueError("too much data")

    monkeypatch.setattr(qr_codes, "render_qr_data_url", broken)

    with pytest.raises(CodeGenerationError) as ei:
        await generate_code_image(INTENT)

    assert ei.value.status_code == 500
    assert ei.value.details == {"error": "too much data"}
