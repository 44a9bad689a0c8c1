import pytest
from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm

from siteconfig.services import get_config, save_config, upload_logo
from tickets import utils
from tickets.utils import (
    EmptyRasterError, LayoutNotFoundError, MalformedRasterError,
    build_ticket_pdf, build_verify_url, fit_on_page, preview_ticket,
    render_ticket_image, render_ticket_png,
)

pytestmark = pytest.mark.django_db


def test_verify_url(settings):
    settings.SITE_URL = "https://buffa.example.com/"
    assert build_verify_url("TKT-1-ABC") == "https://buffa.example.com/verify/TKT-1-ABC"


def test_render_ticket_image(ticket):
    img = render_ticket_image(ticket, get_config())
    assert img.width == utils.LAYOUT_WIDTH * utils.SCALE
    assert img.height > img.width


def test_render_ticket_png_is_png(ticket):
    png = render_ticket_png(ticket, get_config())
    assert png.startswith(utils.PNG_SIGNATURE)


def test_render_uses_uploaded_logo(ticket, media_root, png_upload):
    save_config(logo=upload_logo(png_upload))
    assert render_ticket_png(ticket, get_config()).startswith(utils.PNG_SIGNATURE)


def test_render_falls_back_to_monogram_when_logo_missing(ticket, media_root):
    save_config(logo="https://tickets.example.com/media/logos/gone.png")
    assert render_ticket_png(ticket, get_config()).startswith(utils.PNG_SIGNATURE)


def test_preview_ticket_renders():
    assert render_ticket_png(preview_ticket(), get_config()).startswith(utils.PNG_SIGNATURE)


def test_build_ticket_pdf(ticket):
    pdf = build_ticket_pdf(ticket)
    assert pdf.startswith(b"%PDF")
    assert pdf.rstrip().endswith(b"%%EOF")


def test_missing_ticket_aborts_export():
    with pytest.raises(LayoutNotFoundError):
        build_ticket_pdf(None, get_config())


def test_zero_size_capture_aborts_export(ticket, monkeypatch):
    monkeypatch.setattr(utils, "render_ticket_image", lambda t, c: Image.new("RGB", (0, 0)))
    with pytest.raises(EmptyRasterError):
        build_ticket_pdf(ticket, get_config())


def test_malformed_raster_aborts_export(ticket, monkeypatch):
    monkeypatch.setattr(utils, "_encode_png", lambda img: b"not a png")
    with pytest.raises(MalformedRasterError):
        build_ticket_pdf(ticket, get_config())


def test_fit_on_page_centers_at_ticket_width():
    page_w, page_h = A4
    x, top, w, h = fit_on_page(800, 1000, page_w, page_h)

    assert w == pytest.approx(150 * mm)
    assert h == pytest.approx(1000 * 150 * mm / 800)
    assert x == pytest.approx((page_w - w) / 2)
    assert top == pytest.approx(15 * mm)


def test_fit_on_page_scales_tall_images_by_height():
    page_w, page_h = A4
    x, top, w, h = fit_on_page(800, 4000, page_w, page_h)

    assert h == pytest.approx(page_h - 30 * mm)
    assert w == pytest.approx(800 * h / 4000)
    assert w / h == pytest.approx(800 / 4000)
    assert x == pytest.approx((page_w - w) / 2)
