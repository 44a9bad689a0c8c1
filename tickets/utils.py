import io
import logging
import os
from functools import lru_cache

from django.conf import settings
from django.utils import timezone

from PIL import Image, ImageColor, ImageDraw, ImageFont
from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader

import qrcode

from siteconfig.services import get_config, open_logo
from .models import Ticket

logger = logging.getLogger('tickets')

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'

# ---- layout (px lógicos, se multiplican por SCALE) ----
SCALE = 2
LAYOUT_WIDTH = 400
PADDING = 32
LOGO_BOX = 80
QR_SIZE = 120
SERVICE_LINE = "Servicio de Imantación de Volante"

# ---- página del PDF ----
TICKET_WIDTH_MM = 150
TOP_MARGIN_MM = 15

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GRAY_600 = (75, 85, 99)
GRAY_500 = (107, 114, 128)
GRAY_200 = (229, 231, 235)
GRAY_50 = (249, 250, 251)


class TicketExportError(Exception):
    pass


class LayoutNotFoundError(TicketExportError):
    """No hay ticket para dibujar."""


class EmptyRasterError(TicketExportError):
    """La captura quedó con ancho o alto cero."""


class MalformedRasterError(TicketExportError):
    """La imagen codificada no es un PNG válido."""


def build_verify_url(ticket_id: str) -> str:
    return f"{settings.SITE_URL.rstrip('/')}/verify/{ticket_id}"


def preview_ticket() -> Ticket:
    """Ticket de ejemplo (sin guardar) para la vista previa de la configuración."""
    return Ticket(
        id="TKT-PREVIEW-123",
        customer_name="Juan Pérez",
        created_at=timezone.now(),
    )


@lru_cache(maxsize=None)
def _font(size: int, bold: bool = False):
    path = settings.TICKET_FONT_BOLD_PATH if bold else settings.TICKET_FONT_PATH
    if path and os.path.exists(path):
        return ImageFont.truetype(path, size)
    return ImageFont.load_default(size=size)


def _color(value, fallback):
    try:
        return ImageColor.getrgb(value)
    except (ValueError, TypeError, AttributeError):
        return ImageColor.getrgb(fallback)


def _text_height(font) -> int:
    left, top, right, bottom = font.getbbox("Ág")
    return bottom - top


def _fit_text(draw, text: str, font, max_width: float) -> str:
    # recorta con «…» si no entra
    if draw.textlength(text, font=font) <= max_width:
        return text
    while text and draw.textlength(text + "…", font=font) > max_width:
        text = text[:-1]
    return text + "…"


def _format_date(dt) -> str:
    if not dt:
        return ""
    if timezone.is_aware(dt):
        dt = timezone.localtime(dt)
    return dt.strftime("%d/%m/%Y")


def render_qr(payload: str, color, size: int) -> Image.Image:
    """Símbolo QR en el color primario sobre blanco, de size x size px."""
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=1,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    img = qr.make_image(fill_color=color, back_color=WHITE).get_image()
    return img.convert("RGB").resize((size, size), Image.NEAREST)


def _paste_logo(img: Image.Image, config, box) -> bool:
    x, y, side = box
    try:
        with open_logo(config.logo) as fh:
            logo = Image.open(fh)
            logo.load()
    except OSError:
        logger.warning("No se pudo abrir el logo %s, se usa el monograma", config.logo)
        return False

    logo = logo.convert("RGBA")
    logo.thumbnail((side, side))
    img.paste(logo, (x + (side - logo.width) // 2, y + (side - logo.height) // 2), logo)
    return True


def render_ticket_image(ticket, config) -> Image.Image:
    """
    Dibuja el ticket: encabezado (logo o monograma, local y teléfono), banda
    «TICKET DE SERVICIO», id / cliente / fecha, QR hacia la URL de verificación
    y pie con la dirección.
    """
    if ticket is None or not getattr(ticket, "id", None):
        raise LayoutNotFoundError("No hay ticket para renderizar.")

    s = SCALE
    width = LAYOUT_WIDTH * s
    pad = PADDING * s
    primary = _color(config.primary_color, "#06b6d4")
    secondary = _color(config.secondary_color, "#ec4899")

    # el QR se genera completo antes de componer el layout
    qr_img = render_qr(build_verify_url(ticket.id), primary, QR_SIZE * s)

    img = Image.new("RGB", (width, 1000 * s), WHITE)
    draw = ImageDraw.Draw(img)
    y = pad

    # Encabezado
    side = LOGO_BOX * s
    if not (config.logo and _paste_logo(img, config, (pad, y, side))):
        draw.rounded_rectangle((pad, y, pad + side, y + side), radius=16 * s, fill=primary)
        font = _font(20 * s, bold=True)
        draw.text((pad + side / 2, y + side / 2), config.monogram, font=font, fill=WHITE, anchor="mm")

    right = width - pad
    text_max = right - (pad + side + 16 * s)
    font = _font(20 * s, bold=True)
    draw.text((right, y + 12 * s), _fit_text(draw, config.company_name or "", font, text_max),
              font=font, fill=primary, anchor="ra")
    small = _font(14 * s)
    draw.text((right, y + 12 * s + _text_height(font) + 8 * s), config.company_phone or "",
              font=small, fill=GRAY_600, anchor="ra")
    y += side + 24 * s
    draw.rectangle((pad, y, right, y + 4 * s), fill=primary)
    y += 4 * s + 24 * s

    # Banda
    band_h = 48 * s
    draw.rounded_rectangle((pad, y, right, y + band_h), radius=12 * s, fill=primary)
    draw.text((width / 2, y + band_h / 2), "TICKET DE SERVICIO",
              font=_font(18 * s, bold=True), fill=WHITE, anchor="mm")
    y += band_h + 24 * s

    # Datos del ticket
    row_h = 52 * s
    label_font = _font(14 * s, bold=True)
    value_font = _font(14 * s, bold=True)
    rows = [
        ("Ticket ID:", ticket.id, primary),
        ("Cliente:", ticket.customer_name or "", BLACK),
        ("Fecha:", _format_date(ticket.created_at), BLACK),
    ]
    for label, value, color in rows:
        draw.rounded_rectangle((pad, y, right, y + row_h), radius=8 * s, fill=GRAY_50)
        draw.text((pad + 16 * s, y + row_h / 2), label, font=label_font, fill=GRAY_600, anchor="lm")
        label_w = draw.textlength(label, font=label_font)
        value = _fit_text(draw, value, value_font, right - pad - 48 * s - label_w)
        draw.text((right - 16 * s, y + row_h / 2), value, font=value_font, fill=color, anchor="rm")
        y += row_h + 16 * s
    y += 16 * s

    # QR con marco del color secundario
    frame = 4 * s
    inner = 16 * s
    box = qr_img.width + 2 * (inner + frame)
    bx = (width - box) // 2
    draw.rounded_rectangle((bx, y, bx + box, y + box), radius=12 * s, fill=WHITE,
                           outline=secondary, width=frame)
    img.paste(qr_img, (bx + frame + inner, y + frame + inner))
    y += box + 12 * s
    caption_font = _font(14 * s)
    draw.text((width / 2, y), "Escanea este código para verificar el pago",
              font=caption_font, fill=GRAY_500, anchor="ma")
    y += _text_height(caption_font) + 32 * s

    # Pie
    draw.rectangle((pad, y, right, y + 2 * s), fill=GRAY_200)
    y += 2 * s + 24 * s
    draw.text((width / 2, y), config.company_address or "", font=small, fill=GRAY_600, anchor="ma")
    y += _text_height(small) + 20 * s
    draw.text((width / 2, y), SERVICE_LINE, font=_font(14 * s, bold=True), fill=secondary, anchor="ma")
    y += _text_height(small) + pad

    return img.crop((0, 0, width, y))


def _encode_png(img: Image.Image) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def capture_ticket(ticket, config):
    """Renderiza y codifica a PNG. Devuelve (png, ancho_px, alto_px)."""
    img = render_ticket_image(ticket, config)
    if img.width == 0 or img.height == 0:
        raise EmptyRasterError("La imagen del ticket quedó vacía.")

    png = _encode_png(img)
    if not png or not png.startswith(PNG_SIGNATURE):
        raise MalformedRasterError("La imagen generada no es un PNG válido.")
    return png, img.width, img.height


def render_ticket_png(ticket, config) -> bytes:
    png, _, _ = capture_ticket(ticket, config)
    return png


def fit_on_page(px_width, px_height, page_width, page_height):
    """
    Ubica la imagen en la página: 150 mm de ancho, centrada, 15 mm arriba.
    Si no entra en alto (página - 30 mm) se achica por alto manteniendo la proporción.
    Devuelve (x, y_desde_arriba, ancho, alto) en puntos.
    """
    top = TOP_MARGIN_MM * mm
    width = TICKET_WIDTH_MM * mm
    height = px_height * width / px_width

    max_height = page_height - 2 * top
    if height > max_height:
        height = max_height
        width = px_width * height / px_height

    return (page_width - width) / 2, top, width, height


def build_ticket_pdf(ticket, config=None) -> bytes:
    """
    Genera el PDF del ticket (A4, una página) y devuelve bytes.
    Si la captura falla no se produce ningún archivo.
    """
    if config is None:
        config = get_config()
    png, px_w, px_h = capture_ticket(ticket, config)

    page_w, page_h = A4
    x, top, w, h = fit_on_page(px_w, px_h, page_w, page_h)

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.setTitle(f"ticket-{ticket.id}")
    # reportlab mide y desde abajo
    c.drawImage(ImageReader(io.BytesIO(png)), x, page_h - top - h, w, h)
    c.showPage()
    c.save()
    pdf = buffer.getvalue()
    buffer.close()
    return pdf
