"""
PDF overlay renderer
- Loads a fresh copy of the template for every call (file never written)
- Draws all placements on a reportlab canvas the size of page 1
- Merges the canvas on to page 1 with pypdf and returns the bytes
"""

import io
import os
import logging

from pypdf import PdfReader, PdfWriter
from reportlab.pdfgen import canvas as rl_canvas

from ..core.errors import RenderError, TemplateNotFoundError, TemplateParseError

log = logging.getLogger("registro.renderer")

FONT_NAME = "Helvetica"


def load_template(template_path):
    """Read and parse the template. Returns a PdfReader over an in-memory copy."""
    if not os.path.isfile(template_path):
        raise TemplateNotFoundError(f"Plantilla PDF no encontrada: {template_path}", path=template_path)

    with open(template_path, "rb") as f:
        data = f.read()

    try:
        reader = PdfReader(io.BytesIO(data))
        if not reader.pages:
            raise TemplateParseError(f"Plantilla PDF sin páginas: {template_path}", path=template_path)
    except TemplateParseError:
        raise
    except Exception as e:
        raise TemplateParseError(f"Plantilla PDF corrupta: {template_path} ({e})",
                                 path=template_path) from e
    return reader


def create_text_overlay(placements, page_width, page_height):
    """
    Create a single-page PDF overlay with every placement drawn on it.
    Placements are drawn in list order; invariant mode keeps the overlay
    free of timestamps and random IDs.
    """
    packet = io.BytesIO()
    c = rl_canvas.Canvas(packet, pagesize=(page_width, page_height), invariant=1)
    c.setFillColorRGB(0, 0, 0)
    for p in placements:
        c.setFont(FONT_NAME, p.font_size)
        c.drawString(p.x, p.y, p.text)
    c.save()
    packet.seek(0)
    return packet


def render_pdf(template_path, placements) -> bytes:
    """Overlay placements on page 1 of the template and return the new PDF bytes."""
    reader = load_template(template_path)

    try:
        writer = PdfWriter()
        writer.append(reader)
        page = writer.pages[0]

        mediabox = page.mediabox
        pw, ph = float(mediabox.width), float(mediabox.height)
        overlay_buf = create_text_overlay(placements, pw, ph)
        overlay_reader = PdfReader(overlay_buf)
        page.merge_page(overlay_reader.pages[0])

        out = io.BytesIO()
        writer.write(out)
    except Exception as e:
        log.error("Render failed for %s: %s", os.path.basename(template_path), e, exc_info=True)
        raise RenderError(f"Error generando PDF: {e}") from e

    result = out.getvalue()
    log.info("Rendered %s (%d fields, %d bytes)",
             os.path.basename(template_path), len(placements), len(result))
    return result
