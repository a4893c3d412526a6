"""
Shared pytest fixtures for the Registro form service test suite.

Templates are generated per test with reportlab (blank letter page plus a
title line) so the suite never depends on the production PDFs.
"""
import io
import os
import sys
from datetime import date

import pytest
from pypdf import PdfReader
from pypdf.generic import ContentStream
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas as rl_canvas

_PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

FIXED_DAY = date(2026, 10, 19)
TEMPLATE_TITLES = {
    "1.pdf": "SOLICITUD DE CERTIFICADO DE BUSQUEDA",
    "2.pdf": "SOLICITUD DE CERTIFICADO DE GRAVAMEN",
}
TITLE_POS = (72, 760)


def _make_template(path, title):
    c = rl_canvas.Canvas(str(path), pagesize=letter)
    c.setFont("Helvetica", 10)
    c.drawString(TITLE_POS[0], TITLE_POS[1], title)
    c.showPage()
    c.save()


# ── Environment isolation (per test) ──────────────────────────────────────────

@pytest.fixture(autouse=True)
def templates_dir(tmp_path, monkeypatch):
    """Point TEMPLATES_DIR at freshly generated templates; rate limiting off."""
    tdir = tmp_path / "pdfs"
    tdir.mkdir()
    for fname, title in TEMPLATE_TITLES.items():
        _make_template(tdir / fname, title)

    monkeypatch.setenv("TEMPLATES_DIR", str(tdir))
    monkeypatch.setenv("DISABLE_RATE_LIMIT", "true")
    for var in ("APP_ENV", "NODE_ENV", "API_URL", "REACT_APP_API_URL",
                "ALLOWED_ORIGINS", "RATE_LIMIT_MAX", "RATE_LIMIT_WINDOW",
                "MAX_CONTENT_LENGTH", "LOG_DIR", "PORT"):
        monkeypatch.delenv(var, raising=False)

    from registro.core import security
    security._limiter.reset()
    return tdir


# ── Flask test client ─────────────────────────────────────────────────────────

@pytest.fixture
def app(templates_dir):
    """Create Flask app configured for testing."""
    from app import create_app
    _app = create_app(run_checks=False)
    _app.config["TESTING"] = True
    return _app


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


# ── PDF inspection ────────────────────────────────────────────────────────────

def drawn_text(pdf_bytes):
    """[(x, y, text)] for every Tj on page 1, positioned by the preceding Tm."""
    reader = PdfReader(io.BytesIO(pdf_bytes))
    page = reader.pages[0]
    content = ContentStream(page.get_contents(), reader)
    drawn = []
    pos = None
    for operands, operator in content.operations:
        if operator == b"Tm":
            pos = (float(operands[4]), float(operands[5]))
        elif operator == b"Tj" and pos is not None:
            text = operands[0]
            if isinstance(text, bytes):
                text = text.decode("cp1252")
            drawn.append((pos[0], pos[1], str(text)))
    return drawn


@pytest.fixture
def extract_text():
    return drawn_text


# ── Sample data factories ─────────────────────────────────────────────────────

@pytest.fixture
def fixed_day():
    return FIXED_DAY


@pytest.fixture
def gravamen_data():
    """Complete Gravamen submission, in-person reception."""
    return {
        "nombre": "María José Peña",
        "cedulaFacturacion": "1712345678",
        "direccion": "Av. 29 de Mayo y Calle Quito",
        "correo": "maria.pena@example.com",
        "telefono": "0991234567",
        "apellidos": "Peña Andrade",
        "cedulaCertificacion": "1712345678",
        "estadoCivil": "Casada",
        "lugarInmueble": "Barrio Central, Lote 14",
        "libro": "Propiedades",
        "numeroInscripcion": "245",
        "fechaInscripcion": "12/03/2015",
        "tomo": "3",
        "repertorio": "1180",
        "fichaRegistral": "5521",
        "usoCertificacion": "Instituciones Bancarias",
        "especifiqueUso": "Crédito hipotecario",
        "recepcionDocumento": "Presencial",
        "cedulaSolicitante": "1712345678",
    }


@pytest.fixture
def busqueda_data():
    """Complete Búsqueda submission, in-person reception."""
    return {
        "nombre": "Luis Ángel Cevallos",
        "cedulaFacturacion": "1709876543",
        "direccion": "Calle Quito y Pichincha",
        "correo": "luis.cevallos@example.com",
        "telefono": "0987654321",
        "nombresCompletos": "Luis Ángel Cevallos Ortiz",
        "cedula": "1709876543",
        "estadoCivil": "Soltero",
        "nombresSolicitante": "Luis Ángel Cevallos Ortiz",
        "cedulaSolicitante": "1709876543",
        "estadoCivilSolicitante": "Soltero",
        "declaracionUso": "Trámite de herencia",
        "recepcionDocumento": "Presencial",
    }
