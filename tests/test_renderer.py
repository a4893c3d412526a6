"""
Tests for the PDF overlay renderer and generate_form().

Output is inspected through the content stream of page 1: every drawString
becomes a Tm (position) followed by a Tj (text).
"""
import hashlib
import io

import pytest
from pypdf import PdfReader

from registro.core.errors import RenderError, TemplateNotFoundError, TemplateParseError
from registro.forms import FORMS, FieldPlacement, build_placements, generate_form, render_pdf
from registro.forms.busqueda import BUSQUEDA
from registro.forms.gravamen import GRAVAMEN

TEMPLATE_TITLE = (72.0, 760.0, "SOLICITUD DE CERTIFICADO DE GRAVAMEN")
USAGE_COORDS = [(220.0, 296.0), (220.0, 260.0), (220.0, 221.0), (220.0, 180.0)]


def _sha(path):
    with open(path, "rb") as f:
        return hashlib.sha256(f.read()).hexdigest()


class TestRenderPdf:

    def test_draws_every_placement(self, templates_dir, extract_text):
        placements = [FieldPlacement(95, 700, "Hola"), FieldPlacement(220, 180, "X")]
        out = render_pdf(str(templates_dir / "2.pdf"), placements)
        drawn = extract_text(out)
        assert (95.0, 700.0, "Hola") in drawn
        assert (220.0, 180.0, "X") in drawn

    def test_template_content_kept(self, templates_dir, extract_text):
        out = render_pdf(str(templates_dir / "2.pdf"), [FieldPlacement(95, 700, "Hola")])
        assert TEMPLATE_TITLE in extract_text(out)

    def test_single_page_output(self, templates_dir):
        out = render_pdf(str(templates_dir / "1.pdf"), [FieldPlacement(10, 10, "a")])
        reader = PdfReader(io.BytesIO(out))
        assert len(reader.pages) == 1
        assert out.startswith(b"%PDF")

    def test_template_never_modified(self, templates_dir):
        path = str(templates_dir / "2.pdf")
        before = _sha(path)
        render_pdf(path, [FieldPlacement(95, 700, "Hola")])
        assert _sha(path) == before

    def test_font_size_respected(self, templates_dir):
        out = render_pdf(str(templates_dir / "2.pdf"), [FieldPlacement(95, 700, "Grande", font_size=18)])
        reader = PdfReader(io.BytesIO(out))
        data = reader.pages[0].get_contents().get_data()
        assert b" 18 Tf" in data

    def test_missing_template(self, tmp_path):
        with pytest.raises(TemplateNotFoundError) as exc:
            render_pdf(str(tmp_path / "no-existe.pdf"), [])
        assert exc.value.status_code == 500
        assert exc.value.path.endswith("no-existe.pdf")

    def test_corrupt_template(self, tmp_path):
        bad = tmp_path / "2.pdf"
        bad.write_bytes(b"esto no es un pdf")
        with pytest.raises(TemplateParseError):
            render_pdf(str(bad), [FieldPlacement(1, 1, "x")])

    def test_draw_failure_is_render_error(self, templates_dir):
        with pytest.raises(RenderError):
            render_pdf(str(templates_dir / "2.pdf"), [FieldPlacement(1, 1, None)])


class TestGenerateForm:

    def test_gravamen_otro_marks_only_otro(self, gravamen_data, fixed_day, extract_text):
        gravamen_data["usoCertificacion"] = "Otro"
        out, filename = generate_form(GRAVAMEN, gravamen_data, today=fixed_day)
        assert filename == "Formulario_Gravamen.pdf"
        marks = [(x, y) for x, y, text in extract_text(out) if text == "X"]
        assert (220.0, 180.0) in marks
        for coords in USAGE_COORDS[:3]:
            assert coords not in marks

    def test_busqueda_presencial(self, busqueda_data, fixed_day, extract_text):
        out, filename = generate_form(BUSQUEDA, busqueda_data, today=fixed_day)
        assert filename == "Formulario_Busqueda.pdf"
        drawn = extract_text(out)
        assert (161.0, 183.0, "X") in drawn
        assert not [d for d in drawn if (d[0], d[1]) == (80.0, 107.0)]

    def test_unicode_round_trip(self, gravamen_data, fixed_day, extract_text):
        out, _ = generate_form(GRAVAMEN, gravamen_data, today=fixed_day)
        drawn = extract_text(out)
        assert (95.0, 700.0, "María José Peña") in drawn
        assert (140.0, 150.0, "Crédito hipotecario") in drawn
        assert (300.0, 670.0, "1712345678") in drawn
        assert (340.0, 210.0, "19 de octubre de 2026") in drawn
        assert TEMPLATE_TITLE in drawn

    def test_same_submission_same_text(self, busqueda_data, fixed_day, extract_text):
        first, _ = generate_form(BUSQUEDA, busqueda_data, today=fixed_day)
        second, _ = generate_form(BUSQUEDA, busqueda_data, today=fixed_day)
        assert extract_text(first) == extract_text(second)

    def test_drawn_text_matches_placements(self, busqueda_data, fixed_day, extract_text):
        out, _ = generate_form(BUSQUEDA, busqueda_data, today=fixed_day)
        expected = [(float(p.x), float(p.y), p.text)
                    for p in build_placements(BUSQUEDA, busqueda_data, today=fixed_day)]
        drawn = [d for d in extract_text(out) if d[2] != "SOLICITUD DE CERTIFICADO DE BUSQUEDA"]
        assert drawn == expected

    def test_validation_runs_before_template_load(self, templates_dir, monkeypatch):
        from registro.core.errors import ValidationError
        monkeypatch.setenv("TEMPLATES_DIR", str(templates_dir / "vacio"))
        with pytest.raises(ValidationError):
            generate_form(GRAVAMEN, {})

    def test_missing_template_file(self, templates_dir, busqueda_data):
        (templates_dir / "1.pdf").unlink()
        with pytest.raises(TemplateNotFoundError):
            generate_form(BUSQUEDA, busqueda_data)

    def test_registry(self):
        assert FORMS["gravamen"].template == "2.pdf"
        assert FORMS["busqueda"].template == "1.pdf"
