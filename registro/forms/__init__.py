"""Certificate request forms: field maps, validation and PDF overlay.

Key exports:
    generate_form()      validate a submission and return the filled PDF
    FORMS                form name → FormDefinition (gravamen, busqueda)
    build_placements()   pure submission → draw instructions
    render_pdf()         overlay draw instructions on a template
"""

from .fields import FieldPlacement, FieldSpec, FormDefinition, MarkOptions, build_placements
from .renderer import render_pdf
from .service import FORMS, generate_form
from .validation import missing_fields, validate_submission

__all__ = [
    "FORMS", "FieldPlacement", "FieldSpec", "FormDefinition", "MarkOptions",
    "build_placements", "generate_form", "missing_fields", "render_pdf",
    "validate_submission",
]
