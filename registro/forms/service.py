"""
High-level form generation used by the HTTP layer.

validate → build placements → render, one fresh template copy per call.
Nothing is cached or shared between requests.
"""

import logging
import time
from datetime import date
from typing import Mapping, Optional, Tuple

from ..core.paths import template_path
from .busqueda import BUSQUEDA
from .fields import FormDefinition, build_placements
from .gravamen import GRAVAMEN
from .renderer import render_pdf
from .validation import validate_submission

log = logging.getLogger("registro.forms")

FORMS = {
    GRAVAMEN.name: GRAVAMEN,
    BUSQUEDA.name: BUSQUEDA,
}


def generate_form(definition: FormDefinition, submission: Mapping,
                  today: Optional[date] = None) -> Tuple[bytes, str]:
    """Fill definition's template with submission.

    Returns (pdf_bytes, download_filename). Raises ValidationError before any
    file is touched, TemplateError/RenderError from the rendering step.
    """
    t0 = time.time()
    data = validate_submission(definition, submission)
    placements = build_placements(definition, data, today=today)
    pdf_bytes = render_pdf(template_path(definition.template), placements)
    log.info("Generated %s (%d placements) in %.0fms",
             definition.filename, len(placements), (time.time() - t0) * 1000)
    return pdf_bytes, definition.filename
