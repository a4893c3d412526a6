"""
Required-field validation, run before any PDF work.

Policy (same on both endpoints): every name in FormDefinition.required must be
present and non-blank, and correoRecepcion is required as well when
recepcionDocumento is "Electrónico".
"""

import logging
from typing import Iterable, List, Mapping

from ..core.errors import ValidationError
from .fields import FormDefinition, is_blank

log = logging.getLogger("registro.validation")


def missing_fields(submission: Mapping, required: Iterable[str]) -> List[str]:
    """Required names that are absent, falsy or blank, in declaration order."""
    return [name for name in required if is_blank(submission, name)]


def validate_submission(definition: FormDefinition, submission) -> dict:
    """Return the submission if complete, raise ValidationError otherwise."""
    if not isinstance(submission, Mapping):
        raise ValidationError("El cuerpo de la solicitud debe ser un objeto JSON")

    required = list(definition.required)
    for name in definition.conditional_required(submission):
        if name not in required:
            required.append(name)

    missing = missing_fields(submission, required)
    if missing:
        log.info("Rejected %s submission: missing %s", definition.name, ", ".join(missing))
        raise ValidationError(missing_fields=missing)

    ignored = sorted(set(submission) - set(required) - set(definition.optional))
    if ignored:
        log.debug("Ignoring unknown %s fields: %s", definition.name, ", ".join(ignored))
    return dict(submission)
