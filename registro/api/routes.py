"""
routes.py — HTTP endpoints for the certificate request forms

    POST /generar-pdf            Gravamen  → Formulario_Gravamen.pdf
    POST /generar-pdf-busqueda   Búsqueda  → Formulario_Busqueda.pdf
    GET  /health                 status, no business logic

Errors raised by registro.forms are translated here into JSON payloads;
nothing propagates past the request boundary.
"""

import logging
import time as _time
from datetime import datetime, timezone

from flask import Blueprint, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from .. import __version__
from ..core.errors import FormServiceError, ValidationError
from ..core.security import rate_limit
from ..core.settings import app_env, is_development
from ..forms import FORMS, generate_form

log = logging.getLogger("registro.api")

bp = Blueprint("formularios", __name__)

GENERIC_ERROR = "Error interno del servidor"


# ── Request-level structured logging ────────────────────────────────────────
@bp.before_app_request
def _log_request_start():
    request._start_time = _time.time()


@bp.after_app_request
def _log_request_end(response):
    if hasattr(request, "_start_time"):
        duration_ms = round((_time.time() - request._start_time) * 1000, 1)
        # Skip health-check spam
        if request.path != "/health":
            log.info("%s %s → %d (%.0fms)",
                     request.method, request.path, response.status_code, duration_ms,
                     extra={"route": request.path, "method": request.method,
                            "status": response.status_code, "duration_ms": duration_ms})
    return response


# ═══════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════

def _submission():
    """JSON object body, or the form fields of a urlencoded POST."""
    data = request.get_json(silent=True)
    if data is None and request.form:
        data = request.form.to_dict()
    if not isinstance(data, dict):
        raise ValidationError("El cuerpo de la solicitud debe ser un objeto JSON")
    return data


def _pdf_response(pdf_bytes, filename):
    headers = {"Content-Disposition": f"attachment; filename={filename}"}
    return Response(pdf_bytes, mimetype="application/pdf", headers=headers)


def _generate(form_name):
    pdf_bytes, filename = generate_form(FORMS[form_name], _submission())
    return _pdf_response(pdf_bytes, filename)


# ═══════════════════════════════════════════════════════════════════════
# Routes
# ═══════════════════════════════════════════════════════════════════════

@bp.route("/generar-pdf", methods=["POST"])
@rate_limit()
def generar_gravamen():
    """Gravamen certificate request."""
    return _generate("gravamen")


@bp.route("/generar-pdf-busqueda", methods=["POST"])
@rate_limit()
def generar_busqueda():
    """Búsqueda certificate request."""
    return _generate("busqueda")


@bp.route("/health")
@rate_limit()
def health():
    return jsonify({
        "status": "OK",
        "apiVersion": __version__,
        "environment": app_env(),
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "endpoints": {
            "generarGravamen": "/generar-pdf",
            "generarBusqueda": "/generar-pdf-busqueda",
        },
    })


# ═══════════════════════════════════════════════════════════════════════
# Error translation
# ═══════════════════════════════════════════════════════════════════════

@bp.app_errorhandler(FormServiceError)
def handle_form_error(e):
    if e.status_code >= 500:
        log.error("%s %s failed: %s: %s", request.method, request.path,
                  type(e).__name__, e.message)
    payload = e.to_payload(include_detail=is_development())
    return jsonify(payload), e.status_code


@bp.app_errorhandler(HTTPException)
def handle_http_error(e):
    # 404/405/413 and friends keep their status but answer in JSON
    return jsonify({"success": False, "message": e.description or e.name}), e.code


@bp.app_errorhandler(Exception)
def handle_unexpected(e):
    log.exception("Unhandled error on %s %s", request.method, request.path)
    payload = {"success": False, "message": GENERIC_ERROR}
    if is_development():
        payload["error"] = str(e)
    return jsonify(payload), 500
