#!/usr/bin/env python3
"""
Registro de la Propiedad — Application Entry Point
Creates the Flask app and registers the form routes Blueprint.
"""

from dotenv import load_dotenv

load_dotenv()

import logging  # noqa: E402

from flask import Flask  # noqa: E402

from logging_config import setup_logging  # noqa: E402
from registro.core.settings import allowed_origins, app_env, get_int, get_setting  # noqa: E402

log = logging.getLogger("registro")


def create_app(run_checks=True):
    """Application factory."""
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = get_int("max_content_length")
    app.json.ensure_ascii = False

    # Register the form blueprint (all routes + error handlers)
    from registro.api.routes import bp
    app.register_blueprint(bp)

    # ── Security middleware (CORS, rate limiting, headers) ──────────
    from registro.core.security import init_security
    init_security(app)

    # ── Runtime self-test: missing templates surface at boot ──────────
    if run_checks:
        from registro.core.startup_checks import run_startup_checks
        checks = run_startup_checks(app)
        if checks["failed"] > 0:
            log.error("STARTUP: %d checks FAILED, review logs", checks["failed"])

    log.info("Entorno: %s", app_env())
    log.info("Orígenes permitidos: %s", ", ".join(allowed_origins()))
    api_url = get_setting("api_url")
    if api_url:
        log.info("Endpoint API: %s", api_url)
    return app


setup_logging()

# For gunicorn: gunicorn app:app
app = create_app()

if __name__ == "__main__":
    port = get_int("port")
    log.info("Servidor escuchando en puerto %d", port)
    app.run(host="0.0.0.0", port=port, debug=False)
