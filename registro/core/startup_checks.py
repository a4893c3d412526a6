"""
registro/core/startup_checks.py — Runtime Self-Test on App Boot

Runs automatically when the app starts. Catches misconfiguration before the
first citizen submits a form:

  1. Templates: TEMPLATES_DIR exists and holds readable 1.pdf / 2.pdf
  2. Templates parse: each template opens and has a first page
  3. Settings: configuration summary, unknown APP_ENV
  4. Route integrity: every public endpoint is registered

Failures are logged, never fatal: a missing template only breaks its own
endpoint, which answers 500 until the file is restored.
"""

import logging

log = logging.getLogger("registro.startup")

EXPECTED_ROUTES = ("/generar-pdf", "/generar-pdf-busqueda", "/health")


def run_startup_checks(app=None) -> dict:
    """Run all startup validation checks. Call from app.py after blueprint registration.

    Returns:
        {"passed": int, "failed": int, "warnings": int, "details": [...]}
    """
    results = {"passed": 0, "failed": 0, "warnings": 0, "details": []}

    def _pass(msg):
        results["passed"] += 1
        results["details"].append(("PASS", msg))
        log.info("PASS %s", msg)

    def _fail(msg):
        results["failed"] += 1
        results["details"].append(("FAIL", msg))
        log.error("STARTUP CHECK FAILED: %s", msg)

    def _warn(msg):
        results["warnings"] += 1
        results["details"].append(("WARN", msg))
        log.warning("WARN %s", msg)

    # ── 1. Template paths ─────────────────────────────────────────────────────
    from .paths import TEMPLATE_FILES, template_path, templates_dir, validate_paths
    path_result = validate_paths()
    if path_result["ok"]:
        _pass(f"Templates present (TEMPLATES_DIR={templates_dir()})")
    else:
        for err in path_result["errors"]:
            _fail(err)
    for warn in path_result.get("warnings", []):
        _warn(warn)

    # ── 2. Templates parse ────────────────────────────────────────────────────
    if path_result["ok"]:
        from .errors import TemplateError
        from ..forms.renderer import load_template
        for fname in TEMPLATE_FILES:
            try:
                load_template(template_path(fname))
                _pass(f"Template parses: {fname}")
            except TemplateError as e:
                _fail(e.message)

    # ── 3. Settings ───────────────────────────────────────────────────────────
    from .settings import startup_check
    report = startup_check()
    if report["environment"] in ("production", "development"):
        _pass(f"Environment: {report['environment']}")
    else:
        _warn(f"Unknown APP_ENV: {report['environment']}")

    # ── 4. Route integrity ────────────────────────────────────────────────────
    if app is not None:
        registered = {rule.rule for rule in app.url_map.iter_rules()}
        missing = [r for r in EXPECTED_ROUTES if r not in registered]
        if missing:
            _fail(f"Routes not registered: {', '.join(missing)}")
        else:
            _pass(f"All {len(EXPECTED_ROUTES)} routes registered")

    log.info("Startup checks: %d passed, %d failed, %d warnings",
             results["passed"], results["failed"], results["warnings"])
    return results
