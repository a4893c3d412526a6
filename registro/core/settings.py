"""
settings.py — Centralized runtime configuration for the form service

Single source of truth for every environment variable the service reads.
Values come from the process environment; app.py loads a .env file first
(python-dotenv) so local development can keep them in one place.

Env vars:
  PORT                 HTTP port for the dev server (gunicorn binds its own)
  APP_ENV              "production" | "development"
  API_URL              Public URL of the frontend/API, added to CORS + CSP
  ALLOWED_ORIGINS      Comma-separated CORS origins
  TEMPLATES_DIR        Directory holding 1.pdf (Búsqueda) and 2.pdf (Gravamen)
  LOG_LEVEL            DEBUG | INFO | WARNING | ERROR
  LOG_JSON             "true" to emit JSON log lines on the console
  LOG_DIR              Directory for the rotating JSON log file (optional)
  RATE_LIMIT_MAX       Requests per window per client IP
  RATE_LIMIT_WINDOW    Window length in seconds
  DISABLE_RATE_LIMIT   "true" to turn the limiter off (tests, local dev)
  MAX_CONTENT_LENGTH   Request body limit in bytes

Values are never logged in full; settings_report() masks them.
"""

import os
import logging

log = logging.getLogger("registro.settings")

DEFAULT_ORIGINS = (
    "https://www.regpropiedadpvm.gob.ec",
    "https://regpropiedadpvm.gob.ec",
)
DEV_ORIGIN = "http://localhost:3000"

# ─── Setting Definitions ────────────────────────────────────────────────────

_REGISTRY = {
    "port": {
        "env": "PORT",
        "desc": "HTTP port for the development server",
        "default": "10000",
        "used_by": ["app"],
    },
    "app_env": {
        "env": "APP_ENV",
        "fallback": "NODE_ENV",
        "desc": "Deployment environment (production/development)",
        "default": "production",
        "used_by": ["app", "errors", "security"],
    },
    "api_url": {
        "env": "API_URL",
        "fallback": "REACT_APP_API_URL",
        "desc": "Public API/frontend URL allowed by CORS and CSP",
        "used_by": ["security"],
    },
    "allowed_origins": {
        "env": "ALLOWED_ORIGINS",
        "desc": "Comma-separated list of CORS origins",
        "default": ",".join(DEFAULT_ORIGINS),
        "used_by": ["security"],
    },
    "templates_dir": {
        "env": "TEMPLATES_DIR",
        "desc": "Directory containing the PDF form templates",
        "used_by": ["paths", "renderer"],
    },
    "log_level": {
        "env": "LOG_LEVEL",
        "desc": "Root log level",
        "default": "INFO",
        "used_by": ["logging"],
    },
    "log_json": {
        "env": "LOG_JSON",
        "desc": "Emit JSON log lines on the console",
        "default": "false",
        "used_by": ["logging"],
    },
    "log_dir": {
        "env": "LOG_DIR",
        "desc": "Directory for the rotating JSON log file",
        "used_by": ["logging"],
    },
    "rate_limit_max": {
        "env": "RATE_LIMIT_MAX",
        "desc": "Requests allowed per window per client IP",
        "default": "100",
        "used_by": ["security"],
    },
    "rate_limit_window": {
        "env": "RATE_LIMIT_WINDOW",
        "desc": "Rate limit window in seconds",
        "default": "900",
        "used_by": ["security"],
    },
    "disable_rate_limit": {
        "env": "DISABLE_RATE_LIMIT",
        "desc": "Turn the rate limiter off",
        "default": "false",
        "used_by": ["security"],
    },
    "max_content_length": {
        "env": "MAX_CONTENT_LENGTH",
        "desc": "Maximum request body size in bytes",
        "default": str(5 * 1024 * 1024),
        "used_by": ["app"],
    },
}


# ─── Public API ──────────────────────────────────────────────────────────────

def get_setting(name: str) -> str:
    """Get a setting by registry name. Returns empty string if not set."""
    entry = _REGISTRY.get(name)
    if not entry:
        log.warning("Unknown setting requested: %s", name)
        return ""

    val = os.environ.get(entry["env"], "")
    if not val and "fallback" in entry:
        val = os.environ.get(entry["fallback"], "")
    if not val and "default" in entry:
        val = entry["default"]
    return val.strip()


def get_int(name: str) -> int:
    """Integer setting; falls back to the registry default on garbage input."""
    raw = get_setting(name)
    try:
        return int(raw)
    except ValueError:
        default = _REGISTRY.get(name, {}).get("default", "0")
        log.warning("Invalid integer for %s: %r, using %s", name, raw, default)
        return int(default)


def get_bool(name: str) -> bool:
    return get_setting(name).lower() in ("1", "true", "yes", "on")


def app_env() -> str:
    return get_setting("app_env").lower()


def is_development() -> bool:
    return app_env() == "development"


def allowed_origins() -> list:
    """CORS origins: configured list + API_URL, plus localhost:3000 in development."""
    origins = [o.strip() for o in get_setting("allowed_origins").split(",") if o.strip()]
    api_url = get_setting("api_url")
    if api_url and api_url not in origins:
        origins.append(api_url)
    if is_development() and DEV_ORIGIN not in origins:
        origins.append(DEV_ORIGIN)
    return origins


def mask(value: str) -> str:
    """Mask a value for safe logging. Shows first 8 chars."""
    if not value:
        return "(not set)"
    if len(value) <= 12:
        return value[:4] + "****"
    return value[:8] + "****" + f"({len(value)} chars)"


def settings_report() -> dict:
    """Which settings are set (explicitly or by default), never their full values."""
    results = {}
    for name, entry in _REGISTRY.items():
        explicit = bool(os.environ.get(entry["env"]) or
                        ("fallback" in entry and os.environ.get(entry["fallback"])))
        val = get_setting(name)
        results[name] = {
            "env": entry["env"],
            "desc": entry["desc"],
            "set": bool(val),
            "explicit": explicit,
            "masked": mask(val),
            "used_by": entry["used_by"],
        }
        if "fallback" in entry:
            results[name]["fallback"] = entry["fallback"]

    return {
        "settings": results,
        "total": len(results),
        "explicit": sum(1 for r in results.values() if r["explicit"]),
        "environment": app_env(),
    }


def startup_check() -> dict:
    """Run on startup. Logs the configuration summary."""
    report = settings_report()
    log.info("Settings: %d/%d set explicitly (env=%s)",
             report["explicit"], report["total"], report["environment"])
    if report["environment"] not in ("production", "development"):
        log.warning("APP_ENV=%s is not a known environment", report["environment"])
    return report
