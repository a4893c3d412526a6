"""
registro/core/paths.py — Centralized Path Configuration

Single source of truth for where the PDF templates live. Every module asks
here instead of computing its own directory.

TEMPLATES_DIR env overrides the default <project root>/pdfs. The directory is
resolved on every call so a running process (or a test) picks up changes.
"""

import os
import logging

from .settings import get_setting

log = logging.getLogger("registro.paths")

# ── Project Root ──────────────────────────────────────────────────────────────
_THIS_FILE = os.path.abspath(__file__)
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(_THIS_FILE)))

DEFAULT_TEMPLATES_DIR = os.path.join(PROJECT_ROOT, "pdfs")

# ── Template files (read-only, never written by the service) ─────────────────
BUSQUEDA_TEMPLATE = "1.pdf"
GRAVAMEN_TEMPLATE = "2.pdf"
TEMPLATE_FILES = (BUSQUEDA_TEMPLATE, GRAVAMEN_TEMPLATE)


def templates_dir() -> str:
    return get_setting("templates_dir") or DEFAULT_TEMPLATES_DIR


def template_path(filename: str) -> str:
    return os.path.join(templates_dir(), filename)


def validate_paths() -> dict:
    """Runtime validation, called at app startup to catch path issues early.

    Returns:
        {"ok": bool, "errors": [str], "warnings": [str], "resolved": {name: path}}
    """
    result = {"ok": True, "errors": [], "warnings": [], "resolved": {}}

    tdir = templates_dir()
    result["resolved"]["TEMPLATES_DIR"] = tdir
    if not os.path.isdir(tdir):
        result["errors"].append(f"TEMPLATES_DIR not found: {tdir}")
        result["ok"] = False
        return result

    for fname in TEMPLATE_FILES:
        path = os.path.join(tdir, fname)
        result["resolved"][fname] = path
        if not os.path.isfile(path):
            result["errors"].append(f"Template not found: {path}")
            result["ok"] = False
        elif not os.access(path, os.R_OK):
            result["errors"].append(f"Template not readable: {path}")
            result["ok"] = False
        elif os.path.getsize(path) == 0:
            result["warnings"].append(f"Template is empty: {path}")

    return result
