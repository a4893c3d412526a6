"""
Security Middleware — CORS + Rate Limiting + Security Headers
=============================================================
Production hardening for a public form endpoint.

CORS:
- Only the Registro's own origins (plus API_URL, plus localhost:3000 in
  development) may call the API from a browser
- GET/POST only, Content-Type/Authorization headers, credentials allowed

Rate Limiting:
- In-memory token bucket per client IP
- RATE_LIMIT_MAX requests per RATE_LIMIT_WINDOW seconds (100 per 15 min)
- 429 JSON response when exceeded

Security Headers:
- Content-Security-Policy, Cross-Origin-Resource-Policy and the usual
  nosniff / frame / referrer headers on every response
"""

import time
import logging
import functools
from threading import Lock

from flask import request, jsonify, make_response
from flask_cors import CORS

from .settings import allowed_origins, get_bool, get_int, get_setting

log = logging.getLogger("registro.security")

RATE_LIMIT_MESSAGE = "Demasiadas solicitudes desde esta IP"
CLEANUP_INTERVAL = 60  # seconds between stale-bucket sweeps

# ═══════════════════════════════════════════════════════════════════════════════
# Rate Limiting
# ═══════════════════════════════════════════════════════════════════════════════

class RateLimiter:
    """Simple in-memory rate limiter using token bucket algorithm."""

    def __init__(self):
        self._buckets = {}
        self._lock = Lock()
        self._last_cleanup = time.time()

    def check(self, key: str, max_tokens: int = 100, refill_rate: float = 100 / 900) -> bool:
        """Check if request is allowed. Returns True if allowed, False if rate limited.

        Args:
            key: Unique key for the bucket (usually IP + scope)
            max_tokens: Maximum burst capacity
            refill_rate: Tokens added per second
        """
        with self._lock:
            now = time.time()
            bucket = self._buckets.get(key)
            if bucket is None:
                bucket = {"tokens": float(max_tokens), "last_refill": now}
                self._buckets[key] = bucket

            # Refill tokens
            elapsed = now - bucket["last_refill"]
            bucket["tokens"] = min(max_tokens, bucket["tokens"] + elapsed * refill_rate)
            bucket["last_refill"] = now

            if bucket["tokens"] >= 1:
                bucket["tokens"] -= 1
                return True
            return False

    def remaining(self, key: str) -> int:
        with self._lock:
            bucket = self._buckets.get(key)
            return int(bucket["tokens"]) if bucket else 0

    def reset(self):
        with self._lock:
            self._buckets.clear()
            self._last_cleanup = time.time()

    def cleanup(self, max_age: int = 3600) -> int:
        """Remove stale buckets older than max_age seconds. Returns how many went."""
        now = time.time()
        with self._lock:
            stale = [k for k, v in self._buckets.items() if now - v["last_refill"] > max_age]
            for k in stale:
                del self._buckets[k]
            self._last_cleanup = now
        if stale:
            log.debug("Rate limiter: dropped %d stale buckets", len(stale))
        return len(stale)

    def cleanup_if_due(self, max_age: int, interval: float = CLEANUP_INTERVAL) -> bool:
        """Run cleanup() when at least interval seconds passed since the last one."""
        with self._lock:
            if time.time() - self._last_cleanup < interval:
                return False
        self.cleanup(max_age)
        return True


# Global rate limiter instance
_limiter = RateLimiter()


def current_limits() -> dict:
    """Bucket parameters from settings: burst = max, refill = max / window."""
    max_tokens = max(1, get_int("rate_limit_max"))
    window = max(1, get_int("rate_limit_window"))
    return {"max_tokens": max_tokens, "refill_rate": max_tokens / window}


def rate_limit(scope: str = "api"):
    """Decorator to apply rate limiting to a route."""
    def decorator(f):
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            if get_bool("disable_rate_limit"):
                return f(*args, **kwargs)

            ip = request.remote_addr or "unknown"
            key = f"{ip}:{scope}"
            limits = current_limits()
            # A bucket idle for a whole window is full again
            _limiter.cleanup_if_due(max_age=max(1, get_int("rate_limit_window")))

            if not _limiter.check(key, **limits):
                log.warning("Rate limit exceeded: %s scope=%s", ip, scope)
                response = jsonify({"success": False, "message": RATE_LIMIT_MESSAGE})
                response.status_code = 429
                response.headers["Retry-After"] = str(int(1 / limits["refill_rate"]) + 1)
                _set_rate_headers(response, key, limits)
                return response

            response = make_response(f(*args, **kwargs))
            _set_rate_headers(response, key, limits)
            return response
        return wrapper
    return decorator


def _set_rate_headers(response, key, limits):
    response.headers["RateLimit-Limit"] = str(limits["max_tokens"])
    response.headers["RateLimit-Remaining"] = str(_limiter.remaining(key))


# ═══════════════════════════════════════════════════════════════════════════════
# Security Headers Middleware
# ═══════════════════════════════════════════════════════════════════════════════

def content_security_policy() -> str:
    connect_src = ["'self'"]
    api_url = get_setting("api_url")
    if api_url:
        connect_src.append(api_url)
    directives = [
        "default-src 'self'",
        "script-src 'self' 'unsafe-inline'",
        "style-src 'self' 'unsafe-inline'",
        "img-src 'self' data:",
        "connect-src " + " ".join(connect_src),
    ]
    return "; ".join(directives)


def add_security_headers(response):
    """Add security headers to every response."""
    response.headers["Content-Security-Policy"] = content_security_policy()
    response.headers["Cross-Origin-Resource-Policy"] = "same-site"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "SAMEORIGIN"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    if not response.headers.get("Cache-Control"):
        response.headers["Cache-Control"] = "no-store"
    return response


def init_security(app):
    """Initialize security middleware on the Flask app."""
    origins = allowed_origins()
    CORS(app,
         origins=origins,
         methods=["GET", "POST"],
         allow_headers=["Content-Type", "Authorization"],
         supports_credentials=True)
    app.after_request(add_security_headers)
    log.info("Security middleware initialized: CORS (%d origins), rate limiting, security headers",
             len(origins))
