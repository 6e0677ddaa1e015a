"""CORS header helpers shared by the router and the error handler."""

from __future__ import annotations

ALLOWED_METHODS = "POST, OPTIONS"
ALLOWED_HEADERS = "authorization, x-client-info, apikey, content-type"


def cors_headers() -> dict[str, str]:
    """Headers attached to every JSON response."""
    return {"Access-Control-Allow-Origin": "*"}


def preflight_headers() -> dict[str, str]:
    """Headers answering a CORS preflight request."""
    return {
        **cors_headers(),
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }
