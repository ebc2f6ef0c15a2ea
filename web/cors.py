"""CORS policy for the catalog API."""

import re
from typing import Dict, Iterable, Optional

__all__ = ["LOCALHOST_ORIGIN", "ALLOW_METHODS", "ALLOW_HEADERS", "resolve_allowed_origin", "cors_headers"]

LOCALHOST_ORIGIN = re.compile(r"^https?://localhost(:\d+)?$")

ALLOW_METHODS = "GET, HEAD, OPTIONS"
ALLOW_HEADERS = "Content-Type, x-api-key"


def resolve_allowed_origin(
    origin: Optional[str],
    allowed_origins: Iterable[str],
    default_origin: str,
) -> str:
    """Reflect a known origin (or localhost on any port), else the default."""
    if origin:
        if origin in set(allowed_origins):
            return origin
        if LOCALHOST_ORIGIN.fullmatch(origin):
            return origin
    return default_origin


def cors_headers(
    origin: Optional[str],
    allowed_origins: Iterable[str],
    default_origin: str,
) -> Dict[str, str]:
    """Headers attached to every response."""
    return {
        "Access-Control-Allow-Origin": resolve_allowed_origin(origin, allowed_origins, default_origin),
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
        "Vary": "Origin",
    }
