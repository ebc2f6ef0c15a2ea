"""Catalog listing endpoint.

GET/HEAD /api/products returns every snapshot entry after the serve-time
modesty pass. Callers must send an ``x-api-key`` header matching the
deployment secret or the dashboard password.
"""

import hmac
import logging
from typing import List, Optional

from flask import Blueprint, Response, current_app, jsonify, request

from .catalog import get_snapshot
from .enrichment import enrich_catalog
from .logging_utils import log_interaction

__all__ = ["api", "accepted_keys", "is_authorized"]

logger = logging.getLogger(__name__)

# Create blueprint for API
api = Blueprint("api", __name__, url_prefix="/api")

API_KEY_HEADER = "x-api-key"


def accepted_keys() -> List[str]:
    """Configured credentials; unset values are never accepted."""
    keys = (current_app.config.get("API_SECRET"), current_app.config.get("DASHBOARD_PASSWORD"))
    return [k for k in keys if k]


def is_authorized(provided: Optional[str]) -> bool:
    if not provided:
        return False
    candidate = provided.encode("utf-8")
    return any(hmac.compare_digest(candidate, key.encode("utf-8")) for key in accepted_keys())


def _unauthorized() -> Response:
    response = jsonify({
        "error": "Unauthorized",
        "message": f"Missing or invalid {API_KEY_HEADER} header",
    })
    response.status_code = 401
    return response


@api.route("/products", methods=["GET"])
def list_products() -> Response:
    """Return the enriched catalog."""
    if not is_authorized(request.headers.get(API_KEY_HEADER)):
        log_interaction(
            "auth_rejected",
            {
                "path": request.path,
                "origin": request.headers.get("Origin"),
                "key_present": API_KEY_HEADER in request.headers,
            },
        )
        logger.warning(f"Rejected catalog request from {request.remote_addr}")
        return _unauthorized()

    return jsonify(enrich_catalog(get_snapshot()))
