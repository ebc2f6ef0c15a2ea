"""Image proxy: streams objects from blob storage by storage key."""

import logging

from flask import Blueprint, Response, current_app, request

from .logging_utils import log_interaction

__all__ = ["images", "BLOB_STORE_EXTENSION"]

logger = logging.getLogger(__name__)

images = Blueprint("images", __name__, url_prefix="/images")

BLOB_STORE_EXTENSION = "blob_store"


@images.route("/<path:key>", methods=["GET"])
def get_image(key: str) -> Response:
    """Stream one image with caching headers, or 404 if it is not stored."""
    store = current_app.extensions[BLOB_STORE_EXTENSION]
    blob = store.get(key)
    if blob is None:
        log_interaction("image_not_found", {"key": key})
        return Response("Image not found", status=404, mimetype="text/plain")

    if blob.etag and request.if_none_match.contains_weak(blob.etag):
        blob.close()
        response = Response(status=304)
    else:
        response = Response(blob.body, content_type=blob.content_type)
        if blob.size is not None:
            response.headers["Content-Length"] = str(blob.size)
        response.call_on_close(blob.close)

    max_age = current_app.config["IMAGE_CACHE_MAX_AGE"]
    response.headers["Cache-Control"] = f"public, max-age={max_age}"
    if blob.etag:
        response.set_etag(blob.etag, weak=blob.etag_weak)
    return response
