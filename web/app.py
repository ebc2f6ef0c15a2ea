"""Flask app serving the wedding-dress catalog.

Serves the builder's snapshot as JSON, proxies product images from blob
storage and hosts the admin/docs pages. Every response carries the CORS
headers computed from the request's Origin.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from flask import Flask, Response, render_template, request

# Load environment variables from .env file before config reads them
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from . import config
from .api import api
from .blob_store import BlobStore, FilesystemBlobStore, HttpBlobStore
from .catalog import SNAPSHOT_EXTENSION
from .cors import cors_headers
from .images import BLOB_STORE_EXTENSION, images

__all__ = ["create_app", "app"]

logger = logging.getLogger(__name__)


def _default_config() -> Dict[str, Any]:
    return {
        "SNAPSHOT_PATH": config.SNAPSHOT_PATH,
        "API_SECRET": config.API_SECRET,
        "DASHBOARD_PASSWORD": config.DASHBOARD_PASSWORD,
        "ALLOWED_ORIGINS": config.ALLOWED_ORIGINS,
        "DEFAULT_ORIGIN": config.DEFAULT_ORIGIN,
        "BLOB_STORE_URL": config.BLOB_STORE_URL,
        "BLOB_STORE_DIR": config.BLOB_STORE_DIR,
        "BLOB_STORE_TIMEOUT": config.BLOB_STORE_TIMEOUT,
        "IMAGE_CACHE_MAX_AGE": config.IMAGE_CACHE_MAX_AGE,
    }


def blob_store_from_config(settings: Dict[str, Any]) -> BlobStore:
    """HTTP bucket endpoint when configured, else the local mirror."""
    if settings.get("BLOB_STORE_URL"):
        return HttpBlobStore(settings["BLOB_STORE_URL"], timeout=settings.get("BLOB_STORE_TIMEOUT"))
    return FilesystemBlobStore(settings["BLOB_STORE_DIR"])


def create_app(
    test_config: Optional[Dict[str, Any]] = None,
    snapshot: Optional[List[Dict[str, Any]]] = None,
    blob_store: Optional[BlobStore] = None,
) -> Flask:
    """Create the API app.

    Args:
        test_config: Overrides for the config values.
        snapshot: Catalog entries to serve; loaded from SNAPSHOT_PATH on
            first request when omitted.
        blob_store: Image backend; built from config when omitted.
    """
    app = Flask(__name__)
    app.config.from_mapping(_default_config())
    if test_config:
        app.config.update(test_config)

    # Keep snapshot key order and Turkish text as written
    app.json.sort_keys = False
    app.json.ensure_ascii = False

    app.extensions[SNAPSHOT_EXTENSION] = snapshot
    app.extensions[BLOB_STORE_EXTENSION] = blob_store or blob_store_from_config(app.config)

    app.register_blueprint(api)
    app.register_blueprint(images)

    # ---------- CORS ----------

    @app.before_request
    def handle_preflight() -> Optional[Response]:
        """Answer any OPTIONS request directly; headers come from add_cors_headers."""
        if request.method == "OPTIONS":
            return Response(status=200)
        return None

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        headers = cors_headers(
            request.headers.get("Origin"),
            app.config["ALLOWED_ORIGINS"],
            app.config["DEFAULT_ORIGIN"],
        )
        response.headers.update(headers)
        return response

    # ---------- PAGES ----------

    @app.route("/", methods=["GET"])
    @app.route("/admin", methods=["GET"])
    def admin() -> str:
        """Render the admin dashboard."""
        return render_template("admin.html")

    @app.route("/docs", methods=["GET"])
    def docs() -> str:
        """Render the API documentation page."""
        return render_template("docs.html")

    # Unknown paths and unsupported methods both fall through to a plain 404
    @app.errorhandler(404)
    @app.errorhandler(405)
    def not_found(error) -> Response:
        return Response("404 Not Found", status=404, mimetype="text/plain")

    return app


app = create_app()


if __name__ == "__main__":
    app.run(host=config.FLASK_HOST, port=config.FLASK_PORT, debug=config.FLASK_DEBUG)
