"""Centralized configuration for the catalog API."""

import os
from pathlib import Path

# Determine project root (parent of 'web' directory)
_THIS_DIR = Path(__file__).parent
_PROJECT_ROOT = _THIS_DIR.parent

# Catalog snapshot produced by the builder, shipped with the deployment
SNAPSHOT_PATH = os.getenv("SNAPSHOT_PATH", str(_PROJECT_ROOT / "data" / "products.json"))

# Accepted x-api-key values: the deployment secret or the dashboard password
API_SECRET = os.getenv("API_SECRET", "")
DASHBOARD_PASSWORD = os.getenv("DASHBOARD_PASSWORD", "minalidya-panel")

# CORS: known storefront origins; anything else gets DEFAULT_ORIGIN
ALLOWED_ORIGINS = tuple(
    origin.strip()
    for origin in os.getenv(
        "ALLOWED_ORIGINS",
        "https://minalidya.wedding,"
        "https://www.minalidya.wedding,"
        "https://admin.minalidya.wedding,"
        "https://minalidya.pages.dev",
    ).split(",")
    if origin.strip()
)
DEFAULT_ORIGIN = os.getenv("DEFAULT_ORIGIN", "https://minalidya.wedding")

# Blob storage: a public bucket endpoint if set, else a local mirror by key
BLOB_STORE_URL = os.getenv("BLOB_STORE_URL", "")
BLOB_STORE_DIR = os.getenv("BLOB_STORE_DIR", str(_PROJECT_ROOT / "data" / "assets"))
BLOB_STORE_TIMEOUT = int(os.getenv("BLOB_STORE_TIMEOUT", "15"))

# Image responses are cacheable by browsers and CDNs
IMAGE_CACHE_MAX_AGE = int(os.getenv("IMAGE_CACHE_MAX_AGE", "86400"))

# Flask app settings (allow env overrides; default debug off for safety)
FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
FLASK_PORT = int(os.getenv("FLASK_PORT", os.getenv("PORT", "8787")))
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "False").lower() == "true"
