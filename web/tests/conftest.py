"""Shared test fixtures for the web test suite."""

import copy
import json

import pytest

from web import logging_utils
from web.app import create_app
from web.blob_store import FilesystemBlobStore

API_SECRET = "deploy-secret"
DASHBOARD_PASSWORD = "panel-pass"

COVER_BYTES = b"\x00\x00\x00\x1cftypavif-cover"


def _entry(slug, name, is_modest=False, category="gelinlik", tags=None):
    image = f"https://api.test/images/{slug}%2Fcover.avif"
    return {
        "id": slug,
        "name": name,
        "category": category,
        "image": image,
        "description": "",
        "price": "Iletisim",
        "slug": slug,
        "gallery": [],
        "isModest": is_modest,
        "images": [{"src": image}],
        "mappedAttributes": {
            "Etek Kesimi": "Prenses",
            "Tesettür Uyumu": "Evet" if is_modest is True else "Hayır",
        },
        "tags": tags or [],
    }


@pytest.fixture
def snapshot():
    """Snapshot entries covering the modesty cases."""
    return [
        _entry("prenses-dantel", "Prenses Dantel Gelinlik"),
        _entry("zarif-model", "Zarif Hijab Gelinlik"),
        _entry("kapali-model", "Kapalı Model", is_modest=True),
        _entry("string-flag", "Helen Model", is_modest="true"),
    ]


@pytest.fixture
def blob_root(tmp_path):
    """Local blob mirror with one stored cover."""
    root = tmp_path / "assets"
    (root / "prenses-dantel").mkdir(parents=True)
    (root / "prenses-dantel" / "cover.avif").write_bytes(COVER_BYTES)
    (tmp_path / "secret.txt").write_text("outside the store")
    return root


@pytest.fixture(autouse=True)
def log_dir(tmp_path, monkeypatch):
    """Keep JSONL event logs inside the test's temp dir."""
    path = tmp_path / "logs"
    monkeypatch.setattr(logging_utils, "LOG_DIR", path)
    return path


@pytest.fixture
def app(snapshot, blob_root):
    """App configured with known credentials, snapshot and blob store."""
    app = create_app(
        test_config={
            "TESTING": True,
            "API_SECRET": API_SECRET,
            "DASHBOARD_PASSWORD": DASHBOARD_PASSWORD,
            "ALLOWED_ORIGINS": ("https://minalidya.wedding", "https://www.minalidya.wedding"),
            "DEFAULT_ORIGIN": "https://minalidya.wedding",
            "IMAGE_CACHE_MAX_AGE": 3600,
        },
        snapshot=snapshot,
        blob_store=FilesystemBlobStore(blob_root),
    )
    return app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def snapshot_file(tmp_path, snapshot):
    """The snapshot written to disk, as the builder would."""
    path = tmp_path / "products.json"
    path.write_text(json.dumps(snapshot, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def snapshot_copy(snapshot):
    return copy.deepcopy(snapshot)
