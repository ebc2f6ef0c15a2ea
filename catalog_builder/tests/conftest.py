"""Shared fixtures for the builder test suite."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import pytest

from catalog_builder.config import BuildSettings


@pytest.fixture
def content_dir(tmp_path):
    """Empty content directory."""
    root = tmp_path / "products"
    root.mkdir()
    return root


@pytest.fixture
def make_product(content_dir):
    """Create a product folder with an index.json and image files.

    ``data=None`` writes no metadata file; a string is written verbatim
    (for malformed JSON cases).
    """

    def _make(
        slug: str,
        data: Optional[Any] = None,
        files: Iterable[str] = (),
    ) -> Path:
        product_dir = content_dir / slug
        product_dir.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            (product_dir / "index.json").write_text(data, encoding="utf-8")
        elif data is not None:
            (product_dir / "index.json").write_text(
                json.dumps(data, ensure_ascii=False), encoding="utf-8"
            )
        for name in files:
            path = product_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(f"image:{slug}/{name}".encode("utf-8"))
        return product_dir

    return _make


@pytest.fixture
def settings():
    """Build settings with a predictable API base and bucket."""
    return BuildSettings(api_base="https://api.test", bucket="test-bucket")


@pytest.fixture
def full_product_data() -> Dict[str, Any]:
    return {
        "id": "gelinlik-001",
        "title": {"tr": "Zarif Prenses Gelinlik", "en": "Elegant Princess Gown"},
        "shortDescription": {"tr": "Dantel detaylı prenses kesim."},
        "category": "gelinlik",
        "price": 15000,
        "cover": "cover.png",
        "gallery": ["1.jpg", None, "2.webp"],
        "silhouette": "prenses",
        "neckline": "v-yaka",
        "sleeve": "uzun-kol",
        "material": ["material-dantel", "saten"],
        "size": ["36", "38"],
        "color": ["beyaz"],
        "usage": ["dugun"],
        "features": ["kuyruklu"],
        "availability": "kiralik",
        "brand": "brand-mina-lidya",
        "tags": {"tr": ["Prenses", "Dantel"]},
    }


@pytest.fixture(autouse=True)
def reset_builder_logger():
    """Drop handlers the CLI installs so they don't outlive a test."""
    yield
    logging.getLogger("catalog_builder").handlers.clear()
