"""Configuration and constants for the catalog builder."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Tuple

from dotenv import load_dotenv

from catalog_builder.modesty import DEFAULT_MODESTY_RULES, ModestyRules

__all__ = [
    "CONTENT_DIR",
    "SNAPSHOT_PATH",
    "UPLOAD_SCRIPT_PATH",
    "UPLOAD_SCRIPT_FORMAT",
    "API_BASE",
    "BUCKET_NAME",
    "METADATA_FILENAME",
    "IMAGE_EXTENSIONS",
    "LOCALE",
    "DEFAULT_CATEGORY",
    "DEFAULT_AVAILABILITY",
    "PRICE_CURRENCY",
    "PRICE_CONTACT",
    "LABEL_MAP",
    "ATTRIBUTE_LABELS",
    "MODEST_YES",
    "MODEST_NO",
    "BuildSettings",
]

_PROJECT_ROOT = Path(__file__).parent.parent

# Load .env before any constant below reads the environment
ENV_FILE = os.getenv("CATALOG_ENV_FILE", str(_PROJECT_ROOT / ".env"))
load_dotenv(dotenv_path=ENV_FILE)

# Input / output paths (env overrides for the operator's machine)
CONTENT_DIR = os.getenv("CATALOG_CONTENT_DIR", str(_PROJECT_ROOT / "content" / "products"))
SNAPSHOT_PATH = os.getenv("CATALOG_SNAPSHOT_PATH", str(_PROJECT_ROOT / "data" / "products.json"))
UPLOAD_SCRIPT_PATH = os.getenv("CATALOG_UPLOAD_SCRIPT", str(_PROJECT_ROOT / "data" / "upload-assets.bat"))
UPLOAD_SCRIPT_FORMAT = os.getenv("CATALOG_UPLOAD_FORMAT", "bat")

# Image URLs point at the API's own image proxy
API_BASE = os.getenv("CATALOG_API_BASE", "https://database.minalidya.wedding")
BUCKET_NAME = os.getenv("CATALOG_BUCKET", "minalidya-assets")

# One metadata file per product directory
METADATA_FILENAME = "index.json"

# Authoring tools may convert png -> avif, so all of these are probed
IMAGE_EXTENSIONS: Tuple[str, ...] = (".avif", ".png", ".jpg", ".jpeg", ".webp")

LOCALE = "tr"

DEFAULT_CATEGORY = "Diger"
DEFAULT_AVAILABILITY = "satilik"
PRICE_CURRENCY = "TL"
PRICE_CONTACT = "Iletisim"

# Taxonomy slug -> display label (Turkish, matches the storefront)
LABEL_MAP: Dict[str, str] = {
    # Silhouette
    "prenses": "Prenses",
    "balik": "Balık",
    "a-kesim": "A Kesim",
    "helen": "Helen",
    "duz": "Düz",
    # Neckline
    "hakim-yaka": "Hakim Yaka",
    "v-yaka": "V Yaka",
    "kare-yaka": "Kare Yaka",
    "kayik-yaka": "Kayık Yaka",
    "straplez": "Straplez",
    "kalp-yaka": "Kalp Yaka",
    "halter-yaka": "Halter Yaka",
    "m-yaka": "M Yaka",
    # Sleeve
    "uzun-kol": "Uzun Kol",
    "kisa-kol": "Kısa Kol",
    "askili": "Askılı",
    "straplez-kol": "Straplez",
    "balon-kol": "Balon Kol",
    "dusuk-kol": "Düşük Kol",
    "tek-kol": "Tek Kol",
}

# Field name -> fixed attribute label in mappedAttributes
ATTRIBUTE_LABELS: Dict[str, str] = {
    "silhouette": "Etek Kesimi",
    "neckline": "Yaka Tipi",
    "sleeve": "Kol Tipi",
    "material": "Kumaş",
    "size": "Beden",
    "color": "Renk",
    "modest": "Tesettür Uyumu",
}

MODEST_YES = "Evet"
MODEST_NO = "Hayır"


@dataclass
class BuildSettings:
    """Everything a single build run needs."""

    api_base: str = API_BASE
    bucket: str = BUCKET_NAME
    metadata_filename: str = METADATA_FILENAME
    extensions: Tuple[str, ...] = IMAGE_EXTENSIONS
    locale: str = LOCALE
    label_map: Dict[str, str] = field(default_factory=lambda: dict(LABEL_MAP))
    modesty_rules: ModestyRules = DEFAULT_MODESTY_RULES
