"""Read-only access to the catalog snapshot.

The snapshot is loaded once per app and shared by every request; request
handlers must not modify it (see enrichment.enrich_entry).
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from flask import current_app

__all__ = ["SNAPSHOT_EXTENSION", "load_snapshot", "get_snapshot"]

logger = logging.getLogger(__name__)

SNAPSHOT_EXTENSION = "catalog_snapshot"


def load_snapshot(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load the snapshot JSON written by the builder."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Snapshot {path} must contain a JSON list")
    logger.info(f"Loaded {len(data)} products from {path}")
    return data


def get_snapshot() -> List[Dict[str, Any]]:
    """The current app's snapshot, loaded from SNAPSHOT_PATH on first use."""
    snapshot = current_app.extensions.get(SNAPSHOT_EXTENSION)
    if snapshot is None:
        snapshot = load_snapshot(current_app.config["SNAPSHOT_PATH"])
        current_app.extensions[SNAPSHOT_EXTENSION] = snapshot
    return snapshot
