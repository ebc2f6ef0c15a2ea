"""Logging utilities for the catalog API.

Provides structured JSONL logging for request events worth auditing.
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

__all__ = ["log_interaction", "LOG_DIR"]

LOG_DIR = Path(os.getenv("WEB_LOG_DIR", str(Path(__file__).parent / "logs")))


def log_interaction(event_type: str, data: Dict[str, Any]) -> None:
    """Append an event to today's JSONL file.

    Args:
        event_type: Type of event (auth_rejected, image_not_found, etc.)
        data: Event-specific data to log
    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / f"api_events_{datetime.now().strftime('%Y%m%d')}.jsonl"
    log_entry = {"timestamp": datetime.now().isoformat(), "event_type": event_type, **data}
    with open(log_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(log_entry, ensure_ascii=False) + "\n")
