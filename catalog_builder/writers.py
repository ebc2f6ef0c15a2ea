"""Snapshot and upload-script output."""

import json
import os
import shlex
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Union

from catalog_builder.models import CatalogEntry, UploadDirective

__all__ = [
    "SCRIPT_FORMATS",
    "snapshot_json",
    "write_snapshot",
    "load_snapshot",
    "upload_command",
    "render_upload_script",
    "write_upload_script",
]

SCRIPT_FORMATS = ("bat", "sh")

_BAT_HEADER = ["@echo off", "echo --- BULK UPLOAD TO CLOUDFLARE R2 STARTS ---"]
_BAT_FOOTER = ["echo --- DONE ---"]
_SH_HEADER = ["#!/bin/sh", "set -e", "echo '--- BULK UPLOAD TO CLOUDFLARE R2 STARTS ---'"]
_SH_FOOTER = ["echo '--- DONE ---'"]


def _ensure_parent(path: Union[str, Path]) -> None:
    parent = os.path.dirname(str(path))
    if parent:
        os.makedirs(parent, exist_ok=True)


def snapshot_json(entries: Iterable[CatalogEntry]) -> str:
    """Serialize entries exactly as they are written to disk."""
    return json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False)


def write_snapshot(entries: Sequence[CatalogEntry], path: Union[str, Path]) -> None:
    """Write the catalog snapshot the server embeds."""
    _ensure_parent(path)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(snapshot_json(entries))


def load_snapshot(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Read a snapshot back as plain dicts."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Snapshot {path} must contain a JSON list")
    return data


def upload_command(directive: UploadDirective, fmt: str = "bat") -> str:
    """One wrangler command copying a local file to its storage key."""
    target = f"{directive.bucket}/{directive.storage_key}"
    if fmt == "bat":
        return (
            f"call npx wrangler r2 object put {target} "
            f"--file=\"{directive.local_path}\" --remote"
        )
    if fmt == "sh":
        return (
            f"npx wrangler r2 object put {shlex.quote(target)} "
            f"--file={shlex.quote(directive.local_path)} --remote"
        )
    raise ValueError(f"Unknown upload script format: {fmt} (choose from {SCRIPT_FORMATS})")


def render_upload_script(directives: Iterable[UploadDirective], fmt: str = "bat") -> str:
    """Render the full batch/shell script text."""
    if fmt not in SCRIPT_FORMATS:
        raise ValueError(f"Unknown upload script format: {fmt} (choose from {SCRIPT_FORMATS})")
    commands = [upload_command(d, fmt) for d in directives]
    if fmt == "bat":
        lines = _BAT_HEADER + commands + _BAT_FOOTER
        return "\r\n".join(lines) + "\r\n"
    lines = _SH_HEADER + commands + _SH_FOOTER
    return "\n".join(lines) + "\n"


def write_upload_script(
    directives: Sequence[UploadDirective],
    path: Union[str, Path],
    fmt: str = "bat",
) -> None:
    """Write the upload script; shell scripts are made executable."""
    text = render_upload_script(directives, fmt)
    _ensure_parent(path)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    if fmt == "sh":
        mode = os.stat(path).st_mode
        os.chmod(path, mode | 0o111)
