"""Snapshot summaries for the operator."""

from typing import Any, Dict, List

import pandas as pd

__all__ = ["snapshot_frame", "summarize_snapshot", "format_summary"]

SUMMARY_COLUMNS = ["products", "modest", "missing_cover", "gallery_images"]


def snapshot_frame(entries: List[Dict[str, Any]]) -> pd.DataFrame:
    """One row per snapshot entry with the columns the summary needs."""
    rows = [
        {
            "slug": e.get("slug", ""),
            "category": e.get("category", ""),
            "modest": bool(e.get("isModest")),
            "missing_cover": not e.get("image"),
            "gallery_images": len(e.get("gallery") or []),
        }
        for e in entries
    ]
    return pd.DataFrame(rows, columns=["slug", "category", "modest", "missing_cover", "gallery_images"])


def summarize_snapshot(entries: List[Dict[str, Any]]) -> pd.DataFrame:
    """Per-category counts, sorted by category.

    Returns:
        DataFrame indexed by category with products, modest,
        missing_cover and gallery_images columns.
    """
    df = snapshot_frame(entries)
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    summary = df.groupby("category").agg(
        products=("slug", "count"),
        modest=("modest", "sum"),
        missing_cover=("missing_cover", "sum"),
        gallery_images=("gallery_images", "sum"),
    )
    return summary.astype(int).sort_index()


def format_summary(summary: pd.DataFrame) -> str:
    """Render a summary with a totals line."""
    if summary.empty:
        return "Snapshot is empty."
    totals = summary.sum()
    lines = [summary.to_string(), ""]
    lines.append(
        f"Total: {int(totals['products'])} products, {int(totals['modest'])} modest, "
        f"{int(totals['missing_cover'])} without cover, "
        f"{int(totals['gallery_images'])} gallery images"
    )
    return "\n".join(lines)
