"""Human-readable labels for taxonomy slugs."""

import re
from typing import Dict, Iterable, Optional

from catalog_builder.config import LABEL_MAP

__all__ = ["resolve_label", "join_labels"]

# Compound slugs like "material-cotton" carry one lowercase prefix segment
_PREFIX_PATTERN = re.compile(r"^[a-z]+-")


def resolve_label(slug: Optional[str], label_map: Dict[str, str] = LABEL_MAP) -> str:
    """Map a taxonomy slug to its display label.

    Tries the table first, then the slug with one leading "<letters>-"
    segment removed, then falls back to the remainder with its first
    character upper-cased.

    Args:
        slug: Raw taxonomy value (e.g. "hakim-yaka"). Empty or None gives "".
        label_map: Slug -> label table.

    Returns:
        Display label.
    """
    if not slug:
        return ""
    if slug in label_map:
        return label_map[slug]

    remainder = _PREFIX_PATTERN.sub("", slug, count=1)
    if remainder in label_map:
        return label_map[remainder]
    return remainder[:1].upper() + remainder[1:]


def join_labels(values: Iterable[str], label_map: Dict[str, str] = LABEL_MAP) -> str:
    """Render a multi-valued field as a comma-joined list of labels."""
    labels = (resolve_label(v, label_map) for v in values)
    return ", ".join(label for label in labels if label)
