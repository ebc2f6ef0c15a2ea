"""Serve-time modesty pass over snapshot entries.

Independent of the builder's classifier: it starts from the stored flag
and only ever upgrades it when a keyword shows up in the product's text
fields. Entries are copied, never mutated, so the shared snapshot stays
read-only across requests.
"""

from typing import Any, Dict, Iterable, List, Sequence

__all__ = [
    "MODEST_KEYWORDS",
    "MODEST_ATTRIBUTE",
    "stored_modest",
    "matches_modest_keywords",
    "enrich_entry",
    "enrich_catalog",
]

# Turkish (with and without diacritics), English, plus the generic term
MODEST_KEYWORDS = ("tesettür", "tesettur", "hijab", "modest")

MODEST_ATTRIBUTE = "Tesettür Uyumu"
MODEST_YES = "Evet"
MODEST_NO = "Hayır"


def stored_modest(value: Any) -> bool:
    """The snapshot flag may be a bool or the string "true"."""
    return value is True or value == "true"


def _search_text(entry: Dict[str, Any]) -> str:
    tags = entry.get("tags") or []
    if isinstance(tags, str):
        tags = [tags]
    parts = [
        str(entry.get("slug") or ""),
        str(entry.get("category") or ""),
        " ".join(str(t) for t in tags),
        str(entry.get("name") or ""),
    ]
    return " ".join(parts).lower()


def matches_modest_keywords(entry: Dict[str, Any], keywords: Sequence[str] = MODEST_KEYWORDS) -> bool:
    text = _search_text(entry)
    return any(keyword.lower() in text for keyword in keywords)


def enrich_entry(entry: Dict[str, Any], keywords: Sequence[str] = MODEST_KEYWORDS) -> Dict[str, Any]:
    """Return a copy of ``entry`` with the modest flag and attribute re-derived."""
    modest = stored_modest(entry.get("isModest")) or matches_modest_keywords(entry, keywords)

    attributes = dict(entry.get("mappedAttributes") or {})
    attributes[MODEST_ATTRIBUTE] = MODEST_YES if modest else MODEST_NO

    view = dict(entry)
    view["isModest"] = modest
    view["mappedAttributes"] = attributes
    return view


def enrich_catalog(
    entries: Iterable[Dict[str, Any]],
    keywords: Sequence[str] = MODEST_KEYWORDS,
) -> List[Dict[str, Any]]:
    return [enrich_entry(entry, keywords) for entry in entries]
