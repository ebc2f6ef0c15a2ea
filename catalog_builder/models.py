"""Data models for catalog sources, resolved assets and output entries."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

__all__ = [
    "ProductSourceError",
    "ProductSource",
    "ResolvedAsset",
    "CatalogEntry",
    "UploadDirective",
    "BuildError",
    "BuildReport",
]

_LIST_FIELDS = ("material", "size", "color", "usage", "features")
_TEXT_FIELDS = ("id", "productName", "category", "silhouette", "neckline",
                "sleeve", "brand", "availability", "cover")


class ProductSourceError(ValueError):
    """Raised when a product metadata file has the wrong shape."""
    pass


def _text(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise ProductSourceError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _localized(value: Any, locale: str) -> Any:
    """Pick the locale from a {locale: value} map; plain values pass through."""
    if isinstance(value, dict):
        return value.get(locale)
    return value


def _string_list(value: Any, key: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if not isinstance(value, list):
        raise ProductSourceError(f"'{key}' must be a list, got {type(value).__name__}")
    for item in value:
        if not isinstance(item, str):
            raise ProductSourceError(f"'{key}' items must be strings, got {type(item).__name__}")
    return list(value)


@dataclass
class ProductSource:
    """Raw authoring record read from a product's index.json.

    All fields are optional in the file; defaults are applied here so the
    rest of the pipeline never re-checks shapes.
    """

    id: str = ""
    product_name: str = ""
    title: str = ""
    short_description: str = ""
    category: str = ""
    price: Optional[Union[int, float, str]] = None
    cover: str = ""
    gallery: List[str] = field(default_factory=list)
    silhouette: str = ""
    neckline: str = ""
    sleeve: str = ""
    material: List[str] = field(default_factory=list)
    size: List[str] = field(default_factory=list)
    color: List[str] = field(default_factory=list)
    usage: List[str] = field(default_factory=list)
    features: List[str] = field(default_factory=list)
    availability: str = ""
    brand: str = ""
    tags: List[str] = field(default_factory=list)
    # True, False, "yes", any other string, or None when absent
    is_modest: Optional[Union[bool, str]] = None

    @classmethod
    def from_dict(cls, data: Any, locale: str = "tr") -> "ProductSource":
        if not isinstance(data, dict):
            raise ProductSourceError(
                f"metadata must be a JSON object, got {type(data).__name__}"
            )

        text = {key: _text(data, key) for key in _TEXT_FIELDS}
        lists = {key: _string_list(data.get(key), key) for key in _LIST_FIELDS}

        title = _localized(data.get("title"), locale)
        description = _localized(data.get("shortDescription"), locale)
        for key, value in (("title", title), ("shortDescription", description)):
            if value is not None and not isinstance(value, str):
                raise ProductSourceError(f"'{key}' must be text, got {type(value).__name__}")

        price = data.get("price")
        if isinstance(price, bool) or not isinstance(price, (int, float, str, type(None))):
            raise ProductSourceError(f"'price' must be a number or string, got {type(price).__name__}")

        gallery = data.get("gallery")
        if gallery is not None and not isinstance(gallery, list):
            raise ProductSourceError(f"'gallery' must be a list, got {type(gallery).__name__}")

        is_modest = data.get("isModest")
        if not isinstance(is_modest, (bool, str, type(None))):
            is_modest = None

        return cls(
            id=text["id"],
            product_name=text["productName"],
            title=title or "",
            short_description=description or "",
            category=text["category"],
            price=price,
            cover=text["cover"],
            gallery=_string_list([g for g in (gallery or []) if g is not None], "gallery"),
            silhouette=text["silhouette"],
            neckline=text["neckline"],
            sleeve=text["sleeve"],
            material=lists["material"],
            size=lists["size"],
            color=lists["color"],
            usage=lists["usage"],
            features=lists["features"],
            availability=text["availability"],
            brand=text["brand"],
            tags=_string_list(_localized(data.get("tags"), locale), "tags"),
            is_modest=is_modest,
        )


@dataclass(frozen=True)
class ResolvedAsset:
    """An image found on disk and where it lives in blob storage."""

    local_path: str
    storage_key: str
    url: str


@dataclass(frozen=True)
class UploadDirective:
    """One local file that must be written to a storage key."""

    bucket: str
    storage_key: str
    local_path: str


@dataclass
class CatalogEntry:
    """One product as written to the snapshot."""

    id: str
    name: str
    category: str
    image: str
    description: str
    price: str
    slug: str
    gallery: List[str]
    is_modest: bool
    mapped_attributes: Dict[str, str]
    silhouette: str = ""
    neckline: str = ""
    sleeve: str = ""
    color: List[str] = field(default_factory=list)
    material: List[str] = field(default_factory=list)
    brand: str = ""
    size: List[str] = field(default_factory=list)
    availability: str = ""
    usage: List[str] = field(default_factory=list)
    features: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    @property
    def images(self) -> List[Dict[str, str]]:
        """Cover first, then the gallery."""
        return [{"src": self.image}] + [{"src": url} for url in self.gallery]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the storefront's camelCase keys, in snapshot order."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "image": self.image,
            "description": self.description,
            "price": self.price,
            "slug": self.slug,
            "gallery": list(self.gallery),
            "isModest": self.is_modest,
            "images": self.images,
            "mappedAttributes": dict(self.mapped_attributes),
            "silhouette": self.silhouette,
            "neckline": self.neckline,
            "sleeve": self.sleeve,
            "color": list(self.color),
            "material": list(self.material),
            "brand": self.brand,
            "size": list(self.size),
            "availability": self.availability,
            "usage": list(self.usage),
            "features": list(self.features),
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class BuildError:
    """A product directory that was skipped."""

    slug: str
    message: str


@dataclass
class BuildReport:
    """Outcome of one build run."""

    entries: List[CatalogEntry] = field(default_factory=list)
    directives: List[UploadDirective] = field(default_factory=list)
    errors: List[BuildError] = field(default_factory=list)
