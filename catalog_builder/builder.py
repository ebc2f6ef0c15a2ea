"""Catalog build orchestration.

Walks the content directory, turns each product folder into a
CatalogEntry and collects the uploads needed to mirror its images into
blob storage. A broken product is logged and skipped; the build always
finishes with whatever succeeded.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from catalog_builder.assets import find_cover_filename, gallery_filenames, resolve_asset
from catalog_builder.config import (
    ATTRIBUTE_LABELS,
    DEFAULT_AVAILABILITY,
    DEFAULT_CATEGORY,
    MODEST_NO,
    MODEST_YES,
    PRICE_CONTACT,
    PRICE_CURRENCY,
    BuildSettings,
)
from catalog_builder.labels import join_labels, resolve_label
from catalog_builder.logging_config import get_logger, log_build_event
from catalog_builder.modesty import is_modest
from catalog_builder.models import (
    BuildError,
    BuildReport,
    CatalogEntry,
    ProductSource,
    ResolvedAsset,
    UploadDirective,
)

__all__ = [
    "iter_product_dirs",
    "load_source",
    "format_price",
    "mapped_attributes",
    "build_entry",
    "build_catalog",
    "dedupe_directives",
]

logger = get_logger("builder")


def iter_product_dirs(content_dir: Union[str, Path], metadata_filename: str) -> List[Path]:
    """Product folders (those holding a metadata file), sorted by name."""
    root = Path(content_dir)
    return [
        d for d in sorted(root.iterdir(), key=lambda p: p.name)
        if d.is_dir() and (d / metadata_filename).is_file()
    ]


def load_source(product_dir: Path, settings: BuildSettings) -> ProductSource:
    """Read and validate a product's metadata file."""
    with open(product_dir / settings.metadata_filename, "r", encoding="utf-8") as f:
        data = json.load(f)
    return ProductSource.from_dict(data, locale=settings.locale)


def format_price(price) -> str:
    """'<price> TL', or the contact sentinel when there is no price."""
    if price is None or price == "" or price == 0:
        return PRICE_CONTACT
    if isinstance(price, float) and price.is_integer():
        price = int(price)
    return f"{price} {PRICE_CURRENCY}"


def mapped_attributes(source: ProductSource, modest: bool, settings: BuildSettings) -> dict:
    """Display attributes keyed by the storefront's fixed labels."""
    labels = settings.label_map
    return {
        ATTRIBUTE_LABELS["silhouette"]: resolve_label(source.silhouette, labels),
        ATTRIBUTE_LABELS["neckline"]: resolve_label(source.neckline, labels),
        ATTRIBUTE_LABELS["sleeve"]: resolve_label(source.sleeve, labels),
        ATTRIBUTE_LABELS["material"]: join_labels(source.material, labels),
        ATTRIBUTE_LABELS["size"]: join_labels(source.size, labels),
        ATTRIBUTE_LABELS["color"]: join_labels(source.color, labels),
        ATTRIBUTE_LABELS["modest"]: MODEST_YES if modest else MODEST_NO,
    }


def _directive(asset: ResolvedAsset, settings: BuildSettings) -> UploadDirective:
    return UploadDirective(
        bucket=settings.bucket,
        storage_key=asset.storage_key,
        local_path=asset.local_path,
    )


def build_entry(
    product_dir: Path,
    settings: Optional[BuildSettings] = None,
) -> Tuple[CatalogEntry, List[UploadDirective]]:
    """Build one catalog entry and the uploads its images need.

    Raises whatever reading or validating the metadata raises; the caller
    decides whether that aborts anything.
    """
    settings = settings or BuildSettings()
    slug = product_dir.name
    source = load_source(product_dir, settings)

    cover_name = source.cover or find_cover_filename(product_dir, settings.extensions)
    cover = resolve_asset(product_dir, slug, cover_name, settings.api_base, settings.extensions)

    gallery: List[ResolvedAsset] = []
    for name in gallery_filenames(product_dir, source.gallery, settings.extensions):
        asset = resolve_asset(product_dir, slug, name, settings.api_base, settings.extensions)
        if asset is not None:
            gallery.append(asset)
        else:
            logger.debug(f"  {slug}: gallery image not found: {name}")

    if cover is None:
        logger.warning(f"  {slug}: no cover image resolved")

    modest = is_modest(source, settings.modesty_rules)

    entry = CatalogEntry(
        id=source.id or slug,
        name=source.product_name or source.title or slug,
        category=source.category or DEFAULT_CATEGORY,
        image=cover.url if cover else "",
        description=source.short_description,
        price=format_price(source.price),
        slug=slug,
        gallery=[asset.url for asset in gallery],
        is_modest=modest,
        mapped_attributes=mapped_attributes(source, modest, settings),
        silhouette=source.silhouette,
        neckline=source.neckline,
        sleeve=source.sleeve,
        color=source.color,
        material=source.material,
        brand=source.brand,
        size=source.size,
        availability=source.availability or DEFAULT_AVAILABILITY,
        usage=source.usage,
        features=source.features,
        tags=source.tags,
    )

    assets = ([cover] if cover else []) + gallery
    return entry, [_directive(asset, settings) for asset in assets]


def dedupe_directives(directives: Iterable[UploadDirective]) -> List[UploadDirective]:
    """Drop exact duplicates, keeping first-seen order."""
    return list(dict.fromkeys(directives))


def build_catalog(
    content_dir: Union[str, Path],
    settings: Optional[BuildSettings] = None,
) -> BuildReport:
    """Build the whole catalog from a content directory.

    Args:
        content_dir: Directory with one subdirectory per product.
        settings: Build settings (defaults from config).

    Returns:
        BuildReport with the entries, deduplicated upload directives and
        the products that were skipped.
    """
    settings = settings or BuildSettings()
    report = BuildReport()
    directives: List[UploadDirective] = []

    product_dirs = iter_product_dirs(content_dir, settings.metadata_filename)
    logger.info(f"Building catalog from {content_dir} ({len(product_dirs)} products)")

    for product_dir in product_dirs:
        slug = product_dir.name
        try:
            entry, product_directives = build_entry(product_dir, settings)
        except Exception as e:
            report.errors.append(BuildError(slug=slug, message=str(e)))
            log_build_event(
                "product_error",
                {
                    "message": f"Error processing {slug}: {e}",
                    "slug": slug,
                    "error_type": type(e).__name__,
                    "error": str(e),
                },
                level=logging.ERROR,
            )
            continue

        report.entries.append(entry)
        directives.extend(product_directives)
        logger.debug(f"  {slug}: {len(product_directives)} images")

    report.directives = dedupe_directives(directives)

    log_build_event(
        "build_complete",
        {
            "message": (
                f"Built {len(report.entries)} products, "
                f"{len(report.directives)} uploads, {len(report.errors)} skipped"
            ),
            "products": len(report.entries),
            "uploads": len(report.directives),
            "skipped": [error.slug for error in report.errors],
        },
    )
    return report
