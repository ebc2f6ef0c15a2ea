"""Wedding-dress catalog builder package."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from catalog_builder.assets import candidate_paths, resolve_asset
from catalog_builder.builder import build_catalog, build_entry, dedupe_directives
from catalog_builder.config import BuildSettings
from catalog_builder.labels import resolve_label
from catalog_builder.modesty import is_modest
from catalog_builder.models import (
    BuildError,
    BuildReport,
    CatalogEntry,
    ProductSource,
    ProductSourceError,
    ResolvedAsset,
    UploadDirective,
)
from catalog_builder.writers import write_snapshot, write_upload_script

__all__ = [
    # Version
    "__version__",
    # Config
    "BuildSettings",
    # Models
    "ProductSource",
    "ProductSourceError",
    "ResolvedAsset",
    "CatalogEntry",
    "UploadDirective",
    "BuildError",
    "BuildReport",
    # Core functions
    "resolve_label",
    "is_modest",
    "candidate_paths",
    "resolve_asset",
    "build_entry",
    "build_catalog",
    "dedupe_directives",
    "write_snapshot",
    "write_upload_script",
]
