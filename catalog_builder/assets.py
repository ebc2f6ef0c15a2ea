"""Image lookup for product directories.

Authors drop images in several places (the product root, ``index/``,
``gallery/``, ``index/gallery/``) and the authoring tool may re-encode them
(png -> avif), so the filename in index.json is only a hint. Resolution is
split in two:

- ``candidate_paths`` builds the ordered list of places to look (no I/O)
- ``resolve_asset`` returns the first candidate that exists

Storage keys flatten the layout to ``<slug>/<name>`` or
``<slug>/gallery/<name>``.
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union
from urllib.parse import quote

from catalog_builder.config import API_BASE, IMAGE_EXTENSIONS
from catalog_builder.models import ResolvedAsset

__all__ = [
    "candidate_paths",
    "storage_key_for",
    "image_url",
    "resolve_asset",
    "find_cover_filename",
    "gallery_folder",
    "gallery_filenames",
]

PathLike = Union[str, Path]

INDEX_DIR = "index"
GALLERY_DIR = "gallery"
COVER_PREFIX = "cover."

# Same characters encodeURIComponent leaves alone
_URL_SAFE = "!~*'()"


def _stem(name: str) -> str:
    return os.path.splitext(name)[0]


def _dedupe(paths: Iterable[Path]) -> List[Path]:
    return list(dict.fromkeys(paths))


def _is_safe_name(filename: str) -> bool:
    parts = filename.replace("\\", "/").split("/")
    return not filename.startswith(("/", "\\")) and ".." not in parts and "" not in parts


def candidate_paths(
    product_dir: PathLike,
    filename: str,
    extensions: Sequence[str] = IMAGE_EXTENSIONS,
) -> List[Path]:
    """Return every path ``filename`` may live at, best match first.

    Order:
      1. ``<dir>/<filename>``
      2. ``<dir>/index/<filename>``
      3. both of the above with each extension substituted
      4. ``gallery/`` and ``index/gallery/`` with the original name, then
         with each extension substituted
      5. for ``subdir/file`` names: ``<dir>/<subdir>`` and
         ``<dir>/index/<subdir>`` with ``file`` as given and with each
         extension substituted

    Duplicates are dropped keeping the first occurrence. Names that are
    absolute or climb out of the product directory give no candidates.
    """
    if not filename or not _is_safe_name(filename):
        return []

    root = Path(product_dir)
    index = root / INDEX_DIR
    stem = _stem(filename)

    paths: List[Path] = [root / filename, index / filename]
    for ext in extensions:
        paths.append(root / (stem + ext))
        paths.append(index / (stem + ext))

    paths.append(root / GALLERY_DIR / filename)
    paths.append(index / GALLERY_DIR / filename)
    for ext in extensions:
        paths.append(root / GALLERY_DIR / (stem + ext))
        paths.append(index / GALLERY_DIR / (stem + ext))

    if "/" in filename:
        sub_dir, sub_file = filename.split("/", 1)
        sub_stem = _stem(sub_file)
        for base in (root / sub_dir, index / sub_dir):
            paths.append(base / sub_file)
            for ext in extensions:
                paths.append(base / (sub_stem + ext))

    return _dedupe(paths)


def storage_key_for(product_dir: PathLike, slug: str, path: PathLike) -> str:
    """Flatten a found image into its blob storage key."""
    relative = Path(path).relative_to(Path(product_dir))
    if GALLERY_DIR in relative.parts[:-1]:
        return f"{slug}/{GALLERY_DIR}/{relative.name}"
    return f"{slug}/{relative.name}"


def image_url(storage_key: str, api_base: str = API_BASE) -> str:
    """Public URL of a storage key, served by the API's image proxy."""
    return f"{api_base.rstrip('/')}/images/{quote(storage_key, safe=_URL_SAFE)}"


def resolve_asset(
    product_dir: PathLike,
    slug: str,
    filename: Optional[str],
    api_base: str = API_BASE,
    extensions: Sequence[str] = IMAGE_EXTENSIONS,
) -> Optional[ResolvedAsset]:
    """Locate ``filename`` on disk.

    Returns None when no filename was given or nothing matched; callers
    treat that as "no image", not as an error.
    """
    if not filename:
        return None

    for candidate in candidate_paths(product_dir, filename, extensions):
        if candidate.is_file():
            key = storage_key_for(product_dir, slug, candidate)
            return ResolvedAsset(
                local_path=str(candidate),
                storage_key=key,
                url=image_url(key, api_base),
            )
    return None


def gallery_folder(product_dir: PathLike) -> Optional[Path]:
    """Return ``gallery/`` if present, else ``index/gallery/``, else None."""
    root = Path(product_dir)
    for folder in (root / GALLERY_DIR, root / INDEX_DIR / GALLERY_DIR):
        if folder.is_dir():
            return folder
    return None


def _folder_images(folder: Path, extensions: Sequence[str]) -> List[str]:
    allowed = {ext.lower() for ext in extensions}
    return sorted(
        p.name for p in folder.iterdir()
        if p.is_file() and p.suffix.lower() in allowed
    )


def find_cover_filename(
    product_dir: PathLike,
    extensions: Sequence[str] = IMAGE_EXTENSIONS,
) -> Optional[str]:
    """Guess the cover when index.json does not name one.

    Looks for ``cover.*`` in the product directory, then in ``index/``.
    A product with only gallery images uses its first gallery image.
    """
    root = Path(product_dir)
    for folder in (root, root / INDEX_DIR):
        if not folder.is_dir():
            continue
        for name in sorted(os.listdir(folder)):
            if name.startswith(COVER_PREFIX):
                return name

    folder = gallery_folder(root)
    if folder is not None:
        images = _folder_images(folder, extensions)
        if images:
            return f"{GALLERY_DIR}/{images[0]}"
    return None


def gallery_filenames(
    product_dir: PathLike,
    declared: Sequence[Optional[str]],
    extensions: Sequence[str] = IMAGE_EXTENSIONS,
) -> List[str]:
    """Declared gallery entries, or the gallery folder's images if none."""
    names = [name for name in declared if name]
    if names:
        return names

    folder = gallery_folder(product_dir)
    if folder is None:
        return []
    return _folder_images(folder, extensions)
