"""Blob storage access for the image proxy.

Objects are addressed by storage key (``<slug>/<name>`` or
``<slug>/gallery/<name>``). Two backends:

- FilesystemBlobStore: a local directory laid out by key
- HttpBlobStore: a public bucket endpoint fetched with requests

``get`` returns None for a missing object; any other failure raises.
"""

import hashlib
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional, Union
from urllib.parse import quote

import requests  # type: ignore[import-untyped]

__all__ = ["BlobObject", "BlobStore", "FilesystemBlobStore", "HttpBlobStore"]

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
DEFAULT_CONTENT_TYPE = "application/octet-stream"

mimetypes.add_type("image/avif", ".avif")
mimetypes.add_type("image/webp", ".webp")


@dataclass
class BlobObject:
    """A fetched object; ``body`` yields the content in chunks."""

    key: str
    body: Iterator[bytes]
    content_type: str
    etag: Optional[str] = None
    size: Optional[int] = None
    etag_weak: bool = False
    close: Callable[[], None] = lambda: None


class BlobStore:
    """Interface: look up an object by storage key."""

    def get(self, key: str) -> Optional[BlobObject]:
        raise NotImplementedError


def _guess_type(key: str) -> str:
    return mimetypes.guess_type(key)[0] or DEFAULT_CONTENT_TYPE


class FilesystemBlobStore(BlobStore):
    """Objects stored as files under ``root``; keys may not escape it."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def _path_for(self, key: str) -> Optional[Path]:
        if not key:
            return None
        root = self.root.resolve()
        path = (root / key).resolve()
        if root not in path.parents:
            return None
        return path

    @staticmethod
    def _etag(path: Path) -> str:
        digest = hashlib.md5()
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                digest.update(chunk)
        return digest.hexdigest()

    @staticmethod
    def _read(path: Path) -> Iterator[bytes]:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                yield chunk

    def get(self, key: str) -> Optional[BlobObject]:
        path = self._path_for(key)
        if path is None or not path.is_file():
            return None
        return BlobObject(
            key=key,
            body=self._read(path),
            content_type=_guess_type(key),
            etag=self._etag(path),
            size=path.stat().st_size,
        )


class HttpBlobStore(BlobStore):
    """Objects served over HTTP at ``<base_url>/<key>``."""

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = 15,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def url_for(self, key: str) -> str:
        return f"{self.base_url}/{quote(key, safe='/')}"

    def get(self, key: str) -> Optional[BlobObject]:
        if not key:
            return None

        response = self.session.get(self.url_for(key), stream=True, timeout=self.timeout)
        if response.status_code == 404:
            response.close()
            return None
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError:
            response.close()
            logger.error(f"Blob store error for {key}: HTTP {response.status_code}")
            raise

        length = response.headers.get("Content-Length")
        raw_etag = response.headers.get("ETag") or ""
        etag_weak = raw_etag.startswith("W/")
        etag = raw_etag[2:] if etag_weak else raw_etag
        etag = etag.strip('"') or None
        return BlobObject(
            key=key,
            body=response.iter_content(chunk_size=CHUNK_SIZE),
            content_type=response.headers.get("Content-Type") or _guess_type(key),
            etag=etag,
            size=int(length) if length and length.isdigit() else None,
            etag_weak=etag_weak,
            close=response.close,
        )
