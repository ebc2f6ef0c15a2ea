"""Test the blob store backends."""

import hashlib
from unittest.mock import MagicMock

import pytest
import requests

from web.app import blob_store_from_config, create_app
from web.blob_store import BlobObject, FilesystemBlobStore, HttpBlobStore

COVER_BYTES = b"\x00\x00\x00\x1cftypavif-cover"


class TestFilesystemBlobStore:
    def test_get(self, blob_root):
        blob = FilesystemBlobStore(blob_root).get("prenses-dantel/cover.avif")
        assert blob is not None
        assert b"".join(blob.body) == COVER_BYTES
        assert blob.content_type == "image/avif"
        assert blob.size == len(COVER_BYTES)
        assert blob.etag == hashlib.md5(COVER_BYTES).hexdigest()

    @pytest.mark.parametrize(
        "key", ["missing-key", "prenses-dantel", "../secret.txt", "prenses-dantel/../../secret.txt", ""]
    )
    def test_missing_or_outside(self, blob_root, key):
        assert FilesystemBlobStore(blob_root).get(key) is None

    def test_unknown_extension(self, blob_root):
        (blob_root / "prenses-dantel" / "notes.zzz").write_bytes(b"x")
        blob = FilesystemBlobStore(blob_root).get("prenses-dantel/notes.zzz")
        assert blob.content_type == "application/octet-stream"


def _response(status, headers=None, chunks=()):
    response = MagicMock()
    response.status_code = status
    response.headers = headers or {}
    response.iter_content.return_value = iter(chunks)
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"HTTP {status}")
    return response


class TestHttpBlobStore:
    def test_get(self):
        session = MagicMock()
        session.get.return_value = _response(
            200,
            {"Content-Type": "image/webp", "Content-Length": "4", "ETag": 'W/"abc123"'},
            [b"da", b"ta"],
        )
        store = HttpBlobStore("https://bucket.test/", timeout=5, session=session)

        blob = store.get("p1/gallery/1 a.webp")

        session.get.assert_called_once_with(
            "https://bucket.test/p1/gallery/1%20a.webp", stream=True, timeout=5
        )
        assert b"".join(blob.body) == b"data"
        assert blob.content_type == "image/webp"
        assert blob.size == 4
        assert blob.etag == "abc123"
        assert blob.etag_weak is True
        blob.close()
        session.get.return_value.close.assert_called_once()

    def test_not_found(self):
        session = MagicMock()
        session.get.return_value = _response(404)
        assert HttpBlobStore("https://bucket.test", session=session).get("nope") is None
        session.get.return_value.close.assert_called_once()

    def test_server_error_raises(self):
        session = MagicMock()
        session.get.return_value = _response(500)
        with pytest.raises(requests.exceptions.HTTPError):
            HttpBlobStore("https://bucket.test", session=session).get("p1/cover.avif")

    def test_type_guessed_when_header_missing(self):
        session = MagicMock()
        session.get.return_value = _response(200, {}, [b"x"])
        blob = HttpBlobStore("https://bucket.test", session=session).get("p1/cover.avif")
        assert blob.content_type == "image/avif"
        assert blob.size is None
        assert blob.etag is None

    def test_strong_etag(self):
        session = MagicMock()
        session.get.return_value = _response(200, {"ETag": '"abc123"'}, [b"x"])
        blob = HttpBlobStore("https://bucket.test", session=session).get("p1/cover.avif")
        assert blob.etag == "abc123"
        assert blob.etag_weak is False


class TestBlobStoreFromConfig:
    def test_http_when_url_set(self, tmp_path):
        store = blob_store_from_config({"BLOB_STORE_URL": "https://bucket.test", "BLOB_STORE_DIR": str(tmp_path)})
        assert isinstance(store, HttpBlobStore)

    def test_filesystem_otherwise(self, tmp_path):
        store = blob_store_from_config({"BLOB_STORE_URL": "", "BLOB_STORE_DIR": str(tmp_path)})
        assert isinstance(store, FilesystemBlobStore)


class TestImageProxyErrors:
    def test_backend_failure_is_500(self, snapshot):
        store = MagicMock()
        store.get.side_effect = requests.exceptions.ConnectionError("down")
        app = create_app(test_config={"TESTING": False}, snapshot=snapshot, blob_store=store)
        with app.test_client() as client:
            response = client.get("/images/p1/cover.avif")
        assert response.status_code == 500
        assert "Access-Control-Allow-Origin" in response.headers


class TestImageProxyEtags:
    @pytest.fixture
    def weak_client(self, snapshot):
        store = MagicMock()
        store.get.side_effect = lambda key: BlobObject(
            key=key, body=iter([b"data"]), content_type="image/webp",
            etag="abc123", size=4, etag_weak=True,
        )
        app = create_app(test_config={"TESTING": True}, snapshot=snapshot, blob_store=store)
        with app.test_client() as client:
            yield client

    def test_weak_etag_stays_weak(self, weak_client):
        response = weak_client.get("/images/p1/cover.webp")
        assert response.status_code == 200
        assert response.headers["ETag"] == 'W/"abc123"'

    @pytest.mark.parametrize("header", ['W/"abc123"', '"abc123"'])
    def test_weak_etag_revalidates(self, weak_client, header):
        response = weak_client.get("/images/p1/cover.webp", headers={"If-None-Match": header})
        assert response.status_code == 304
