"""Tests for snapshot and upload script output."""

import json
import os

import pytest

from catalog_builder.models import CatalogEntry, UploadDirective
from catalog_builder.writers import (
    load_snapshot,
    render_upload_script,
    upload_command,
    write_snapshot,
    write_upload_script,
)


@pytest.fixture
def directives():
    return [
        UploadDirective("minalidya-assets", "p1/cover.avif", "/content/p1/cover.avif"),
        UploadDirective("minalidya-assets", "p1/gallery/1 a.jpg", "/content/p1/gallery/1 a.jpg"),
    ]


class TestUploadScript:
    """Tests for upload command rendering."""

    def test_bat_command(self, directives):
        assert upload_command(directives[0], "bat") == (
            'call npx wrangler r2 object put minalidya-assets/p1/cover.avif '
            '--file="/content/p1/cover.avif" --remote'
        )

    def test_sh_command_quotes_arguments(self, directives):
        assert upload_command(directives[1], "sh") == (
            "npx wrangler r2 object put 'minalidya-assets/p1/gallery/1 a.jpg' "
            "--file='/content/p1/gallery/1 a.jpg' --remote"
        )

    def test_bat_script_framing(self, directives):
        lines = render_upload_script(directives, "bat").split("\r\n")
        assert lines[0] == "@echo off"
        assert lines[1].startswith("echo --- BULK UPLOAD")
        assert lines[2].startswith("call npx wrangler")
        assert lines[-2] == "echo --- DONE ---"
        assert len(lines) == 6

    def test_empty_script_still_valid(self):
        script = render_upload_script([], "sh")
        assert script.startswith("#!/bin/sh\n")
        assert "wrangler" not in script

    def test_unknown_format(self, directives):
        with pytest.raises(ValueError):
            render_upload_script(directives, "ps1")
        with pytest.raises(ValueError):
            upload_command(directives[0], "ps1")

    def test_sh_script_is_executable(self, directives, tmp_path):
        path = tmp_path / "out" / "upload.sh"
        write_upload_script(directives, path, "sh")
        assert path.read_text(encoding="utf-8").count("wrangler") == 2
        assert os.access(path, os.X_OK)


class TestSnapshot:
    """Tests for snapshot writing and loading."""

    def test_non_ascii_kept_and_round_trips(self, tmp_path):
        entry = CatalogEntry(
            id="p1", name="Balık Gelinlik", category="Diger", image="", description="",
            price="Iletisim", slug="p1", gallery=[], is_modest=False,
            mapped_attributes={"Tesettür Uyumu": "Hayır"},
        )
        path = tmp_path / "data" / "products.json"
        write_snapshot([entry], path)

        text = path.read_text(encoding="utf-8")
        assert "Balık Gelinlik" in text
        assert load_snapshot(path) == [entry.to_dict()]

    def test_load_rejects_non_list(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps({"products": []}), encoding="utf-8")
        with pytest.raises(ValueError):
            load_snapshot(path)
