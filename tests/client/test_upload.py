"""Tests for storage paths and the upload-and-insert procedure."""

from __future__ import annotations

import re

import pytest

from trekjournal.client.models import Draft, LocalFile
from trekjournal.client.sync import EntryUploader, make_storage_path
from trekjournal.core.errors import RemoteWriteError


class TestMakeStoragePath:
    """Tests for make_storage_path."""

    def test_format(self) -> None:
        """Path should be epoch millis, a base36 suffix and the extension."""
        path = make_storage_path("IMG_0042.JPG", now=1718000000.5)
        assert re.fullmatch(r"1718000000500-[0-9a-z]{11}\.jpg", path)

    def test_no_extension(self) -> None:
        """Files without an extension get none."""
        path = make_storage_path("README", now=1.0)
        assert re.fullmatch(r"1000-[0-9a-z]{11}", path)

    def test_unique_for_same_name(self) -> None:
        """Same name at the same instant should still give distinct paths."""
        paths = {make_storage_path("a.jpg", now=1.0) for _ in range(50)}
        assert len(paths) == 50


class TestEntryUploader:
    """Tests for EntryUploader."""

    @pytest.mark.asyncio
    async def test_uploads_then_inserts(self, store) -> None:  # type: ignore[no-untyped-def]
        """Media references should point at the uploaded objects."""
        record = Draft(
            title="Lake",
            files=[LocalFile(name="lake.png", mime_type="image/png", data=b"png")],
        ).validate()

        entry = await EntryUploader(store).upload_and_insert(record)

        (media,) = entry.media
        assert store.objects[media.path] == b"png"
        assert media.url == f"https://cdn.test/trip-media/{media.path}"
        assert media.type == "image/png"
        assert entry.title == "Lake"

    @pytest.mark.asyncio
    async def test_upload_failure_skips_insert(self, store) -> None:  # type: ignore[no-untyped-def]
        """No row should be inserted when a file fails to upload."""
        store.fail_uploads = True
        record = Draft(files=[LocalFile(name="a.jpg", mime_type="image/jpeg", data=b"a")]).validate()

        with pytest.raises(RemoteWriteError):
            await EntryUploader(store).upload_and_insert(record)

        assert store.rows == []
