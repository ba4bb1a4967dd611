"""
Tests for the staging directory and media type validation.
"""
import asyncio
import os
import re

import pytest

from drive_uploader.exceptions import InvalidFileTypeError
from drive_uploader.storage.staging import StagedFile, TemporaryStore
from drive_uploader.storage.validation import is_image_type, validate_content_type, validate_parts

from conftest import make_part, staged_entries


class TestValidation:
    """Tests for declared media type checks."""

    @pytest.mark.parametrize("content_type", ["image/jpeg", "image/png", "image/heic", "image/svg+xml"])
    def test_image_types_accepted(self, content_type):
        assert is_image_type(content_type)
        validate_content_type(content_type)

    @pytest.mark.parametrize("content_type", ["text/plain", "application/pdf", "video/mp4", "", None, "Image/jpeg"])
    def test_other_types_rejected(self, content_type):
        assert not is_image_type(content_type)
        with pytest.raises(InvalidFileTypeError, match="Only image files are allowed!"):
            validate_content_type(content_type)

    def test_validate_parts_rejects_any_non_image(self):
        parts = [make_part("a.jpg"), make_part("b.txt", content_type="text/plain")]

        with pytest.raises(InvalidFileTypeError):
            validate_parts(parts)


class TestTemporaryStore:
    """Tests for TemporaryStore."""

    def test_staged_name_format(self, store: TemporaryStore):
        name = store.staged_name("photos", "holiday.JPG")

        assert re.fullmatch(r"photos-\d+-\d+\.JPG", name)

    def test_staged_name_without_extension(self, store: TemporaryStore):
        assert re.fullmatch(r"photos-\d+-\d+", store.staged_name("photos", "README"))

    def test_ensure_dir_is_idempotent(self, store: TemporaryStore, staging_dir: str):
        store.ensure_dir()
        store.ensure_dir()

        assert os.path.isdir(staging_dir)

    @pytest.mark.asyncio
    async def test_stage_writes_bytes(self, store: TemporaryStore, staging_dir: str):
        staged = await store.stage("photos", make_part("a.jpg", b"abc123"))

        assert staged.original_name == "a.jpg"
        assert staged.content_type == "image/jpeg"
        assert staged.field_name == "photos"
        assert staged.size == 6
        assert os.path.dirname(staged.path) == staging_dir
        with open(staged.path, "rb") as f:
            assert f.read() == b"abc123"

    @pytest.mark.asyncio
    async def test_concurrent_stages_never_collide(self, store: TemporaryStore, staging_dir: str):
        parts = [make_part("same.jpg", f"content-{i}".encode()) for i in range(20)]

        staged = await asyncio.gather(*(store.stage("photos", part) for part in parts))

        paths = [s.path for s in staged]
        assert len(set(paths)) == 20
        assert len(staged_entries(staging_dir)) == 20
        for i, s in enumerate(staged):
            with open(s.path, "rb") as f:
                assert f.read() == f"content-{i}".encode()

    @pytest.mark.asyncio
    async def test_name_collision_does_not_overwrite(self, store: TemporaryStore, staging_dir: str, monkeypatch):
        names = iter(["photos-1-1.jpg", "photos-1-1.jpg", "photos-1-2.jpg"])
        monkeypatch.setattr(store, "staged_name", lambda field, filename: next(names))

        first = await store.stage("photos", make_part("a.jpg", b"first"))
        second = await store.stage("photos", make_part("a.jpg", b"second"))

        assert first.path != second.path
        with open(first.path, "rb") as f:
            assert f.read() == b"first"
        with open(second.path, "rb") as f:
            assert f.read() == b"second"

    @pytest.mark.asyncio
    async def test_discard_removes_file(self, store: TemporaryStore, staging_dir: str):
        staged = await store.stage("photos", make_part("a.jpg"))

        assert await store.discard(staged) is True
        assert staged_entries(staging_dir) == []

    @pytest.mark.asyncio
    async def test_discard_missing_file(self, store: TemporaryStore, staging_dir: str):
        missing = StagedFile(
            field_name="photos",
            original_name="gone.jpg",
            content_type="image/jpeg",
            path=os.path.join(staging_dir, "photos-0-0.jpg"),
            size=0,
        )

        assert await store.discard(missing) is True

    @pytest.mark.asyncio
    async def test_discard_failure_is_not_raised(self, store: TemporaryStore, monkeypatch):
        staged = await store.stage("photos", make_part("a.jpg"))

        def deny(path):
            raise PermissionError("read-only filesystem")

        monkeypatch.setattr(os, "remove", deny)

        assert await store.discard(staged) is False
