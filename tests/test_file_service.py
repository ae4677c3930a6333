"""Tests for upload validation and file storage."""

import pytest

from buildhub.application.services import file_service
from buildhub.core.exceptions import BadRequestException, EntityNotFoundException

PDF = b"%PDF-1.4 drawing set"


class TestValidateUpload:
    def test_accepts_allowed_type(self):
        file_service.validate_upload(PDF, "application/pdf")

    def test_rejects_empty(self):
        with pytest.raises(BadRequestException, match="No file provided"):
            file_service.validate_upload(b"", "application/pdf")

    def test_rejects_oversize(self):
        with pytest.raises(BadRequestException, match="File too large"):
            file_service.validate_upload(b"x" * 11, "application/pdf", max_bytes=10)

    def test_rejects_unlisted_type(self):
        with pytest.raises(BadRequestException, match="File type not allowed"):
            file_service.validate_upload(b"#!/bin/sh", "application/x-sh")

    def test_upload_honours_max_bytes(self, repos, storage, owner):
        with pytest.raises(BadRequestException, match="File too large"):
            file_service.upload_file(repos.files, storage, PDF, "plan.pdf", "application/pdf", owner, max_bytes=8)
        assert repos.files.list_by_owner(owner.id) == []


class TestFileLifecycle:
    def test_upload_read_delete(self, repos, storage, owner):
        stored = file_service.upload_file(
            repos.files, storage, PDF, "Site Plan.PDF", "application/pdf", owner,
        )

        assert stored.storage_key.endswith(".pdf")
        assert stored.url == f"/api/files/{stored.id}"
        assert stored.size == len(PDF)
        assert file_service.read_file_content(storage, stored) == PDF

        storage_key = stored.storage_key
        file_service.delete_file(repos.files, storage, stored)

        assert not storage.exists(storage_key)
        assert file_service.list_files(repos.files, owner) == []

    def test_other_users_files_are_hidden(self, repos, storage, owner, other_user, admin):
        stored = file_service.upload_file(repos.files, storage, PDF, "plan.pdf", "application/pdf", owner)

        assert file_service.find_file(repos.files, stored.id, other_user.id) is None
        assert file_service.find_file(repos.files, stored.id, None).id == stored.id
        assert len(file_service.list_files(repos.files, admin)) == 1
        assert file_service.list_files(repos.files, other_user) == []

    def test_missing_bytes(self, repos, storage, owner):
        stored = file_service.upload_file(repos.files, storage, PDF, "plan.pdf", "application/pdf", owner)
        storage.delete(stored.storage_key)

        with pytest.raises(EntityNotFoundException):
            file_service.read_file_content(storage, stored)


class TestLocalFileStorage:
    def test_keys_cannot_escape_base_dir(self, storage):
        storage.save("../../escape.txt", b"data")

        assert (storage.base_dir / "escape.txt").read_bytes() == b"data"

    def test_invalid_key(self, storage):
        with pytest.raises(ValueError):
            storage.save("..", b"data")
