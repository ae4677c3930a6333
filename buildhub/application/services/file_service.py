"""File service — upload validation, metadata and byte storage for documents."""

import os
import uuid
from typing import List, Optional

import structlog

from buildhub.config import get_settings
from buildhub.core.exceptions import BadRequestException, EntityNotFoundException
from buildhub.domain.models.project import Project
from buildhub.domain.models.stored_file import StoredFile
from buildhub.domain.models.user import User
from buildhub.domain.repositories.file_repository import FileRepository
from buildhub.domain.roles import is_admin
from buildhub.infrastructure.file_storage import StorageProvider

logger = structlog.get_logger(__name__)

ALLOWED_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "text/plain",
    "application/zip",
    "application/x-zip-compressed",
})


def validate_upload(content: bytes, mime_type: str, max_bytes: Optional[int] = None) -> None:
    max_bytes = max_bytes or get_settings().MAX_UPLOAD_BYTES
    if not content:
        raise BadRequestException("No file provided")
    if len(content) > max_bytes:
        raise BadRequestException(f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB.")
    if mime_type not in ALLOWED_MIME_TYPES:
        raise BadRequestException("File type not allowed.")


def upload_file(
    files: FileRepository,
    storage: StorageProvider,
    content: bytes,
    original_name: str,
    mime_type: str,
    owner: User,
    project: Optional[Project] = None,
    max_bytes: Optional[int] = None,
) -> StoredFile:
    validate_upload(content, mime_type, max_bytes)

    file_id = str(uuid.uuid4())
    extension = os.path.splitext(original_name)[1].lower()
    storage_key = f"{file_id}{extension}"
    storage.save(storage_key, content)

    stored = files.create({
        "id": file_id,
        "original_name": original_name,
        "storage_key": storage_key,
        "mime_type": mime_type,
        "size": len(content),
        "url": f"/api/files/{file_id}",
        "user_id": owner.id,
        "project_id": project.id if project else None,
    })
    logger.info("File stored", file_id=file_id, size=stored.size, project_id=stored.project_id)
    return stored


def find_file(files: FileRepository, file_id: str, owner_id: Optional[str]) -> Optional[StoredFile]:
    stored = files.get_by_id(file_id)
    if stored is None or (owner_id is not None and stored.user_id != owner_id):
        return None
    return stored


def list_files(files: FileRepository, user: User, project_id: Optional[int] = None) -> List[StoredFile]:
    owner_id = None if is_admin(user.role) else user.id
    return files.list_by_owner(owner_id, project_id)


def read_file_content(storage: StorageProvider, stored: StoredFile) -> bytes:
    if not storage.exists(stored.storage_key):
        logger.error("File bytes missing from storage", file_id=stored.id, key=stored.storage_key)
        raise EntityNotFoundException("File not found")
    return storage.read(stored.storage_key)


def delete_file(files: FileRepository, storage: StorageProvider, stored: StoredFile) -> None:
    file_id = stored.id
    storage.delete(stored.storage_key)
    files.delete(file_id)
    logger.info("File deleted", file_id=file_id)
