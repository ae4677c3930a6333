"""Files API routes — upload, list, download and delete documents."""

from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile, status

from buildhub.application.services import file_service, project_service
from buildhub.config import Settings
from buildhub.core.exceptions import EntityNotFoundException
from buildhub.core.rate_limit import UPLOAD_MESSAGE, limiter, upload_rate_limit
from buildhub.domain.models.stored_file import StoredFile
from buildhub.domain.models.user import User
from buildhub.domain.repositories.file_repository import FileRepository
from buildhub.domain.repositories.project_repository import ProjectRepository
from buildhub.domain.roles import Permission, ResourceType
from buildhub.domain.schemas.file import FileRead
from buildhub.infrastructure.file_storage import StorageProvider
from buildhub.interfaces.api.deps import get_current_user, require_ownership, require_permission
from buildhub.interfaces.deps import (
    get_app_settings,
    get_file_repository,
    get_file_storage,
    get_project_repository,
)

router = APIRouter(prefix="/api/files", tags=["Files"])

owned_file = require_ownership(ResourceType.FILE)


def content_disposition(filename: str, disposition: str = "inline") -> str:
    """Header value for filename, with an RFC 5987 `filename*` when it is not plain ASCII."""
    quoted = quote(filename, safe="")
    if quoted == filename:
        return f'{disposition}; filename="{filename}"'
    fallback = "".join(
        ch if ch.isascii() and ch.isprintable() and ch not in '"\\' else "_"
        for ch in filename
    )
    return f"{disposition}; filename=\"{fallback}\"; filename*=UTF-8''{quoted}"


@router.post("/upload", status_code=status.HTTP_201_CREATED)
@limiter.limit(upload_rate_limit, error_message=UPLOAD_MESSAGE)
def upload_file(
    request: Request,
    file: Optional[UploadFile] = File(None),
    project_id: Optional[int] = Form(None),
    user: User = Depends(require_permission(Permission.WRITE_OWN)),
    files: FileRepository = Depends(get_file_repository),
    projects: ProjectRepository = Depends(get_project_repository),
    storage: StorageProvider = Depends(get_file_storage),
    settings: Settings = Depends(get_app_settings),
):
    project = None
    if project_id is not None:
        project = project_service.get_project(projects, project_id, user)
        if project is None:
            raise EntityNotFoundException("Project not found or access denied")

    # read at most one byte past the cap
    content = file.file.read(settings.MAX_UPLOAD_BYTES + 1) if file is not None else b""
    stored = file_service.upload_file(
        files,
        storage,
        content=content,
        original_name=(file.filename if file is not None else None) or "upload",
        mime_type=(file.content_type if file is not None else None) or "application/octet-stream",
        owner=user,
        project=project,
        max_bytes=settings.MAX_UPLOAD_BYTES,
    )
    return {"file": FileRead.model_validate(stored)}


@router.get("")
def list_files(
    project_id: Optional[int] = None,
    user: User = Depends(get_current_user),
    files: FileRepository = Depends(get_file_repository),
):
    rows = file_service.list_files(files, user, project_id)
    return {"files": [FileRead.model_validate(f) for f in rows]}


@router.get("/{file_id}")
def download_file(
    stored: StoredFile = Depends(owned_file),
    storage: StorageProvider = Depends(get_file_storage),
):
    content = file_service.read_file_content(storage, stored)
    return Response(
        content=content,
        media_type=stored.mime_type,
        headers={"Content-Disposition": content_disposition(stored.original_name)},
    )


@router.delete(
    "/{file_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(Permission.DELETE_OWN))],
)
def delete_file(
    stored: StoredFile = Depends(owned_file),
    files: FileRepository = Depends(get_file_repository),
    storage: StorageProvider = Depends(get_file_storage),
):
    file_service.delete_file(files, storage, stored)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
