"""Projects API routes — CRUD plus the project's materials and files."""

from fastapi import APIRouter, Depends, Response, status

from buildhub.application.services import file_service, material_service, project_service
from buildhub.application.services.notification_service import NotificationCenter
from buildhub.domain.models.project import Project
from buildhub.domain.models.user import User
from buildhub.domain.repositories.file_repository import FileRepository
from buildhub.domain.repositories.material_repository import MaterialRepository
from buildhub.domain.repositories.project_repository import ProjectRepository
from buildhub.domain.roles import Permission, ResourceType
from buildhub.domain.schemas.file import FileRead
from buildhub.domain.schemas.material import MaterialCreate, MaterialRead
from buildhub.domain.schemas.project import ProjectCreate, ProjectUpdate
from buildhub.interfaces.api.deps import get_current_user, require_ownership, require_permission
from buildhub.interfaces.deps import (
    get_file_repository,
    get_material_repository,
    get_notification_center,
    get_project_repository,
)

router = APIRouter(prefix="/api/projects", tags=["Projects"])

owned_project = require_ownership(ResourceType.PROJECT)


@router.get("")
def list_projects(
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
    materials: MaterialRepository = Depends(get_material_repository),
):
    rows = project_service.list_projects(projects, user)
    return {"projects": [project_service.to_project_read(p, materials) for p in rows]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_project(
    body: ProjectCreate,
    user: User = Depends(require_permission(Permission.WRITE_OWN)),
    projects: ProjectRepository = Depends(get_project_repository),
    materials: MaterialRepository = Depends(get_material_repository),
    notifications: NotificationCenter = Depends(get_notification_center),
):
    project = project_service.create_project(projects, body, user)
    notifications.notify_project_created(user.id, project.name, project.id)
    return {"project": project_service.to_project_read(project, materials)}


@router.get("/{project_id}")
def get_project(
    project: Project = Depends(owned_project),
    materials: MaterialRepository = Depends(get_material_repository),
):
    return {"project": project_service.to_project_read(project, materials)}


@router.put("/{project_id}", dependencies=[Depends(require_permission(Permission.WRITE_OWN))])
def update_project(
    body: ProjectUpdate,
    project: Project = Depends(owned_project),
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
    materials: MaterialRepository = Depends(get_material_repository),
    notifications: NotificationCenter = Depends(get_notification_center),
):
    previous_progress = project.progress
    project = project_service.update_project(projects, project, body)

    if project.progress != previous_progress:
        notifications.notify_project_progress(user.id, project.name, project.progress, project.id)
    else:
        notifications.notify_project_updated(user.id, project.name, project.id)
    return {"project": project_service.to_project_read(project, materials)}


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(Permission.DELETE_OWN))],
)
def delete_project(
    project: Project = Depends(owned_project),
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
    materials: MaterialRepository = Depends(get_material_repository),
    files: FileRepository = Depends(get_file_repository),
    notifications: NotificationCenter = Depends(get_notification_center),
):
    name = project.name
    project_service.delete_project(projects, materials, files, project)
    notifications.notify_project_deleted(user.id, name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{project_id}/materials")
def list_project_materials(
    project: Project = Depends(owned_project),
    materials: MaterialRepository = Depends(get_material_repository),
):
    rows = material_service.list_materials(materials, project)
    return {"materials": [MaterialRead.model_validate(m) for m in rows]}


@router.post(
    "/{project_id}/materials",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Permission.WRITE_OWN))],
)
def create_project_material(
    body: MaterialCreate,
    project: Project = Depends(owned_project),
    user: User = Depends(get_current_user),
    materials: MaterialRepository = Depends(get_material_repository),
    notifications: NotificationCenter = Depends(get_notification_center),
):
    material = material_service.create_material(materials, project, body)
    notifications.notify_material_added(user.id, material.name, project.name, project.id, material.id)
    notifications.notify_stock_status(
        user.id, material.status, material.name, project.name, project.id, material.id,
    )
    return {"material": MaterialRead.model_validate(material)}


@router.get("/{project_id}/files")
def list_project_files(
    project: Project = Depends(owned_project),
    user: User = Depends(get_current_user),
    files: FileRepository = Depends(get_file_repository),
):
    rows = file_service.list_files(files, user, project.id)
    return {"files": [FileRead.model_validate(f) for f in rows]}
