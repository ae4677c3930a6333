"""Materials API routes — list across projects, update and delete."""

from fastapi import APIRouter, Depends, Response, status

from buildhub.application.services import material_service
from buildhub.application.services.notification_service import NotificationCenter
from buildhub.domain.models.material import Material
from buildhub.domain.models.user import User
from buildhub.domain.repositories.material_repository import MaterialRepository
from buildhub.domain.repositories.project_repository import ProjectRepository
from buildhub.domain.roles import Permission, ResourceType
from buildhub.domain.schemas.material import MaterialRead, MaterialUpdate
from buildhub.interfaces.api.deps import get_current_user, require_ownership, require_permission
from buildhub.interfaces.deps import (
    get_material_repository,
    get_notification_center,
    get_project_repository,
)

router = APIRouter(prefix="/api/materials", tags=["Materials"])

owned_material = require_ownership(ResourceType.MATERIAL)


@router.get("")
def list_materials(
    user: User = Depends(get_current_user),
    materials: MaterialRepository = Depends(get_material_repository),
):
    rows = material_service.list_user_materials(materials, user)
    return {"materials": [MaterialRead.model_validate(m) for m in rows]}


@router.put("/{material_id}", dependencies=[Depends(require_permission(Permission.WRITE_OWN))])
def update_material(
    body: MaterialUpdate,
    material: Material = Depends(owned_material),
    user: User = Depends(get_current_user),
    materials: MaterialRepository = Depends(get_material_repository),
    projects: ProjectRepository = Depends(get_project_repository),
    notifications: NotificationCenter = Depends(get_notification_center),
):
    previous_status = material.status
    material = material_service.update_material(materials, material, body)

    if material.status != previous_status:
        project = projects.get_by_id(material.project_id)
        notifications.notify_stock_status(
            user.id, material.status, material.name,
            project.name if project else "", material.project_id, material.id,
        )
    return {"material": MaterialRead.model_validate(material)}


@router.delete(
    "/{material_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(Permission.DELETE_OWN))],
)
def delete_material(
    material: Material = Depends(owned_material),
    materials: MaterialRepository = Depends(get_material_repository),
):
    material_service.delete_material(materials, material)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
