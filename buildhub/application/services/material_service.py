"""Material service — stock tracking for project materials."""

from typing import List, Optional

import structlog

from buildhub.domain.models.material import Material
from buildhub.domain.models.project import Project
from buildhub.domain.models.user import User
from buildhub.domain.repositories.material_repository import MaterialRepository
from buildhub.domain.repositories.project_repository import ProjectRepository
from buildhub.domain.roles import is_admin
from buildhub.domain.schemas.material import MaterialCreate, MaterialStatus, MaterialUpdate

logger = structlog.get_logger(__name__)

CRITICAL_STOCK_RATIO = 0.1
LOW_STOCK_RATIO = 0.3


def derive_status(current_stock: int, total_required: int) -> MaterialStatus:
    if total_required <= 0:
        return MaterialStatus.ADEQUATE
    ratio = current_stock / total_required
    if ratio < CRITICAL_STOCK_RATIO:
        return MaterialStatus.CRITICAL
    if ratio < LOW_STOCK_RATIO:
        return MaterialStatus.LOW
    return MaterialStatus.ADEQUATE


def find_material(
    projects: ProjectRepository,
    materials: MaterialRepository,
    material_id: int,
    owner_id: Optional[str],
) -> Optional[Material]:
    """Look up a material; when owner_id is given its project must belong to them."""
    material = materials.get_by_id(material_id)
    if material is None or owner_id is None:
        return material
    if projects.get_owned(material.project_id, owner_id) is None:
        return None
    return material


def list_materials(materials: MaterialRepository, project: Project) -> List[Material]:
    return materials.list_by_project(project.id)


def list_user_materials(materials: MaterialRepository, user: User) -> List[Material]:
    if is_admin(user.role):
        return materials.list_all()
    return materials.list_by_owner(user.id)


def create_material(materials: MaterialRepository, project: Project, data: MaterialCreate) -> Material:
    values = {
        **data.model_dump(),
        "status": derive_status(data.current_stock, data.total_required),
        "project_id": project.id,
    }
    material = materials.create(values)
    logger.info("Material created", material_id=material.id, project_id=project.id, status=material.status)
    return material


def update_material(materials: MaterialRepository, material: Material, data: MaterialUpdate) -> Material:
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "current_stock" in changes or "total_required" in changes:
        changes["status"] = derive_status(
            changes.get("current_stock", material.current_stock),
            changes.get("total_required", material.total_required),
        )
    return materials.update(material, changes)


def delete_material(materials: MaterialRepository, material: Material) -> None:
    material_id, project_id = material.id, material.project_id
    materials.delete(material_id)
    logger.info("Material deleted", material_id=material_id, project_id=project_id)
