"""Project service — ownership-scoped CRUD over construction projects."""

import math
from typing import List, Optional

import structlog

from buildhub.domain.models.project import Project
from buildhub.domain.models.user import User
from buildhub.domain.repositories.file_repository import FileRepository
from buildhub.domain.repositories.material_repository import MaterialRepository
from buildhub.domain.repositories.project_repository import ProjectRepository
from buildhub.domain.roles import is_admin
from buildhub.domain.schemas.material import MaterialRead
from buildhub.domain.schemas.project import (
    ProjectCreate,
    ProjectRead,
    ProjectStatus,
    ProjectUpdate,
    RiskLevel,
)

logger = structlog.get_logger(__name__)

PROJECT_DEFAULTS = {
    "status": ProjectStatus.PLANNING,
    "progress": 0,
    "spent": 0.0,
    "cpi": 1.0,
    "spi": 1.0,
    "quality_score": 0,
    "safety_score": 0,
    "acceptance_criteria_complete": 0,
    "risk_level": RiskLevel.LOW,
}


def budget_utilization(budget: float, spent: float) -> int:
    """Spent as a whole percentage of budget, halves rounded up."""
    if not budget:
        return 0
    return math.floor(spent / budget * 100 + 0.5)


def find_project(projects: ProjectRepository, project_id: int, owner_id: Optional[str]) -> Optional[Project]:
    """Look up a project, scoped to owner_id unless it is None."""
    if owner_id is None:
        return projects.get_by_id(project_id)
    return projects.get_owned(project_id, owner_id)


def get_project(projects: ProjectRepository, project_id: int, user: User) -> Optional[Project]:
    return find_project(projects, project_id, None if is_admin(user.role) else user.id)


def list_projects(projects: ProjectRepository, user: User) -> List[Project]:
    if is_admin(user.role):
        return projects.list_all()
    return projects.list_by_owner(user.id)


def create_project(projects: ProjectRepository, data: ProjectCreate, owner: User) -> Project:
    values = {**PROJECT_DEFAULTS, **data.model_dump(), "user_id": owner.id}
    project = projects.create(values)
    logger.info("Project created", project_id=project.id, user_id=owner.id)
    return project


def update_project(projects: ProjectRepository, project: Project, data: ProjectUpdate) -> Project:
    # Status moves are not constrained; only enum membership is validated
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    return projects.update(project, changes)


def delete_project(
    projects: ProjectRepository,
    materials: MaterialRepository,
    files: FileRepository,
    project: Project,
) -> None:
    project_id = project.id
    removed = materials.delete_by_project(project_id)
    files.detach_project(project_id)
    projects.delete(project_id)
    logger.info("Project deleted", project_id=project_id, materials_removed=removed)


def to_project_read(project: Project, materials: MaterialRepository) -> ProjectRead:
    read = ProjectRead.model_validate(project)
    read.budget_utilization = budget_utilization(project.budget, project.spent)
    read.materials = [MaterialRead.model_validate(m) for m in materials.list_by_project(project.id)]
    return read
