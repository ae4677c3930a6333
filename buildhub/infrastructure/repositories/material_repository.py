"""
SQLAlchemy Implementation of Material Repository.
"""

from typing import List

from buildhub.domain.models.material import Material
from buildhub.domain.models.project import Project
from buildhub.domain.repositories.material_repository import MaterialRepository
from buildhub.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyMaterialRepository(SQLAlchemyRepository[Material], MaterialRepository):
    """Material repository implementation using SQLAlchemy."""

    def list_by_project(self, project_id: int) -> List[Material]:
        return (
            self.db.query(Material)
            .filter(Material.project_id == project_id)
            .order_by(Material.created_at.desc(), Material.id.desc())
            .all()
        )

    def list_by_owner(self, owner_id: str) -> List[Material]:
        return (
            self.db.query(Material)
            .join(Project, Project.id == Material.project_id)
            .filter(Project.user_id == owner_id)
            .order_by(Material.created_at.desc(), Material.id.desc())
            .all()
        )

    def list_all(self) -> List[Material]:
        return self.db.query(Material).order_by(Material.created_at.desc(), Material.id.desc()).all()

    def delete_by_project(self, project_id: int) -> int:
        deleted = (
            self.db.query(Material)
            .filter(Material.project_id == project_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted
