"""
SQLAlchemy Implementation of Project Repository.
"""

from typing import List, Optional

from buildhub.domain.models.project import Project
from buildhub.domain.repositories.project_repository import ProjectRepository
from buildhub.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyProjectRepository(SQLAlchemyRepository[Project], ProjectRepository):
    """Project repository implementation using SQLAlchemy."""

    def get_owned(self, id: int, owner_id: str) -> Optional[Project]:
        return (
            self.db.query(Project)
            .filter(Project.id == id, Project.user_id == owner_id)
            .first()
        )

    def list_by_owner(self, owner_id: str) -> List[Project]:
        return (
            self.db.query(Project)
            .filter(Project.user_id == owner_id)
            .order_by(Project.created_at.desc(), Project.id.desc())
            .all()
        )

    def list_all(self) -> List[Project]:
        return self.db.query(Project).order_by(Project.created_at.desc(), Project.id.desc()).all()
