"""
SQLAlchemy Implementation of File Repository.
"""

from typing import List, Optional

from buildhub.domain.models.stored_file import StoredFile
from buildhub.domain.repositories.file_repository import FileRepository
from buildhub.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyFileRepository(SQLAlchemyRepository[StoredFile], FileRepository):
    """File metadata repository implementation using SQLAlchemy."""

    def list_by_owner(self, owner_id: Optional[str], project_id: Optional[int] = None) -> List[StoredFile]:
        query = self.db.query(StoredFile)
        if owner_id is not None:
            query = query.filter(StoredFile.user_id == owner_id)
        if project_id is not None:
            query = query.filter(StoredFile.project_id == project_id)
        return query.order_by(StoredFile.uploaded_at.desc()).all()

    def detach_project(self, project_id: int) -> int:
        updated = (
            self.db.query(StoredFile)
            .filter(StoredFile.project_id == project_id)
            .update({StoredFile.project_id: None}, synchronize_session=False)
        )
        self.db.commit()
        return updated
