"""
File metadata Repository Interface.
"""

from typing import List, Optional

from buildhub.domain.repositories.base import BaseRepository
from buildhub.domain.models.stored_file import StoredFile


class FileRepository(BaseRepository[StoredFile]):
    """Interface for uploaded file metadata."""

    def list_by_owner(self, owner_id: Optional[str], project_id: Optional[int] = None) -> List[StoredFile]:
        """List files newest first; owner_id None means every owner."""
        ...

    def detach_project(self, project_id: int) -> int:
        """Clear project_id on files linked to a deleted project."""
        ...
