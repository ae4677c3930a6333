"""
Project Repository Interface.
"""

from typing import List, Optional

from buildhub.domain.repositories.base import BaseRepository
from buildhub.domain.models.project import Project


class ProjectRepository(BaseRepository[Project]):
    """Interface for Project-specific operations."""

    def get_owned(self, id: int, owner_id: str) -> Optional[Project]:
        """Get a project only if it belongs to owner_id."""
        ...

    def list_by_owner(self, owner_id: str) -> List[Project]:
        """List a user's projects, newest first."""
        ...

    def list_all(self) -> List[Project]:
        """List every project, newest first."""
        ...
