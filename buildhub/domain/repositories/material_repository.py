"""
Material Repository Interface.
"""

from typing import List

from buildhub.domain.repositories.base import BaseRepository
from buildhub.domain.models.material import Material


class MaterialRepository(BaseRepository[Material]):
    """Interface for Material-specific operations."""

    def list_by_project(self, project_id: int) -> List[Material]:
        """List a project's materials, newest first."""
        ...

    def list_by_owner(self, owner_id: str) -> List[Material]:
        """List materials of every project owned by owner_id."""
        ...

    def list_all(self) -> List[Material]:
        """List every material."""
        ...

    def delete_by_project(self, project_id: int) -> int:
        """Delete a project's materials, returning how many were removed."""
        ...
