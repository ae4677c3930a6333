"""
User Repository Interface.
"""

from typing import Any, List, Optional

from buildhub.domain.repositories.base import BaseRepository
from buildhub.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by (unique) email."""
        ...

    def list_all(self) -> List[User]:
        """List every account, newest first."""
        ...

    def create(self, obj_in: Any) -> Optional[User]:
        """Create a user; returns None when the email is already taken."""
        ...
