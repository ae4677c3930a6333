"""
SQLAlchemy Implementation of User Repository.
"""

from typing import Any, List, Optional

import structlog
from sqlalchemy.exc import IntegrityError

from buildhub.domain.models.user import User
from buildhub.domain.repositories.user_repository import UserRepository
from buildhub.infrastructure.repositories.base_repository import SQLAlchemyRepository

logger = structlog.get_logger(__name__)


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def list_all(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

    def create(self, obj_in: Any) -> Optional[User]:
        try:
            return super().create(obj_in)
        except IntegrityError:
            self.db.rollback()
            logger.warning("User insert rejected by unique constraint")
            return None
