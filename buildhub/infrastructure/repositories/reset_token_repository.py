"""
SQLAlchemy Implementation of the password reset token Repository.
"""

from datetime import datetime
from typing import Optional

from buildhub.domain.models.password_reset import PasswordResetToken
from buildhub.domain.repositories.reset_token_repository import ResetTokenRepository
from buildhub.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyResetTokenRepository(SQLAlchemyRepository[PasswordResetToken], ResetTokenRepository):

    def get_by_token(self, token: str) -> Optional[PasswordResetToken]:
        return self.db.query(PasswordResetToken).filter(PasswordResetToken.token == token).first()

    def mark_used(self, record: PasswordResetToken, used_at: datetime) -> PasswordResetToken:
        return self.update(record, {"used_at": used_at})
