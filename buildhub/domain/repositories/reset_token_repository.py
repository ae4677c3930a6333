"""
Password reset token Repository Interface.
"""

from datetime import datetime
from typing import Optional

from buildhub.domain.repositories.base import BaseRepository
from buildhub.domain.models.password_reset import PasswordResetToken


class ResetTokenRepository(BaseRepository[PasswordResetToken]):
    """Interface for password reset tokens."""

    def get_by_token(self, token: str) -> Optional[PasswordResetToken]:
        ...

    def mark_used(self, record: PasswordResetToken, used_at: datetime) -> PasswordResetToken:
        ...
