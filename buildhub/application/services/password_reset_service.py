"""Password reset flow — single-use tokens with a fixed lifetime."""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog

from buildhub.application.services.auth_service import set_password
from buildhub.config import Settings, get_settings
from buildhub.domain.models.password_reset import PasswordResetToken
from buildhub.domain.repositories.reset_token_repository import ResetTokenRepository
from buildhub.domain.repositories.user_repository import UserRepository

logger = structlog.get_logger(__name__)


def _as_utc(moment: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def reset_token_ttl(settings: Optional[Settings] = None) -> timedelta:
    return timedelta(minutes=(settings or get_settings()).RESET_TOKEN_TTL_MINUTES)


def issue_reset_token(
    users: UserRepository,
    tokens: ResetTokenRepository,
    email: str,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
) -> Optional[str]:
    """Create a reset token for email; None if no such account exists."""
    settings = settings or get_settings()
    user = users.get_by_email(email)
    if user is None:
        return None

    now = now or datetime.now(timezone.utc)
    token = secrets.token_urlsafe(32)
    tokens.create({
        "token": token,
        "user_id": user.id,
        "expires_at": now + reset_token_ttl(settings),
    })
    logger.info("Password reset token issued", user_id=user.id)
    if settings.ENVIRONMENT == "development":
        logger.info("Password reset link", link=f"{settings.FRONTEND_URL}/reset-password?token={token}")
    return token


def find_valid_reset_token(
    tokens: ResetTokenRepository,
    token: str,
    now: Optional[datetime] = None,
) -> Optional[PasswordResetToken]:
    """The unexpired, unused record for token, or None."""
    record = tokens.get_by_token(token)
    if record is None or record.used_at is not None:
        return None
    now = now or datetime.now(timezone.utc)
    if now >= _as_utc(record.expires_at):
        return None
    return record


def reset_password(
    users: UserRepository,
    tokens: ResetTokenRepository,
    token: str,
    new_password: str,
    now: Optional[datetime] = None,
    rounds: Optional[int] = None,
) -> bool:
    now = now or datetime.now(timezone.utc)
    record = find_valid_reset_token(tokens, token, now)
    if record is None:
        return False

    user = users.get_by_id(record.user_id)
    if user is None:
        return False

    set_password(users, user, new_password, rounds)
    tokens.mark_used(record, now)
    logger.info("Password reset completed", user_id=user.id)
    return True
