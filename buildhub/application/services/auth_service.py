"""Auth service — credential store, JWT token management and password hashing."""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import structlog
from jose import JWTError, jwt
from passlib.context import CryptContext

from buildhub.config import Settings, get_settings
from buildhub.domain.models.user import User
from buildhub.domain.repositories.user_repository import UserRepository
from buildhub.domain.roles import Role

logger = structlog.get_logger(__name__)


@lru_cache
def _password_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    return _password_context(rounds or get_settings().BCRYPT_ROUNDS).hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # bcrypt hashes carry their own cost, so any context verifies them
    return _password_context(get_settings().BCRYPT_ROUNDS).verify(plain_password, hashed_password)


def initials(name: str) -> str:
    """'Jane van Dyke' -> 'JVD', capped to the avatar column width."""
    return "".join(part[0] for part in name.split()).upper()[:10]


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None,
    settings: Optional[Settings] = None,
) -> str:
    settings = settings or get_settings()
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: Optional[Settings] = None) -> Optional[dict]:
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def issue_token_for(user: User, settings: Optional[Settings] = None) -> str:
    return create_access_token(data={"sub": user.id, "role": user.role}, settings=settings)


def find_user_by_email(users: UserRepository, email: str) -> Optional[User]:
    return users.get_by_email(email)


def find_user_by_id(users: UserRepository, user_id: str) -> Optional[User]:
    return users.get_by_id(user_id)


def authenticate_user(users: UserRepository, email: str, password: str) -> Optional[User]:
    user = users.get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def create_user(
    users: UserRepository,
    name: str,
    email: str,
    password: str,
    role: Role = Role.USER,
    rounds: Optional[int] = None,
) -> Optional[User]:
    """Create a user, or return None when the email is already registered."""
    if users.get_by_email(email) is not None:
        return None

    user = users.create({
        "name": name,
        "email": email,
        "password_hash": hash_password(password, rounds),
        "role": role,
        "avatar": initials(name),
    })
    if user is not None:
        logger.info("User created", user_id=user.id, role=user.role)
    return user


def update_profile(
    users: UserRepository,
    user: User,
    name: Optional[str] = None,
    avatar: Optional[str] = None,
) -> User:
    changes = {}
    if name:
        changes["name"] = name
    if avatar:
        changes["avatar"] = avatar
    if not changes:
        return user
    return users.update(user, changes)


def set_password(users: UserRepository, user: User, new_password: str, rounds: Optional[int] = None) -> User:
    return users.update(user, {"password_hash": hash_password(new_password, rounds)})


def change_password(
    users: UserRepository,
    user: User,
    current_password: str,
    new_password: str,
    rounds: Optional[int] = None,
) -> bool:
    """Replace the password if current_password matches; False otherwise."""
    if not verify_password(current_password, user.password_hash):
        return False
    set_password(users, user, new_password, rounds)
    logger.info("Password changed", user_id=user.id)
    return True


def change_role(users: UserRepository, user: User, role: Role) -> User:
    updated = users.update(user, {"role": role})
    logger.info("User role changed", user_id=user.id, role=role.value)
    return updated


def ensure_default_admin(
    users: UserRepository,
    email: str,
    password: str,
    name: str,
    rounds: Optional[int] = None,
) -> User:
    """Seed the admin account on first start."""
    admin = users.get_by_email(email)
    if admin is None:
        admin = create_user(users, name=name, email=email, password=password, role=Role.ADMIN, rounds=rounds)
        logger.info("Default admin user created", email=email)
    return admin
