"""
Persistence backends.

A backend hands out a `Repositories` bundle per request. The database
backend opens one SQLAlchemy session per bundle; the memory backend serves
every bundle from the same InMemoryStore.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol

import structlog
from sqlalchemy.engine import Engine

from buildhub.config import Settings
from buildhub.domain.models.material import Material
from buildhub.domain.models.password_reset import PasswordResetToken
from buildhub.domain.models.project import Project
from buildhub.domain.models.stored_file import StoredFile
from buildhub.domain.models.user import User
from buildhub.domain.repositories.file_repository import FileRepository
from buildhub.domain.repositories.material_repository import MaterialRepository
from buildhub.domain.repositories.project_repository import ProjectRepository
from buildhub.domain.repositories.reset_token_repository import ResetTokenRepository
from buildhub.domain.repositories.user_repository import UserRepository
from buildhub.infrastructure.database import Base, create_db_engine, create_session_factory
from buildhub.infrastructure.memory.repositories import (
    InMemoryFileRepository,
    InMemoryMaterialRepository,
    InMemoryProjectRepository,
    InMemoryResetTokenRepository,
    InMemoryUserRepository,
)
from buildhub.infrastructure.memory.store import InMemoryStore
from buildhub.infrastructure.repositories.file_repository import SQLAlchemyFileRepository
from buildhub.infrastructure.repositories.material_repository import SQLAlchemyMaterialRepository
from buildhub.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository
from buildhub.infrastructure.repositories.reset_token_repository import SQLAlchemyResetTokenRepository
from buildhub.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

logger = structlog.get_logger(__name__)


@dataclass
class Repositories:
    users: UserRepository
    projects: ProjectRepository
    materials: MaterialRepository
    files: FileRepository
    reset_tokens: ResetTokenRepository


class Backend(Protocol):
    name: str

    def init(self) -> None:
        ...

    def repositories(self):
        """Context manager yielding a Repositories bundle."""
        ...

    def dispose(self) -> None:
        ...


class SQLAlchemyBackend:
    name = "database"

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = create_session_factory(engine)

    def init(self) -> None:
        # Dev convenience; production schemas are managed by migrations
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created/verified")

    @contextmanager
    def repositories(self) -> Iterator[Repositories]:
        db = self.session_factory()
        try:
            yield Repositories(
                users=SQLAlchemyUserRepository(db, User),
                projects=SQLAlchemyProjectRepository(db, Project),
                materials=SQLAlchemyMaterialRepository(db, Material),
                files=SQLAlchemyFileRepository(db, StoredFile),
                reset_tokens=SQLAlchemyResetTokenRepository(db, PasswordResetToken),
            )
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


class MemoryBackend:
    name = "memory"

    def __init__(self, store: Optional[InMemoryStore] = None):
        self.store = store or InMemoryStore()

    def init(self) -> None:
        logger.warning("DATABASE_URL not configured, using in-memory fallback store")

    @contextmanager
    def repositories(self) -> Iterator[Repositories]:
        yield Repositories(
            users=InMemoryUserRepository(self.store),
            projects=InMemoryProjectRepository(self.store),
            materials=InMemoryMaterialRepository(self.store),
            files=InMemoryFileRepository(self.store),
            reset_tokens=InMemoryResetTokenRepository(self.store),
        )

    def dispose(self) -> None:
        pass


def build_backend(settings: Settings) -> Backend:
    """Pick the database backend when credentials are configured, memory otherwise."""
    if settings.use_database:
        return SQLAlchemyBackend(create_db_engine(settings.DATABASE_URL))
    return MemoryBackend()
