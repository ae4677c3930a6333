"""
In-memory implementations of the repository interfaces.

Records are transient instances of the same SQLAlchemy model classes the
database backend uses, so services and schemas see identical objects.
"""

from datetime import datetime, timezone
from typing import Any, Generic, List, Optional, Type, TypeVar

from buildhub.domain.models.material import Material
from buildhub.domain.models.password_reset import PasswordResetToken
from buildhub.domain.models.project import Project
from buildhub.domain.models.stored_file import StoredFile
from buildhub.domain.models.user import User, new_user_id
from buildhub.domain.repositories.base import BaseRepository
from buildhub.domain.repositories.file_repository import FileRepository
from buildhub.domain.repositories.material_repository import MaterialRepository
from buildhub.domain.repositories.project_repository import ProjectRepository
from buildhub.domain.repositories.reset_token_repository import ResetTokenRepository
from buildhub.domain.repositories.user_repository import UserRepository
from buildhub.infrastructure.database import Base
from buildhub.infrastructure.memory.store import InMemoryStore
from buildhub.infrastructure.repositories.base_repository import to_column_values

ModelType = TypeVar("ModelType", bound=Base)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _newest_first(rows: List[Any], attr: str = "created_at") -> List[Any]:
    return sorted(rows, key=lambda r: (getattr(r, attr), r.id), reverse=True)


class InMemoryRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository over one table of an InMemoryStore."""

    def __init__(self, store: InMemoryStore, model: Type[ModelType]):
        self.store = store
        self.model = model
        self.rows = store.table(model.__tablename__)

    def _new_id(self) -> Any:
        return self.store.next_id(self.model.__tablename__)

    def get_by_id(self, id: Any) -> Optional[ModelType]:
        return self.rows.get(id)

    def list(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        return list(self.rows.values())[skip:skip + limit]

    def create(self, obj_in: Any) -> ModelType:
        db_obj = self.model(**to_column_values(obj_in))
        now = _utc_now()
        for stamp in ("created_at", "updated_at"):
            if hasattr(db_obj, stamp) and getattr(db_obj, stamp) is None:
                setattr(db_obj, stamp, now)
        with self.store.lock:
            if db_obj.id is None:
                db_obj.id = self._new_id()
            self.rows[db_obj.id] = db_obj
        return db_obj

    def update(self, db_obj: ModelType, obj_in: Any) -> ModelType:
        with self.store.lock:
            for field, value in to_column_values(obj_in).items():
                if hasattr(db_obj, field):
                    setattr(db_obj, field, value)
            if hasattr(db_obj, "updated_at"):
                db_obj.updated_at = _utc_now()
        return db_obj

    def delete(self, id: Any) -> Optional[ModelType]:
        with self.store.lock:
            return self.rows.pop(id, None)


class InMemoryUserRepository(InMemoryRepository[User], UserRepository):

    def __init__(self, store: InMemoryStore):
        super().__init__(store, User)

    def _new_id(self) -> str:
        return new_user_id()

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.rows.values() if u.email == email), None)

    def list_all(self) -> List[User]:
        return _newest_first(list(self.rows.values()))

    def create(self, obj_in: Any) -> Optional[User]:
        with self.store.lock:
            if self.get_by_email(to_column_values(obj_in).get("email")) is not None:
                return None
            return super().create(obj_in)


class InMemoryProjectRepository(InMemoryRepository[Project], ProjectRepository):

    def __init__(self, store: InMemoryStore):
        super().__init__(store, Project)

    def get_owned(self, id: int, owner_id: str) -> Optional[Project]:
        project = self.rows.get(id)
        if project is None or project.user_id != owner_id:
            return None
        return project

    def list_by_owner(self, owner_id: str) -> List[Project]:
        return _newest_first([p for p in self.rows.values() if p.user_id == owner_id])

    def list_all(self) -> List[Project]:
        return _newest_first(list(self.rows.values()))


class InMemoryMaterialRepository(InMemoryRepository[Material], MaterialRepository):

    def __init__(self, store: InMemoryStore):
        super().__init__(store, Material)

    def list_by_project(self, project_id: int) -> List[Material]:
        return _newest_first([m for m in self.rows.values() if m.project_id == project_id])

    def list_by_owner(self, owner_id: str) -> List[Material]:
        projects = self.store.table(Project.__tablename__)
        owned = {pid for pid, p in projects.items() if p.user_id == owner_id}
        return _newest_first([m for m in self.rows.values() if m.project_id in owned])

    def list_all(self) -> List[Material]:
        return _newest_first(list(self.rows.values()))

    def delete_by_project(self, project_id: int) -> int:
        with self.store.lock:
            doomed = [mid for mid, m in self.rows.items() if m.project_id == project_id]
            for mid in doomed:
                del self.rows[mid]
        return len(doomed)


class InMemoryFileRepository(InMemoryRepository[StoredFile], FileRepository):

    def __init__(self, store: InMemoryStore):
        super().__init__(store, StoredFile)

    def create(self, obj_in: Any) -> StoredFile:
        db_obj = super().create(obj_in)
        if db_obj.uploaded_at is None:
            db_obj.uploaded_at = _utc_now()
        return db_obj

    def list_by_owner(self, owner_id: Optional[str], project_id: Optional[int] = None) -> List[StoredFile]:
        files = [
            f for f in self.rows.values()
            if (owner_id is None or f.user_id == owner_id)
            and (project_id is None or f.project_id == project_id)
        ]
        return sorted(files, key=lambda f: f.uploaded_at, reverse=True)

    def detach_project(self, project_id: int) -> int:
        with self.store.lock:
            linked = [f for f in self.rows.values() if f.project_id == project_id]
            for f in linked:
                f.project_id = None
        return len(linked)


class InMemoryResetTokenRepository(InMemoryRepository[PasswordResetToken], ResetTokenRepository):

    def __init__(self, store: InMemoryStore):
        super().__init__(store, PasswordResetToken)

    def get_by_token(self, token: str) -> Optional[PasswordResetToken]:
        return next((r for r in self.rows.values() if r.token == token), None)

    def mark_used(self, record: PasswordResetToken, used_at: datetime) -> PasswordResetToken:
        return self.update(record, {"used_at": used_at})
