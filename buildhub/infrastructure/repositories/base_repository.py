"""
SQLAlchemy implementation of the Base Repository.
"""

from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session
from buildhub.domain.repositories.base import BaseRepository
from buildhub.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)


def to_column_values(obj_in: Any) -> Dict[str, Any]:
    """Turn a pydantic model or dict into plain column values."""
    if hasattr(obj_in, "model_dump"):
        data = obj_in.model_dump(exclude_unset=True)
    else:
        data = dict(obj_in)
    return {key: value.value if isinstance(value, Enum) else value for key, value in data.items()}


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, id: Any) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def list(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        return self.db.query(self.model).offset(skip).limit(limit).all()

    def create(self, obj_in: Any) -> ModelType:
        db_obj = self.model(**to_column_values(obj_in))
        self.db.add(db_obj)
        self.db.commit()
        self.db.refresh(db_obj)
        return db_obj

    def update(self, db_obj: ModelType, obj_in: Any) -> ModelType:
        for field, value in to_column_values(obj_in).items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        self.db.add(db_obj)
        self.db.commit()
        self.db.refresh(db_obj)
        return db_obj

    def delete(self, id: Any) -> Optional[ModelType]:
        obj = self.db.get(self.model, id)
        if obj:
            self.db.delete(obj)
            self.db.commit()
        return obj
