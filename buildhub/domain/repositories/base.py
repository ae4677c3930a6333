"""
Base Repository Interface.

Both persistence backends (SQLAlchemy and the in-memory fallback store)
implement this contract with the same observable behaviour: writes are
visible to the next call immediately, ids are assigned on create, and
timestamps are filled in by the backend.
"""

from typing import TypeVar, List, Optional, Any, Protocol

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic CRUD operations."""

    def get_by_id(self, id: Any) -> Optional[T]:
        ...

    def list(self, skip: int = 0, limit: int = 100) -> List[T]:
        """Rows in storage order; callers needing recency use the list_by_* queries."""
        ...

    def create(self, obj_in: Any) -> T:
        """Insert from a pydantic model or a dict of column values (enums stored by value)."""
        ...

    def update(self, db_obj: T, obj_in: Any) -> T:
        """Apply the given columns to db_obj and persist; unknown keys are ignored."""
        ...

    def delete(self, id: Any) -> Optional[T]:
        """Remove by id; returns the removed row, or None when nothing matched."""
        ...
