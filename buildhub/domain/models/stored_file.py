"""Uploaded file metadata — the bytes live in the storage provider."""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey

from buildhub.infrastructure.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StoredFile(Base):
    __tablename__ = "files"

    id = Column(String(36), primary_key=True)
    original_name = Column(String(500), nullable=False)
    storage_key = Column(String(500), nullable=False)
    mime_type = Column(String(200), nullable=False)
    size = Column(Integer, nullable=False)
    url = Column(String(500), nullable=False)

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True, index=True)
    uploaded_at = Column(DateTime(timezone=True), default=utc_now)

    def __repr__(self):
        return f"<StoredFile {self.original_name} - {self.size} bytes>"
