"""Pydantic schemas for uploaded files."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class FileRead(BaseModel):
    id: str
    original_name: str
    mime_type: str
    size: int
    url: str
    user_id: str
    project_id: Optional[int] = None
    uploaded_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
