"""Pydantic schemas for in-app notifications."""

from enum import Enum
from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Notification(BaseModel):
    id: str
    type: NotificationType
    title: str
    message: str
    user_id: str
    project_id: Optional[int] = None
    material_id: Optional[int] = None
    timestamp: datetime
    read: bool = False
