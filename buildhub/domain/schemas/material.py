"""Pydantic schemas for Material domain."""

from enum import Enum
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class MaterialStatus(str, Enum):
    ADEQUATE = "adequate"
    LOW = "low"
    CRITICAL = "critical"


class MaterialCreate(BaseModel):
    name: str = Field(min_length=1)
    current_stock: int = Field(ge=0)
    total_required: int = Field(gt=0)
    cost: float = Field(gt=0)
    supplier: str = Field(min_length=1)


class MaterialUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    current_stock: Optional[int] = Field(default=None, ge=0)
    total_required: Optional[int] = Field(default=None, gt=0)
    status: Optional[MaterialStatus] = None
    cost: Optional[float] = Field(default=None, gt=0)
    supplier: Optional[str] = Field(default=None, min_length=1)


class MaterialRead(BaseModel):
    id: int
    name: str
    current_stock: int
    total_required: int
    status: str
    cost: float
    supplier: str
    project_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
