"""Pydantic schemas for Project domain."""

from enum import Enum
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional

from buildhub.domain.schemas.material import MaterialRead


class ProjectStatus(str, Enum):
    PLANNING = "planning"
    ACTIVE = "active"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ProjectCreate(BaseModel):
    name: str = Field(min_length=1)
    budget: float = Field(gt=0)
    client: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    contractor: Optional[str] = None
    team_size: Optional[int] = Field(default=None, gt=0)


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    status: Optional[ProjectStatus] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    budget: Optional[float] = Field(default=None, gt=0)
    spent: Optional[float] = Field(default=None, ge=0)
    cpi: Optional[float] = Field(default=None, gt=0)
    spi: Optional[float] = Field(default=None, gt=0)
    quality_score: Optional[int] = Field(default=None, ge=0, le=100)
    safety_score: Optional[int] = Field(default=None, ge=0, le=100)
    acceptance_criteria_complete: Optional[int] = Field(default=None, ge=0, le=100)
    risk_level: Optional[RiskLevel] = None
    client: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    team_size: Optional[int] = Field(default=None, gt=0)
    contractor: Optional[str] = None


class ProjectRead(BaseModel):
    id: int
    name: str
    status: str
    progress: int
    budget: float
    spent: float
    cpi: float
    spi: float
    quality_score: int
    safety_score: int
    acceptance_criteria_complete: int
    risk_level: str
    client: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    team_size: Optional[int] = None
    contractor: Optional[str] = None
    user_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    budget_utilization: int = 0
    materials: list[MaterialRead] = []

    model_config = {"from_attributes": True}
