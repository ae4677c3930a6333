"""Project domain model — maps to the 'projects' table."""

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey
from sqlalchemy.sql import func

from buildhub.infrastructure.database import Base


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default="planning")  # planning, active, completed, on_hold
    progress = Column(Integer, nullable=False, default=0)
    budget = Column(Float, nullable=False)
    spent = Column(Float, nullable=False, default=0)

    # Earned value indices and scores
    cpi = Column(Float, nullable=False, default=1.0)
    spi = Column(Float, nullable=False, default=1.0)
    quality_score = Column(Integer, nullable=False, default=0)
    safety_score = Column(Integer, nullable=False, default=0)
    acceptance_criteria_complete = Column(Integer, nullable=False, default=0)
    risk_level = Column(String(20), nullable=False, default="low")  # low, medium, high

    # Descriptive
    client = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    team_size = Column(Integer, nullable=True)
    contractor = Column(String(255), nullable=True)

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Project {self.id} - {self.name}>"
