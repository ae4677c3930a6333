"""Material domain model — maps to the 'materials' table."""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.sql import func

from buildhub.infrastructure.database import Base


class Material(Base):
    __tablename__ = "materials"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    current_stock = Column(Integer, nullable=False, default=0)
    total_required = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="adequate")  # adequate, low, critical
    cost = Column(Float, nullable=False)
    supplier = Column(String(255), nullable=False)

    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Material {self.id} - {self.name}>"
