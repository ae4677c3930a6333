"""Pydantic schemas for portfolio analytics."""

from pydantic import BaseModel


class RiskDistribution(BaseModel):
    low: int = 0
    medium: int = 0
    high: int = 0
    total: int = 0


class PortfolioHealth(BaseModel):
    overall: float = 0.0
    on_time: float = 0.0
    on_budget: float = 0.0
    quality: float = 0.0


class PortfolioSummary(BaseModel):
    total_projects: int
    planning_projects: int
    active_projects: int
    completed_projects: int
    on_hold_projects: int
    total_budget: float
    total_spent: float
    budget_utilization: int
    average_budget_variance: float
    average_progress: float
    average_cpi: float
    average_spi: float
    average_quality: float
    average_safety: float
    risk_distribution: RiskDistribution
    health: PortfolioHealth
