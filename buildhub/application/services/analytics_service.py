"""Analytics service — aggregate portfolio statistics over projects."""

from collections import Counter
from typing import Sequence

from buildhub.application.services.project_service import budget_utilization
from buildhub.domain.models.project import Project
from buildhub.domain.schemas.analytics import PortfolioHealth, PortfolioSummary, RiskDistribution
from buildhub.domain.schemas.project import ProjectStatus

ON_TRACK_INDEX = 0.95
QUALITY_THRESHOLD = 80


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return round(sum(values) / len(values), 2)


def _share(count: int, total: int) -> float:
    return round(count / total, 4) if total else 0.0


def risk_distribution(projects: Sequence[Project]) -> RiskDistribution:
    counts = Counter(p.risk_level for p in projects)
    return RiskDistribution(
        low=counts.get("low", 0),
        medium=counts.get("medium", 0),
        high=counts.get("high", 0),
        total=len(projects),
    )


def portfolio_health(projects: Sequence[Project]) -> PortfolioHealth:
    total = len(projects)
    on_time = sum(1 for p in projects if p.spi >= ON_TRACK_INDEX)
    on_budget = sum(1 for p in projects if p.cpi >= ON_TRACK_INDEX)
    quality = sum(1 for p in projects if p.quality_score >= QUALITY_THRESHOLD)
    return PortfolioHealth(
        overall=_share(on_time + on_budget + quality, total * 3),
        on_time=_share(on_time, total),
        on_budget=_share(on_budget, total),
        quality=_share(quality, total),
    )


def portfolio_summary(projects: Sequence[Project]) -> PortfolioSummary:
    statuses = Counter(p.status for p in projects)
    total_budget = sum(p.budget for p in projects)
    total_spent = sum(p.spent for p in projects)

    return PortfolioSummary(
        total_projects=len(projects),
        planning_projects=statuses.get(ProjectStatus.PLANNING.value, 0),
        active_projects=statuses.get(ProjectStatus.ACTIVE.value, 0),
        completed_projects=statuses.get(ProjectStatus.COMPLETED.value, 0),
        on_hold_projects=statuses.get(ProjectStatus.ON_HOLD.value, 0),
        total_budget=total_budget,
        total_spent=total_spent,
        budget_utilization=budget_utilization(total_budget, total_spent),
        average_budget_variance=_mean([p.spent - p.budget for p in projects]),
        average_progress=_mean([p.progress for p in projects]),
        average_cpi=_mean([p.cpi for p in projects]),
        average_spi=_mean([p.spi for p in projects]),
        average_quality=_mean([p.quality_score for p in projects]),
        average_safety=_mean([p.safety_score for p in projects]),
        risk_distribution=risk_distribution(projects),
        health=portfolio_health(projects),
    )
