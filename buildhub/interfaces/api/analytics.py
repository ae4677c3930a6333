"""Analytics API routes — portfolio aggregates over projects."""

from fastapi import APIRouter, Depends

from buildhub.application.services.analytics_service import portfolio_summary
from buildhub.application.services.project_service import list_projects
from buildhub.domain.models.user import User
from buildhub.domain.repositories.project_repository import ProjectRepository
from buildhub.domain.roles import Role
from buildhub.domain.schemas.analytics import PortfolioSummary
from buildhub.interfaces.api.deps import get_current_user, require_role
from buildhub.interfaces.deps import get_project_repository

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


@router.get("/summary", response_model=PortfolioSummary)
def summary(
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
):
    return portfolio_summary(list_projects(projects, user))


@router.get(
    "/portfolio",
    response_model=PortfolioSummary,
    dependencies=[Depends(require_role(Role.ADMIN, Role.MANAGER))],
)
def portfolio(projects: ProjectRepository = Depends(get_project_repository)):
    return portfolio_summary(projects.list_all())
