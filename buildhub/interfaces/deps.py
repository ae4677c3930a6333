"""
API Dependencies.
"""

from typing import Generator

from fastapi import Depends, Request

from buildhub.application.services.notification_service import NotificationCenter
from buildhub.config import Settings
from buildhub.domain.repositories.file_repository import FileRepository
from buildhub.domain.repositories.material_repository import MaterialRepository
from buildhub.domain.repositories.project_repository import ProjectRepository
from buildhub.domain.repositories.reset_token_repository import ResetTokenRepository
from buildhub.domain.repositories.user_repository import UserRepository
from buildhub.infrastructure.backends import Repositories
from buildhub.infrastructure.file_storage import StorageProvider


def get_repositories(request: Request) -> Generator[Repositories, None, None]:
    """One repository bundle (one DB session) per request."""
    with request.app.state.backend.repositories() as repos:
        yield repos


def get_user_repository(repos: Repositories = Depends(get_repositories)) -> UserRepository:
    return repos.users


def get_project_repository(repos: Repositories = Depends(get_repositories)) -> ProjectRepository:
    return repos.projects


def get_material_repository(repos: Repositories = Depends(get_repositories)) -> MaterialRepository:
    return repos.materials


def get_file_repository(repos: Repositories = Depends(get_repositories)) -> FileRepository:
    return repos.files


def get_reset_token_repository(repos: Repositories = Depends(get_repositories)) -> ResetTokenRepository:
    return repos.reset_tokens


def get_file_storage(request: Request) -> StorageProvider:
    return request.app.state.file_storage


def get_notification_center(request: Request) -> NotificationCenter:
    return request.app.state.notifications


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
