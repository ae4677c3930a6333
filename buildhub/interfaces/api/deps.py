"""FastAPI dependencies — bearer token auth, role/permission gates and the ownership guard.

Request chain: token -> current user (fetched fresh, never cached) ->
role/permission check -> ownership check -> route.
"""

from typing import Any, Callable, Dict, Optional, Tuple

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from buildhub.application.services import file_service, material_service, project_service
from buildhub.application.services.auth_service import decode_access_token, find_user_by_id
from buildhub.config import Settings
from buildhub.core.exceptions import (
    BadRequestException,
    EntityNotFoundException,
    ForbiddenException,
    UnauthorizedException,
)
from buildhub.domain.models.user import User
from buildhub.domain.repositories.user_repository import UserRepository
from buildhub.domain.roles import Permission, ResourceType, Role, is_admin, parse_role, permissions_for
from buildhub.infrastructure.backends import Repositories
from buildhub.interfaces.deps import get_app_settings, get_repositories, get_user_repository

security = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """Extract and validate the user id from the JWT bearer token."""
    if credentials is None:
        raise UnauthorizedException("Access token required")

    payload = decode_access_token(credentials.credentials, settings)
    if payload is None:
        raise UnauthorizedException("Invalid or expired token")

    user_id = payload.get("sub")
    if not user_id:
        raise UnauthorizedException("Invalid token")
    return user_id


def get_current_user(
    user_id: str = Depends(get_current_user_id),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    user = find_user_by_id(users, user_id)
    if user is None:
        raise EntityNotFoundException("User not found")
    return user


def require_role(*allowed_roles: Role) -> Callable[..., User]:
    allowed = frozenset(allowed_roles)

    def _dep(user: User = Depends(get_current_user)) -> User:
        role = parse_role(user.role)
        if role not in allowed:
            raise ForbiddenException(
                "Insufficient permissions",
                details={"required": sorted(r.value for r in allowed), "current": role.value},
            )
        return user

    return _dep


def require_permission(permission: Permission) -> Callable[..., User]:

    def _dep(user: User = Depends(get_current_user)) -> User:
        granted = permissions_for(user.role)
        if permission not in granted:
            raise ForbiddenException(
                "Insufficient permissions",
                details={"required": permission.value, "current": sorted(p.value for p in granted)},
            )
        return user

    return _dep


def _load_project(repos: Repositories, resource_id: int, owner_id: Optional[str]):
    return project_service.find_project(repos.projects, resource_id, owner_id)


def _load_material(repos: Repositories, resource_id: int, owner_id: Optional[str]):
    return material_service.find_material(repos.projects, repos.materials, resource_id, owner_id)


def _load_file(repos: Repositories, resource_id: str, owner_id: Optional[str]):
    return file_service.find_file(repos.files, resource_id, owner_id)


# resource type -> (path parameter, id parser, loader, label)
_OWNED_RESOURCES: Dict[ResourceType, Tuple[str, Callable[[str], Any], Callable, str]] = {
    ResourceType.PROJECT: ("project_id", int, _load_project, "Project"),
    ResourceType.MATERIAL: ("material_id", int, _load_material, "Material"),
    ResourceType.FILE: ("file_id", str, _load_file, "File"),
}


def require_ownership(resource_type: ResourceType) -> Callable[..., Any]:
    """Resolve the addressed resource if the caller owns it or is an admin.

    Someone else's resource is reported as missing (404), not forbidden, so
    its existence is not revealed.
    """
    param, parse_id, load, label = _OWNED_RESOURCES[resource_type]

    def _dep(
        request: Request,
        user: User = Depends(get_current_user),
        repos: Repositories = Depends(get_repositories),
    ) -> Any:
        raw_id = request.path_params.get(param)
        if not raw_id:
            raise BadRequestException(f"Missing {label.lower()} ID")
        try:
            resource_id = parse_id(raw_id)
        except ValueError:
            raise BadRequestException(f"Invalid {label.lower()} ID")

        owner_id = None if is_admin(user.role) else user.id
        resource = load(repos, resource_id, owner_id)
        if resource is None:
            raise EntityNotFoundException(f"{label} not found or access denied")
        return resource

    return _dep
