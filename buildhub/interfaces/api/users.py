"""User administration routes — listing accounts and assigning roles."""

from fastapi import APIRouter, Depends

from buildhub.application.services.auth_service import change_role, find_user_by_id
from buildhub.core.exceptions import EntityNotFoundException
from buildhub.domain.repositories.user_repository import UserRepository
from buildhub.domain.roles import Permission
from buildhub.domain.schemas.auth import RoleUpdate, UserRead
from buildhub.interfaces.api.deps import require_permission
from buildhub.interfaces.deps import get_user_repository

router = APIRouter(
    prefix="/api/users",
    tags=["Users"],
    dependencies=[Depends(require_permission(Permission.MANAGE_USERS))],
)


@router.get("")
def list_users(users: UserRepository = Depends(get_user_repository)):
    return {"users": [UserRead.model_validate(u) for u in users.list_all()]}


@router.patch("/{user_id}/role")
def update_role(
    user_id: str,
    body: RoleUpdate,
    users: UserRepository = Depends(get_user_repository),
):
    user = find_user_by_id(users, user_id)
    if user is None:
        raise EntityNotFoundException("User not found")
    return {"user": UserRead.model_validate(change_role(users, user, body.role))}
