"""Roles, permissions and ownership-guarded resource types.

The role table is static and closed: every `Role` maps to an explicitly
enumerated permission set, and an unknown role string raises instead of
falling back to a default set.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    USER = "user"


class Permission(str, Enum):
    READ_ALL = "read:all"
    WRITE_ALL = "write:all"
    DELETE_ALL = "delete:all"
    READ_OWN = "read:own"
    WRITE_OWN = "write:own"
    DELETE_OWN = "delete:own"
    WRITE_PROJECTS = "write:projects"
    WRITE_MATERIALS = "write:materials"
    DELETE_PROJECTS = "delete:projects"
    DELETE_MATERIALS = "delete:materials"
    READ_ANALYTICS = "read:analytics"
    MANAGE_USERS = "manage:users"
    MANAGE_PROJECTS = "manage:projects"
    MANAGE_MATERIALS = "manage:materials"
    MANAGE_ANALYTICS = "manage:analytics"
    MANAGE_SYSTEM = "manage:system"


class ResourceType(str, Enum):
    PROJECT = "project"
    MATERIAL = "material"
    FILE = "file"


ROLE_PERMISSIONS: Mapping[Role, frozenset[Permission]] = MappingProxyType({
    Role.ADMIN: frozenset({
        Permission.READ_ALL,
        Permission.WRITE_ALL,
        Permission.DELETE_ALL,
        Permission.READ_OWN,
        Permission.WRITE_OWN,
        Permission.DELETE_OWN,
        Permission.WRITE_PROJECTS,
        Permission.WRITE_MATERIALS,
        Permission.DELETE_PROJECTS,
        Permission.DELETE_MATERIALS,
        Permission.READ_ANALYTICS,
        Permission.MANAGE_USERS,
        Permission.MANAGE_PROJECTS,
        Permission.MANAGE_MATERIALS,
        Permission.MANAGE_ANALYTICS,
        Permission.MANAGE_SYSTEM,
    }),
    Role.MANAGER: frozenset({
        Permission.READ_ALL,
        Permission.READ_OWN,
        Permission.WRITE_OWN,
        Permission.DELETE_OWN,
        Permission.WRITE_PROJECTS,
        Permission.WRITE_MATERIALS,
        Permission.DELETE_PROJECTS,
        Permission.DELETE_MATERIALS,
        Permission.MANAGE_PROJECTS,
        Permission.MANAGE_MATERIALS,
        Permission.READ_ANALYTICS,
    }),
    Role.USER: frozenset({
        Permission.READ_OWN,
        Permission.WRITE_OWN,
        Permission.DELETE_OWN,
    }),
})


def parse_role(value: "Role | str") -> Role:
    """Coerce a stored role string; raises ValueError for unknown roles."""
    return value if isinstance(value, Role) else Role(value)


def permissions_for(role: "Role | str") -> frozenset[Permission]:
    return ROLE_PERMISSIONS[parse_role(role)]


def has_permission(role: "Role | str", permission: Permission) -> bool:
    return permission in permissions_for(role)


def is_admin(role: "Role | str") -> bool:
    return parse_role(role) is Role.ADMIN
