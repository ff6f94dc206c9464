"""Domain entities."""

from rbacadmin.domain.entities.permission import Permission
from rbacadmin.domain.entities.role import Role
from rbacadmin.domain.entities.user import User

__all__ = [
    "Permission",
    "Role",
    "User",
]
