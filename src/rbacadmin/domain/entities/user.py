"""User entity - directory account with roles and direct permissions."""

from dataclasses import dataclass, field
from datetime import datetime

from rbacadmin.domain.entities.permission import Permission
from rbacadmin.domain.entities.role import Role


@dataclass(frozen=True)
class User:
    """User - direct permissions are independent of role membership."""

    id: int
    name: str
    email: str
    roles: tuple[Role, ...] = field(default_factory=tuple)
    permissions: tuple[Permission, ...] = field(default_factory=tuple)
    email_verified_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def has_role(self, role_id: int) -> bool:
        return any(r.id == role_id for r in self.roles)
