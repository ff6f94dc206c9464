"""Role entity for RBAC."""

from dataclasses import dataclass, field
from datetime import datetime

from rbacadmin.domain.entities.permission import Permission


@dataclass(frozen=True)
class Role:
    """Role - named bundle of permissions within a guard."""

    id: int
    name: str
    guard_name: str = "web"
    permissions: tuple[Permission, ...] = field(default_factory=tuple)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def permission_ids(self) -> frozenset[int]:
        return frozenset(p.id for p in self.permissions)

    @property
    def permission_names(self) -> frozenset[str]:
        return frozenset(p.name for p in self.permissions)
