"""Dashboard statistics DTOs."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RoleShare:
    """Number of users holding a role."""

    role_id: int
    name: str
    count: int


@dataclass(frozen=True)
class DashboardStats:
    """Directory totals and user distribution across roles."""

    total_users: int
    total_roles: int
    total_permissions: int
    role_distribution: tuple[RoleShare, ...] = field(default_factory=tuple)

    def nonzero_role_distribution(self) -> tuple[RoleShare, ...]:
        return tuple(share for share in self.role_distribution if share.count > 0)
