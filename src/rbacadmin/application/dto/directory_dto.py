"""Directory DTOs."""

from dataclasses import dataclass, field

from rbacadmin.domain.entities import Permission, Role, User


@dataclass
class UserInput:
    """Input for creating or updating a user."""

    name: str
    email: str
    password: str | None = None
    roles: list[str] = field(default_factory=list)


@dataclass
class RoleInput:
    """Input for creating or updating a role."""

    name: str
    guard_name: str = "web"


@dataclass
class PermissionInput:
    """Input for creating or updating a permission."""

    name: str
    guard_name: str = "web"


@dataclass(frozen=True)
class DirectorySnapshot:
    """Users, roles and permissions fetched together; replaced wholesale on refetch."""

    users: tuple[User, ...]
    roles: tuple[Role, ...]
    permissions: tuple[Permission, ...]
    version: int = 0
