"""Directory client port - remote users/roles/permissions API."""

from typing import Protocol

from rbacadmin.application.dto.assignment_diff import AssignmentDiff
from rbacadmin.application.dto.directory_dto import PermissionInput, RoleInput, UserInput
from rbacadmin.domain.entities import Permission, Role, User


class DirectoryClient(Protocol):
    """Port for the remote RBAC directory.

    get_current_user raises Unauthenticated when there is no session.
    """

    async def get_current_user(self) -> User: ...

    async def list_users(self) -> list[User]: ...

    async def list_roles(self) -> list[Role]: ...

    async def list_permissions(self) -> list[Permission]: ...

    async def create_user(self, data: UserInput) -> User: ...

    async def update_user(self, user_id: int, data: UserInput) -> User: ...

    async def delete_user(self, user_id: int) -> None: ...

    async def create_role(self, data: RoleInput) -> Role: ...

    async def update_role(self, role_id: int, data: RoleInput) -> Role: ...

    async def delete_role(self, role_id: int) -> None: ...

    async def create_permission(self, data: PermissionInput) -> Permission: ...

    async def update_permission(self, permission_id: int, data: PermissionInput) -> Permission: ...

    async def delete_permission(self, permission_id: int) -> None: ...

    async def update_role_permissions(self, diff: AssignmentDiff) -> None: ...
