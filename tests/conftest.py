"""Pytest fixtures for rbacadmin tests."""

from __future__ import annotations

from dataclasses import replace

import pytest

from rbacadmin.application.dto import (
    AssignmentDiff,
    DirectorySnapshot,
    PermissionInput,
    RoleInput,
    UserInput,
)
from rbacadmin.domain.entities import Permission, Role, User
from rbacadmin.domain.exceptions import NotFound, Unauthenticated


# --- Builders ---


def make_permission(permission_id: int, name: str, guard_name: str = "web") -> Permission:
    return Permission(id=permission_id, name=name, guard_name=guard_name)


def make_role(role_id: int, name: str, *permissions: Permission) -> Role:
    return Role(id=role_id, name=name, permissions=tuple(permissions))


def make_user(
    user_id: int = 1,
    roles: tuple[Role, ...] = (),
    permissions: tuple[Permission, ...] = (),
    name: str = "Admin User",
) -> User:
    return User(
        id=user_id,
        name=name,
        email=f"user{user_id}@example.com",
        roles=tuple(roles),
        permissions=tuple(permissions),
    )


CATALOGUE_NAMES = [
    "view dashboard",
    "view users",
    "create users",
    "edit users",
    "delete users",
    "view roles",
    "create roles",
    "edit roles",
    "delete roles",
    "view permissions",
    "edit permissions",
    "view settings",
]


# --- Fake collaborators ---


class FakeDirectoryClient:
    """In-memory directory. current_user None means no session."""

    def __init__(
        self,
        users: list[User] | None = None,
        roles: list[Role] | None = None,
        permissions: list[Permission] | None = None,
        current_user: User | None = None,
    ) -> None:
        self.users = list(users or [])
        self.roles = list(roles or [])
        self.permissions = list(permissions or [])
        self.current_user = current_user
        self.applied_diffs: list[AssignmentDiff] = []
        self.fail_with: Exception | None = None
        self.closed = False

    async def get_current_user(self) -> User:
        if self.current_user is None:
            raise Unauthenticated("No current user")
        return self.current_user

    async def list_users(self) -> list[User]:
        return list(self.users)

    async def list_roles(self) -> list[Role]:
        return list(self.roles)

    async def list_permissions(self) -> list[Permission]:
        return list(self.permissions)

    async def create_user(self, data: UserInput) -> User:
        user = User(id=len(self.users) + 1, name=data.name, email=data.email)
        self.users.append(user)
        return user

    async def update_user(self, user_id: int, data: UserInput) -> User:
        for i, u in enumerate(self.users):
            if u.id == user_id:
                self.users[i] = replace(u, name=data.name, email=data.email)
                return self.users[i]
        raise NotFound("User", user_id)

    async def delete_user(self, user_id: int) -> None:
        self.users = [u for u in self.users if u.id != user_id]

    async def create_role(self, data: RoleInput) -> Role:
        role = Role(id=len(self.roles) + 1, name=data.name, guard_name=data.guard_name)
        self.roles.append(role)
        return role

    async def update_role(self, role_id: int, data: RoleInput) -> Role:
        for i, r in enumerate(self.roles):
            if r.id == role_id:
                self.roles[i] = replace(r, name=data.name, guard_name=data.guard_name)
                return self.roles[i]
        raise NotFound("Role", role_id)

    async def delete_role(self, role_id: int) -> None:
        self.roles = [r for r in self.roles if r.id != role_id]

    async def create_permission(self, data: PermissionInput) -> Permission:
        permission = Permission(
            id=len(self.permissions) + 1, name=data.name, guard_name=data.guard_name
        )
        self.permissions.append(permission)
        return permission

    async def update_permission(self, permission_id: int, data: PermissionInput) -> Permission:
        for i, p in enumerate(self.permissions):
            if p.id == permission_id:
                self.permissions[i] = replace(p, name=data.name, guard_name=data.guard_name)
                return self.permissions[i]
        raise NotFound("Permission", permission_id)

    async def delete_permission(self, permission_id: int) -> None:
        self.permissions = [p for p in self.permissions if p.id != permission_id]

    async def update_role_permissions(self, diff: AssignmentDiff) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.applied_diffs.append(diff)
        by_id = {p.id: p for p in self.permissions}
        for role_id, (add, revoke) in diff.by_role().items():
            for i, role in enumerate(self.roles):
                if role.id != role_id:
                    continue
                kept = [p for p in role.permissions if p.id not in revoke]
                kept.extend(by_id[pid] for pid in add if pid in by_id)
                self.roles[i] = replace(role, permissions=tuple(kept))

    async def aclose(self) -> None:
        self.closed = True


class RecordingNavigator:
    """Navigator that records redirects."""

    def __init__(self) -> None:
        self.redirects: list[str] = []

    def redirect(self, path: str) -> None:
        self.redirects.append(path)


# --- Fixtures ---


@pytest.fixture
def catalogue() -> list[Permission]:
    """Permission catalogue, ids 1..12."""
    return [make_permission(i, name) for i, name in enumerate(CATALOGUE_NAMES, start=1)]


@pytest.fixture
def roles(catalogue) -> list[Role]:
    """Super Admin (everything), Editor (first six), Viewer (view users/roles/permissions)."""
    by_name = {p.name: p for p in catalogue}
    return [
        make_role(1, "Super Admin", *catalogue),
        make_role(2, "Editor", *catalogue[:6]),
        make_role(
            3,
            "Viewer",
            by_name["view users"],
            by_name["view roles"],
            by_name["view permissions"],
        ),
    ]


@pytest.fixture
def admin_user(roles) -> User:
    return make_user(1, roles=(roles[0],), name="Admin User")


@pytest.fixture
def viewer_user(roles) -> User:
    return make_user(3, roles=(roles[2],), name="Jane Smith")


@pytest.fixture
def snapshot(catalogue, roles, admin_user, viewer_user) -> DirectorySnapshot:
    editor = make_user(2, roles=(roles[1],), name="John Doe")
    return DirectorySnapshot(
        users=(admin_user, editor, viewer_user),
        roles=tuple(roles),
        permissions=tuple(catalogue),
        version=1,
    )


@pytest.fixture
def directory(catalogue, roles, snapshot, admin_user) -> FakeDirectoryClient:
    return FakeDirectoryClient(
        users=list(snapshot.users),
        roles=list(roles),
        permissions=list(catalogue),
        current_user=admin_user,
    )


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def mock_directory_client():
    """AsyncMock DirectoryClient - update_role_permissions succeeds by default."""
    from unittest.mock import AsyncMock

    mock = AsyncMock()
    mock.update_role_permissions.return_value = None
    return mock
