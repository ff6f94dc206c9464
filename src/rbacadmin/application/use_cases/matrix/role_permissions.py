"""Single-role permissions editor."""

from collections.abc import Iterable

from rbacadmin.application.dto import AssignmentDiff
from rbacadmin.application.ports import DirectoryClient
from rbacadmin.application.use_cases.matrix.assignment_matrix import AssignmentMatrixEditor
from rbacadmin.domain.entities import Permission, Role


class RolePermissionsEditor:
    """Edit the permissions of one role; a one-column assignment matrix."""

    def __init__(
        self,
        role: Role,
        permissions: Iterable[Permission],
        directory_client: DirectoryClient,
    ) -> None:
        self._role = role
        self._matrix = AssignmentMatrixEditor([role], permissions, directory_client)

    @property
    def role(self) -> Role:
        return self._role

    @property
    def selected(self) -> frozenset[int]:
        """Permission ids the role will hold after save."""
        return frozenset(
            p.id for p in self._matrix.permissions if self._matrix.is_granted(self._role.id, p.id)
        )

    @property
    def has_unsaved_changes(self) -> bool:
        return self._matrix.has_unsaved_changes

    def is_selected(self, permission_id: int) -> bool:
        return self._matrix.is_granted(self._role.id, permission_id)

    def toggle(self, permission_id: int) -> bool:
        return self._matrix.toggle(self._role.id, permission_id)

    def filter(self, search_term: str = "") -> tuple[Permission, ...]:
        return self._matrix.filter(search_term)

    def grouped(self, search_term: str = "") -> dict[str, list[Permission]]:
        return self._matrix.grouped(search_term)

    def summary(self, limit: int = 5) -> tuple[tuple[Permission, ...], int]:
        """First `limit` selected permissions and how many more are selected."""
        selected = [p for p in self._matrix.permissions if self.is_selected(p.id)]
        return tuple(selected[:limit]), max(len(selected) - limit, 0)

    def cancel(self) -> None:
        self._matrix.cancel()

    async def save(self, directory_client: DirectoryClient | None = None) -> AssignmentDiff:
        return await self._matrix.save(directory_client)
