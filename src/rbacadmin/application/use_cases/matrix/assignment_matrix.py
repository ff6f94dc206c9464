"""Assignment matrix editor - bulk edit of role/permission grants.

Toggles are kept as pending changes against the baseline the session was
opened with; nothing is written until save(). A pending entry whose target
equals the baseline is dropped, so the pending map only ever holds real
changes.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from rbacadmin.application.dto import AssignmentDiff
from rbacadmin.application.ports import DirectoryClient
from rbacadmin.domain.entities import Permission, Role
from rbacadmin.domain.exceptions import NotFound, SaveFailed, SaveInProgress, StaleSnapshot
from rbacadmin.domain.services import group_by_category
from rbacadmin.domain.value_objects import AssignmentKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatrixCell:
    """One (role, permission) checkbox."""

    role_id: int
    permission_id: int
    granted: bool
    pending: bool


@dataclass(frozen=True)
class MatrixRow:
    """Permission row with one cell per role."""

    category: str
    permission: Permission
    cells: tuple[MatrixCell, ...]


def filter_permissions(
    permissions: Iterable[Permission], search_term: str = ""
) -> tuple[Permission, ...]:
    """Permissions whose name contains the term, case-insensitively."""
    term = search_term.lower()
    return tuple(p for p in permissions if term in p.name.lower())


class AssignmentMatrixEditor:
    """Edit session over every role x permission pair.

    One instance models one operator's view and is not safe to share
    between concurrent sessions. Without a bound `directory_client` every
    save() must be given one.
    """

    def __init__(
        self,
        roles: Iterable[Role],
        permissions: Iterable[Permission],
        directory_client: DirectoryClient | None = None,
        snapshot_version: int = 0,
    ) -> None:
        self._client = directory_client
        self._changes: dict[AssignmentKey, bool] = {}
        self._saving = False
        self._load(roles, permissions, snapshot_version)

    def _load(
        self, roles: Iterable[Role], permissions: Iterable[Permission], version: int
    ) -> None:
        self._roles = tuple(roles)
        self._permissions = tuple(permissions)
        self._baseline: dict[int, set[int]] = {r.id: set(r.permission_ids) for r in self._roles}
        self._permission_ids = frozenset(p.id for p in self._permissions)
        self._version = version

    # --- snapshot ---

    @property
    def roles(self) -> tuple[Role, ...]:
        return self._roles

    @property
    def permissions(self) -> tuple[Permission, ...]:
        return self._permissions

    @property
    def snapshot_version(self) -> int:
        return self._version

    def rebase(
        self, roles: Iterable[Role], permissions: Iterable[Permission], snapshot_version: int
    ) -> None:
        """Adopt a refetched snapshot. Pending changes are discarded.

        Refused with SaveInProgress while a save is running.
        """
        if self._saving:
            raise SaveInProgress("Cannot rebase while a save is running")
        if self._changes:
            logger.info("Discarding %d pending change(s) on rebase", len(self._changes))
        self._changes.clear()
        self._load(roles, permissions, snapshot_version)

    def ensure_current(self, snapshot_version: int) -> None:
        """Raise StaleSnapshot if the directory was refetched since the session opened."""
        if snapshot_version != self._version:
            raise StaleSnapshot(
                f"Edit session based on snapshot {self._version}, current is {snapshot_version}"
            )

    def mark_current(self, snapshot_version: int) -> None:
        """Declare the session current for `snapshot_version` without touching any state."""
        self._version = snapshot_version

    # --- cell state ---

    def _baseline_granted(self, key: AssignmentKey) -> bool:
        return key.permission_id in self._baseline.get(key.role_id, ())

    def baseline_permission_ids(self, role_id: int) -> frozenset[int]:
        """Saved grants of a role, including the ones folded in by save()."""
        return frozenset(self._baseline.get(role_id, ()))

    def _require_cell(self, role_id: int, permission_id: int) -> AssignmentKey:
        if role_id not in self._baseline:
            raise NotFound("Role", role_id)
        if permission_id not in self._permission_ids:
            raise NotFound("Permission", permission_id)
        return AssignmentKey(role_id, permission_id)

    def is_granted(self, role_id: int, permission_id: int) -> bool:
        """Pending target if the cell was changed, else baseline membership."""
        key = AssignmentKey(role_id, permission_id)
        if key in self._changes:
            return self._changes[key]
        return self._baseline_granted(key)

    def is_pending(self, role_id: int, permission_id: int) -> bool:
        key = AssignmentKey(role_id, permission_id)
        return key in self._changes and self._changes[key] != self._baseline_granted(key)

    def set_granted(self, role_id: int, permission_id: int, granted: bool) -> None:
        key = self._require_cell(role_id, permission_id)
        # While saving the baseline is about to move; keep the target so
        # _apply can judge it against the new baseline.
        if granted == self._baseline_granted(key) and not self._saving:
            self._changes.pop(key, None)
        else:
            self._changes[key] = granted

    def toggle(self, role_id: int, permission_id: int) -> bool:
        """Flip the cell's effective state; returns the new state."""
        granted = not self.is_granted(role_id, permission_id)
        self.set_granted(role_id, permission_id, granted)
        return granted

    # --- pending changes ---

    def _material_changes(self) -> dict[AssignmentKey, bool]:
        return {
            key: target
            for key, target in self._changes.items()
            if target != self._baseline_granted(key)
        }

    @property
    def pending_changes(self) -> dict[AssignmentKey, bool]:
        return self._material_changes()

    @property
    def pending_count(self) -> int:
        return len(self._material_changes())

    @property
    def has_unsaved_changes(self) -> bool:
        return self.pending_count > 0

    @property
    def is_saving(self) -> bool:
        return self._saving

    def compute_diff(self) -> AssignmentDiff:
        """Minimal set of grants to add and revoke."""
        changes = self._material_changes()
        return AssignmentDiff(
            add=tuple(sorted(k for k, target in changes.items() if target)),
            revoke=tuple(sorted(k for k, target in changes.items() if not target)),
        )

    def cancel(self) -> None:
        self._changes.clear()

    async def save(self, directory_client: DirectoryClient | None = None) -> AssignmentDiff:
        """Submit the diff; on success fold it into the baseline.

        `directory_client` overrides the client bound at construction.

        On failure the pending changes are kept and SaveFailed is raised
        with the collaborator's error as its cause. No retry.
        """
        if self._saving:
            raise SaveInProgress("A save is already running for this session")

        diff = self.compute_diff()
        if diff.is_empty:
            self._changes.clear()
            return diff

        client = directory_client if directory_client is not None else self._client
        if client is None:
            raise ValueError("No directory client to save with")
        self._saving = True
        try:
            await client.update_role_permissions(diff)
        except Exception as e:
            logger.warning("Saving %d assignment change(s) failed: %s", len(diff), e)
            self._changes = self._material_changes()
            raise SaveFailed("Failed to update role permissions") from e
        finally:
            self._saving = False

        self._apply(diff)
        logger.info(
            "Saved role permissions: %d granted, %d revoked", len(diff.add), len(diff.revoke)
        )
        return diff

    def _apply(self, diff: AssignmentDiff) -> None:
        for key in diff.add:
            self._baseline.setdefault(key.role_id, set()).add(key.permission_id)
        for key in diff.revoke:
            self._baseline.get(key.role_id, set()).discard(key.permission_id)
        # Toggles made while the save was in flight stay pending.
        self._changes = self._material_changes()

    # --- view ---

    def filter(self, search_term: str = "") -> tuple[Permission, ...]:
        """Visible permissions; filtering never touches pending changes."""
        return filter_permissions(self._permissions, search_term)

    def grouped(self, search_term: str = "") -> dict[str, list[Permission]]:
        return group_by_category(self.filter(search_term))

    def rows(self, search_term: str = "") -> list[MatrixRow]:
        """Rows in category order, one cell per role."""
        rows = []
        for category, permissions in self.grouped(search_term).items():
            for permission in permissions:
                cells = tuple(
                    MatrixCell(
                        role_id=role.id,
                        permission_id=permission.id,
                        granted=self.is_granted(role.id, permission.id),
                        pending=self.is_pending(role.id, permission.id),
                    )
                    for role in self._roles
                )
                rows.append(MatrixRow(category=category, permission=permission, cells=cells))
        return rows
