"""Per-operator assignment matrix sessions."""

import logging
from collections.abc import Iterable

from rbacadmin.application.use_cases.matrix import AssignmentMatrixEditor
from rbacadmin.domain.entities import Permission, Role
from rbacadmin.domain.exceptions import StaleSnapshot

logger = logging.getLogger(__name__)

RoleState = tuple[int, str, str, frozenset[int]]
Basis = tuple[tuple[RoleState, ...], tuple[Permission, ...]]


def _basis(roles: Iterable[Role], permissions: Iterable[Permission]) -> Basis:
    return (
        tuple((r.id, r.name, r.guard_name, r.permission_ids) for r in roles),
        tuple(permissions),
    )


class MatrixSessionStore:
    """One edit session per operator, all versioned against the last fetched snapshot.

    A fetch that differs from the previous one bumps the version; sessions
    opened on an older version are re-based and lose their pending changes.
    Sessions hold no directory client: requests pass their own to save().
    """

    def __init__(self) -> None:
        self._sessions: dict[int, AssignmentMatrixEditor] = {}
        self._basis: Basis | None = None
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    def get(self, user_id: int) -> AssignmentMatrixEditor | None:
        return self._sessions.get(user_id)

    def sync(
        self,
        user_id: int,
        roles: Iterable[Role],
        permissions: Iterable[Permission],
    ) -> tuple[AssignmentMatrixEditor, int]:
        """Open or refresh the operator's session; returns it and the number of discarded changes.

        Raises SaveInProgress when the session is stale but still saving.
        """
        roles = tuple(roles)
        permissions = tuple(permissions)
        basis = _basis(roles, permissions)
        if basis != self._basis:
            self._basis = basis
            self._version += 1

        editor = self._sessions.get(user_id)
        if editor is None:
            editor = AssignmentMatrixEditor(roles, permissions, snapshot_version=self._version)
            self._sessions[user_id] = editor
            return editor, 0

        try:
            editor.ensure_current(self._version)
        except StaleSnapshot:
            discarded = editor.pending_count
            editor.rebase(roles, permissions, snapshot_version=self._version)
            if discarded:
                logger.info(
                    "Matrix session of user %s re-based, %d change(s) discarded",
                    user_id,
                    discarded,
                )
            return editor, discarded
        return editor, 0

    def record_save(self, user_id: int) -> None:
        """Take the operator's saved baseline as the directory state.

        Other sessions become stale; the saving operator's stays current, so
        edits made after the save survive the next refresh.
        """
        editor = self._sessions[user_id]
        self._basis = (
            tuple(
                (r.id, r.name, r.guard_name, editor.baseline_permission_ids(r.id))
                for r in editor.roles
            ),
            editor.permissions,
        )
        self._version += 1
        editor.mark_current(self._version)
