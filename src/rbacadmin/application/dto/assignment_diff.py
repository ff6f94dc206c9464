"""Minimal grant/revoke diff produced by an edit session."""

from collections import defaultdict
from dataclasses import dataclass, field

from rbacadmin.domain.value_objects import AssignmentKey


@dataclass(frozen=True)
class AssignmentDiff:
    """Grants to add and revoke, each sorted by (role_id, permission_id)."""

    add: tuple[AssignmentKey, ...] = field(default_factory=tuple)
    revoke: tuple[AssignmentKey, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.add and not self.revoke

    def __len__(self) -> int:
        return len(self.add) + len(self.revoke)

    def by_role(self) -> dict[int, tuple[list[int], list[int]]]:
        """role_id -> (permission ids to add, permission ids to revoke)."""
        grouped: dict[int, tuple[list[int], list[int]]] = defaultdict(lambda: ([], []))
        for key in self.add:
            grouped[key.role_id][0].append(key.permission_id)
        for key in self.revoke:
            grouped[key.role_id][1].append(key.permission_id)
        return dict(sorted(grouped.items()))
