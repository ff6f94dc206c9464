"""Role/permission pair addressing a matrix cell."""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class AssignmentKey:
    """(role, permission) grant."""

    role_id: int
    permission_id: int

    def __str__(self) -> str:
        return f"{self.role_id}-{self.permission_id}"
