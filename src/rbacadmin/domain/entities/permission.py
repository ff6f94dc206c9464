"""Permission entity - a named capability token."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Permission:
    """Permission - name doubles as label and capability token ("view users")."""

    id: int
    name: str
    guard_name: str = "web"
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def category(self) -> str:
        """First whitespace-delimited token of the name."""
        parts = self.name.split(maxsplit=1)
        return parts[0] if parts else ""
