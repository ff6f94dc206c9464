"""Navigation menu filtering - same resolver output as the route gate."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from rbacadmin.domain.services import has_all


@dataclass(frozen=True)
class NavigationEntry:
    """Menu entry guarded by at most one permission."""

    name: str
    href: str
    permission: str | None = None

    @property
    def required(self) -> tuple[str, ...]:
        return (self.permission,) if self.permission is not None else ()


DEFAULT_NAVIGATION: tuple[NavigationEntry, ...] = (
    NavigationEntry(name="Dashboard", href="/dashboard", permission="view dashboard"),
    NavigationEntry(name="Users", href="/dashboard/users", permission="view users"),
    NavigationEntry(name="Roles", href="/dashboard/roles", permission="view roles"),
    NavigationEntry(
        name="Permissions", href="/dashboard/permissions", permission="view permissions"
    ),
    NavigationEntry(name="Settings", href="/dashboard/settings", permission="view settings"),
)


def visible_entries(
    entries: Iterable[NavigationEntry], effective: Iterable[str]
) -> list[NavigationEntry]:
    """Entries the user may see: no requirement, or the requirement is held."""
    granted = frozenset(effective)
    return [entry for entry in entries if has_all(granted, entry.required)]


def required_permissions_for(
    href: str, entries: Sequence[NavigationEntry] = DEFAULT_NAVIGATION
) -> tuple[str, ...]:
    """Requirement of the view behind `href`; unlisted views require nothing."""
    for entry in entries:
        if entry.href == href:
            return entry.required
    return ()
