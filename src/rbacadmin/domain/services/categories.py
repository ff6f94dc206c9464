"""Display grouping of permissions by the first token of their name."""

from collections.abc import Iterable

from rbacadmin.domain.entities import Permission


def permission_category(name: str) -> str:
    """Category of a permission name: "view" for "view users"."""
    parts = name.split(maxsplit=1)
    return parts[0] if parts else ""


def group_by_category(permissions: Iterable[Permission]) -> dict[str, list[Permission]]:
    """Group permissions by category, keeping first-seen order of groups and members."""
    groups: dict[str, list[Permission]] = {}
    for permission in permissions:
        groups.setdefault(permission.category, []).append(permission)
    return groups
