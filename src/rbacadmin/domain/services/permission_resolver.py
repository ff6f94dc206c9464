"""Permission resolver - flattens a user's grants into capability names.

Checks are by permission *name* (exact, case-sensitive), never by id: call
sites only know the token they need ("view roles"), not the numeric id the
directory assigned to it.
"""

from collections.abc import Iterable, Set

from rbacadmin.domain.entities import User
from rbacadmin.domain.exceptions import InvalidRequirement


def effective_permission_names(user: User | None) -> frozenset[str]:
    """Union of direct permission names and names granted through any role.

    Returns an empty set for an absent (unauthenticated) user.
    """
    if user is None:
        return frozenset()
    names = {p.name for p in user.permissions}
    for role in user.roles:
        names.update(p.name for p in role.permissions)
    return frozenset(names)


def normalize_required(required: Iterable[str]) -> tuple[str, ...]:
    """Validate a required-permission list; a bare string or non-string item fails fast."""
    if isinstance(required, (str, bytes)) or not isinstance(required, Iterable):
        raise InvalidRequirement(
            f"required permissions must be a collection of strings, got {type(required).__name__}"
        )
    names = tuple(required)
    for name in names:
        if not isinstance(name, str):
            raise InvalidRequirement(
                f"required permission names must be strings, got {type(name).__name__}"
            )
    return names


def _as_set(effective: Iterable[str]) -> Set[str]:
    return effective if isinstance(effective, Set) else frozenset(effective)


def has_all(effective: Iterable[str], required: Iterable[str]) -> bool:
    """True iff every required name is present. Empty requirement is vacuously true."""
    names = normalize_required(required)
    granted = _as_set(effective)
    return all(name in granted for name in names)


def has_any(effective: Iterable[str], required: Iterable[str]) -> bool:
    """True iff at least one required name is present."""
    names = normalize_required(required)
    granted = _as_set(effective)
    return any(name in granted for name in names)


def missing_permissions(effective: Iterable[str], required: Iterable[str]) -> tuple[str, ...]:
    """Required names absent from the effective set, sorted and de-duplicated."""
    names = normalize_required(required)
    granted = _as_set(effective)
    return tuple(sorted({name for name in names if name not in granted}))
