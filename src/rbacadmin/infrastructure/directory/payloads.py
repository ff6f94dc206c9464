"""Parse directory API payloads into domain entities.

Optional collections missing from a payload become empty tuples here, so the
domain never sees an absent roles/permissions field.
"""

from datetime import datetime
from typing import Any

from rbacadmin.application.dto import PermissionInput, RoleInput, UserInput
from rbacadmin.domain.entities import Permission, Role, User
from rbacadmin.domain.exceptions import DirectoryError


def _timestamp(value: Any) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def _require(payload: dict[str, Any], key: str, kind: str) -> Any:
    try:
        return payload[key]
    except KeyError:
        raise DirectoryError(f"{kind} payload missing '{key}'") from None
    except TypeError:
        raise DirectoryError(f"{kind} payload is not an object") from None


def parse_permission(payload: dict[str, Any]) -> Permission:
    return Permission(
        id=int(_require(payload, "id", "Permission")),
        name=str(_require(payload, "name", "Permission")),
        guard_name=payload.get("guard_name") or "web",
        created_at=_timestamp(payload.get("created_at")),
        updated_at=_timestamp(payload.get("updated_at")),
    )


def parse_role(payload: dict[str, Any]) -> Role:
    return Role(
        id=int(_require(payload, "id", "Role")),
        name=str(_require(payload, "name", "Role")),
        guard_name=payload.get("guard_name") or "web",
        permissions=tuple(parse_permission(p) for p in payload.get("permissions") or []),
        created_at=_timestamp(payload.get("created_at")),
        updated_at=_timestamp(payload.get("updated_at")),
    )


def parse_user(payload: dict[str, Any]) -> User:
    return User(
        id=int(_require(payload, "id", "User")),
        name=str(_require(payload, "name", "User")),
        email=str(payload.get("email") or ""),
        roles=tuple(parse_role(r) for r in payload.get("roles") or []),
        permissions=tuple(parse_permission(p) for p in payload.get("permissions") or []),
        email_verified_at=_timestamp(payload.get("email_verified_at")),
        created_at=_timestamp(payload.get("created_at")),
        updated_at=_timestamp(payload.get("updated_at")),
    )


def user_body(data: UserInput) -> dict[str, Any]:
    body: dict[str, Any] = {"name": data.name, "email": data.email, "roles": list(data.roles)}
    if data.password:
        body["password"] = data.password
    return body


def role_body(data: RoleInput) -> dict[str, Any]:
    return {"name": data.name, "guard_name": data.guard_name}


def permission_body(data: PermissionInput) -> dict[str, Any]:
    return {"name": data.name, "guard_name": data.guard_name}
