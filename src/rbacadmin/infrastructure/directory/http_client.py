"""Directory client over the REST directory API (httpx)."""

import logging
from typing import Any

import httpx

from rbacadmin.application.dto import AssignmentDiff, PermissionInput, RoleInput, UserInput
from rbacadmin.domain.entities import Permission, Role, User
from rbacadmin.domain.exceptions import (
    DirectoryError,
    InsufficientPermission,
    NotFound,
    Unauthenticated,
    ValidationError,
)
from rbacadmin.infrastructure.directory.payloads import (
    parse_permission,
    parse_role,
    parse_user,
    permission_body,
    role_body,
    user_body,
)

logger = logging.getLogger(__name__)


class HttpDirectoryClient:
    """DirectoryClient backed by the directory REST API.

    Responses are enveloped as {"data": ..., "message": ..., "errors": {...}}.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {
            "Accept": "application/json",
            "X-Requested-With": "XMLHttpRequest",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpDirectoryClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        """Send request, map errors, return the envelope's data."""
        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            raise DirectoryError(f"{method} {path} failed: {e}") from e

        try:
            body = response.json() if response.content else {}
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {"data": body}

        if response.is_success:
            return body.get("data")

        message = body.get("message") or f"HTTP {response.status_code}"
        status = response.status_code
        if status in (401, 419):
            raise Unauthenticated(message)
        if status == 403:
            raise InsufficientPermission()
        if status == 404:
            raise NotFound(path)
        if status == 422:
            raise ValidationError(message, body.get("errors"))
        raise DirectoryError(f"{method} {path}: {message}")

    # --- session ---

    async def get_current_user(self) -> User:
        data = await self._request("GET", "/me")
        if not data:
            raise Unauthenticated("No current user")
        return parse_user(data)

    # --- users ---

    async def list_users(self) -> list[User]:
        return [parse_user(u) for u in await self._request("GET", "/users") or []]

    async def create_user(self, data: UserInput) -> User:
        return parse_user(await self._request("POST", "/users", json=user_body(data)))

    async def update_user(self, user_id: int, data: UserInput) -> User:
        return parse_user(await self._request("PUT", f"/users/{user_id}", json=user_body(data)))

    async def delete_user(self, user_id: int) -> None:
        await self._request("DELETE", f"/users/{user_id}")

    # --- roles ---

    async def list_roles(self) -> list[Role]:
        return [parse_role(r) for r in await self._request("GET", "/roles") or []]

    async def create_role(self, data: RoleInput) -> Role:
        return parse_role(await self._request("POST", "/roles", json=role_body(data)))

    async def update_role(self, role_id: int, data: RoleInput) -> Role:
        return parse_role(await self._request("PUT", f"/roles/{role_id}", json=role_body(data)))

    async def delete_role(self, role_id: int) -> None:
        await self._request("DELETE", f"/roles/{role_id}")

    # --- permissions ---

    async def list_permissions(self) -> list[Permission]:
        return [parse_permission(p) for p in await self._request("GET", "/permissions") or []]

    async def create_permission(self, data: PermissionInput) -> Permission:
        return parse_permission(
            await self._request("POST", "/permissions", json=permission_body(data))
        )

    async def update_permission(self, permission_id: int, data: PermissionInput) -> Permission:
        return parse_permission(
            await self._request(
                "PUT", f"/permissions/{permission_id}", json=permission_body(data)
            )
        )

    async def delete_permission(self, permission_id: int) -> None:
        await self._request("DELETE", f"/permissions/{permission_id}")

    # --- role permissions ---

    async def update_role_permissions(self, diff: AssignmentDiff) -> None:
        """Apply grants then revokes, one request per role and direction."""
        for role_id, (add, revoke) in diff.by_role().items():
            if add:
                await self._request(
                    "POST", f"/roles/{role_id}/permissions", json={"permissions": add}
                )
            if revoke:
                await self._request(
                    "DELETE", f"/roles/{role_id}/permissions", json={"permissions": revoke}
                )
