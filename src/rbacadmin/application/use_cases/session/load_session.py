"""Load the operator's session and the directory snapshot."""

import asyncio
import logging

from rbacadmin.application.dto import DirectorySnapshot
from rbacadmin.application.ports import DirectoryClient
from rbacadmin.domain.entities import User
from rbacadmin.domain.exceptions import InsufficientPermission, Unauthenticated
from rbacadmin.domain.value_objects import AuthStatus

logger = logging.getLogger(__name__)


class SessionLoader:
    """Fetches the current user and directory data through the directory port."""

    def __init__(self, directory_client: DirectoryClient) -> None:
        self._client = directory_client

    async def load_current_user(self) -> tuple[AuthStatus, User | None]:
        """Resolve the auth status.

        A directory that refuses the session (401/419 or 403 on the current
        user) counts as unauthenticated. Other errors propagate.
        """
        try:
            user = await self._client.get_current_user()
        except Unauthenticated:
            logger.debug("No authenticated session")
            return AuthStatus.UNAUTHENTICATED, None
        except InsufficientPermission:
            logger.info("Directory refused access to the current user")
            return AuthStatus.UNAUTHENTICATED, None
        return AuthStatus.AUTHENTICATED, user

    async def load_snapshot(self, version: int = 0) -> DirectorySnapshot:
        """Fetch users, roles and permissions together."""
        users, roles, permissions = await asyncio.gather(
            self._client.list_users(),
            self._client.list_roles(),
            self._client.list_permissions(),
        )
        logger.debug(
            "Loaded snapshot v%d: %d users, %d roles, %d permissions",
            version,
            len(users),
            len(roles),
            len(permissions),
        )
        return DirectorySnapshot(
            users=tuple(users),
            roles=tuple(roles),
            permissions=tuple(permissions),
            version=version,
        )
