"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from rbacadmin.domain.exceptions import Unauthenticated
from rbacadmin.interfaces.api.app import create_app

from tests.conftest import FakeDirectoryClient


class DirectorySession:
    """Per-request view of a shared fake directory, bound to one token's user."""

    def __init__(self, backend: FakeDirectoryClient, user) -> None:
        self._backend = backend
        self._user = user
        self.closed = False

    async def get_current_user(self):
        if self._user is None:
            raise Unauthenticated("No current user")
        return self._user

    async def aclose(self) -> None:
        self.closed = True

    def __getattr__(self, name):
        return getattr(self._backend, name)


@pytest.fixture
def backend(directory) -> FakeDirectoryClient:
    """Shared directory state behind every request."""
    return directory


@pytest.fixture
def sessions() -> list[DirectorySession]:
    return []


@pytest.fixture
def app(backend, sessions, admin_user, viewer_user):
    """Falcon ASGI app; bearer "admin" and "viewer" map to users, anything else has no session."""
    users_by_token = {"admin": admin_user, "viewer": viewer_user}

    def client_factory(token):
        session = DirectorySession(backend, users_by_token.get(token))
        sessions.append(session)
        return session

    return create_app(
        client_factory,
        sign_in_path="/login",
        cors_origins=["http://console.test"],
        directory_api_url="http://directory.test/api",
    )


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
