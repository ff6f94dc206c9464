"""Unit tests for per-operator matrix sessions."""

from dataclasses import replace

import pytest

from rbacadmin.domain.exceptions import SaveInProgress
from rbacadmin.interfaces.api.matrix_sessions import MatrixSessionStore

from tests.conftest import FakeDirectoryClient


def test_sync_opens_session_without_client(roles, catalogue) -> None:
    store = MatrixSessionStore()

    editor, discarded = store.sync(1, roles, catalogue)

    assert discarded == 0
    assert store.get(1) is editor
    assert editor.snapshot_version == store.version == 1


def test_unchanged_fetch_keeps_version(roles, catalogue) -> None:
    store = MatrixSessionStore()
    editor, _ = store.sync(1, roles, catalogue)
    editor.toggle(3, 12)

    same, discarded = store.sync(1, list(roles), list(catalogue))

    assert same is editor
    assert discarded == 0
    assert store.version == 1
    assert editor.pending_count == 1


def test_changed_fetch_rebases_stale_session(roles, catalogue) -> None:
    store = MatrixSessionStore()
    editor, _ = store.sync(1, roles, catalogue)
    editor.toggle(3, 12)

    renamed = [roles[0], replace(roles[1], name="Writer"), roles[2]]
    _, discarded = store.sync(1, renamed, catalogue)

    assert discarded == 1
    assert store.version == 2
    assert editor.has_unsaved_changes is False


@pytest.mark.asyncio
async def test_record_save_keeps_saver_current(roles, catalogue) -> None:
    directory = FakeDirectoryClient(roles=list(roles), permissions=list(catalogue))
    store = MatrixSessionStore()
    saver, _ = store.sync(1, roles, catalogue)
    other, _ = store.sync(2, roles, catalogue)
    other.toggle(2, 12)
    saver.toggle(3, 12)

    await saver.save(directory)
    store.record_save(1)
    saver.toggle(3, 11)

    _, saver_discarded = store.sync(1, directory.roles, directory.permissions)
    _, other_discarded = store.sync(2, directory.roles, directory.permissions)

    assert saver_discarded == 0
    assert saver.pending_count == 1
    assert other_discarded == 1
    assert other.is_granted(3, 12) is True


@pytest.mark.asyncio
async def test_stale_session_refuses_rebase_while_saving(roles, catalogue) -> None:
    store = MatrixSessionStore()
    editor, _ = store.sync(1, roles, catalogue)
    editor.toggle(3, 12)
    renamed = [roles[0], replace(roles[1], name="Writer"), roles[2]]

    class RefetchingClient(FakeDirectoryClient):
        async def update_role_permissions(self, diff):
            with pytest.raises(SaveInProgress):
                store.sync(1, renamed, catalogue)
            await super().update_role_permissions(diff)

    await editor.save(RefetchingClient())

    assert editor.has_unsaved_changes is False
