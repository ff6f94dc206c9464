"""Role/permission matrix resources."""

import asyncio

import falcon.asgi

from rbacadmin.application.use_cases.access import required_permissions_for
from rbacadmin.domain.exceptions import DirectoryError, NotFound, SaveFailed, SaveInProgress
from rbacadmin.interfaces.api.matrix_sessions import MatrixSessionStore
from rbacadmin.interfaces.api.resources.access import gate_request
from rbacadmin.interfaces.api.serializers import diff_to_dict, matrix_to_dict

MATRIX_VIEW = "/dashboard/permissions"


async def _refresh(req: falcon.asgi.Request, store: MatrixSessionStore):
    directory = req.context.directory
    roles, permissions = await asyncio.gather(
        directory.list_roles(), directory.list_permissions()
    )
    return store.sync(req.context.user.id, roles, permissions)


class MatrixResource:
    """GET/POST/DELETE /v1/matrix - view, toggle a cell, cancel pending changes."""

    def __init__(self, store: MatrixSessionStore, sign_in_path: str) -> None:
        self._store = store
        self._sign_in_path = sign_in_path
        self._required = required_permissions_for(MATRIX_VIEW)

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Open or refresh the session and return the (filtered) matrix."""
        if not gate_request(req, resp, self._required, self._sign_in_path).granted:
            return

        try:
            editor, discarded = await _refresh(req, self._store)
        except DirectoryError as e:
            resp.status = falcon.HTTP_502
            resp.media = {"error": str(e)}
            return
        except SaveInProgress as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return

        media = matrix_to_dict(editor, req.get_param("search") or "")
        media["discarded_changes"] = discarded
        resp.media = media
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Toggle a cell, or set it when `granted` is given."""
        if not gate_request(req, resp, self._required, self._sign_in_path).granted:
            return

        editor = self._store.get(req.context.user.id)
        if editor is None:
            resp.status = falcon.HTTP_409
            resp.media = {"error": "No open matrix session"}
            return

        try:
            body = await req.get_media()
            role_id = int(body["role_id"])
            permission_id = int(body["permission_id"])
            granted = body.get("granted")
        except (KeyError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid cell: {e}"}
            return

        try:
            if granted is None:
                editor.toggle(role_id, permission_id)
            else:
                editor.set_granted(role_id, permission_id, bool(granted))
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return

        resp.media = {
            "role_id": role_id,
            "permission_id": permission_id,
            "granted": editor.is_granted(role_id, permission_id),
            "pending": editor.is_pending(role_id, permission_id),
            "pending_count": editor.pending_count,
        }
        resp.status = falcon.HTTP_200

    async def on_delete(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Cancel: drop all pending changes."""
        if not gate_request(req, resp, self._required, self._sign_in_path).granted:
            return

        editor = self._store.get(req.context.user.id)
        if editor is not None:
            editor.cancel()
        resp.status = falcon.HTTP_204


class MatrixSaveResource:
    """POST /v1/matrix/save - submit the minimal grant/revoke diff."""

    def __init__(self, store: MatrixSessionStore, sign_in_path: str) -> None:
        self._store = store
        self._sign_in_path = sign_in_path
        self._required = required_permissions_for(MATRIX_VIEW)

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not gate_request(req, resp, self._required, self._sign_in_path).granted:
            return

        if self._store.get(req.context.user.id) is None:
            resp.status = falcon.HTTP_409
            resp.media = {"error": "No open matrix session"}
            return

        try:
            editor, discarded = await _refresh(req, self._store)
        except DirectoryError as e:
            resp.status = falcon.HTTP_502
            resp.media = {"error": str(e)}
            return
        except SaveInProgress as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return
        if discarded:
            resp.status = falcon.HTTP_409
            resp.media = {
                "error": "Directory changed since the matrix was loaded",
                "discarded_changes": discarded,
            }
            return

        try:
            diff = await editor.save(req.context.directory)
        except SaveInProgress as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return
        except SaveFailed as e:
            resp.status = falcon.HTTP_502
            resp.media = {"error": str(e), "pending_count": editor.pending_count}
            return

        if not diff.is_empty:
            self._store.record_save(req.context.user.id)
        resp.media = diff_to_dict(diff)
        resp.status = falcon.HTTP_200
