"""Module grant API resources (system tier)."""

import falcon
import falcon.asgi

from accessdesk.application.services.async_role_store import AsyncRoleStore
from accessdesk.domain.exceptions import ValidationError
from accessdesk.domain.value_objects import ModuleKey, SystemResource
from accessdesk.interfaces.api.hooks import require_system_owner
from accessdesk.interfaces.api.request_body import read_object, required_bool
from accessdesk.interfaces.api.serializers import grant_media


@falcon.before(require_system_owner(SystemResource.RBAC))
class RolePermissionsResource:
    """GET/DELETE /v1/system/rbac/roles/{role_id}/permissions - list or reset grants."""

    def __init__(self, role_store: AsyncRoleStore) -> None:
        self._store = role_store

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        if not self._store.get_role(role_id):
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Role not found"}
            return
        resp.media = {
            "items": [grant_media(g) for g in self._store.get_role_permissions(role_id)]
        }
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Reset every grant of the role to no access."""
        if not self._store.get_role(role_id):
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Role not found"}
            return
        if not await self._store.reset_permissions(role_id):
            resp.status = falcon.HTTP_409
            resp.media = {"error": "Role is locked"}
            return
        resp.media = {
            "items": [grant_media(g) for g in self._store.get_role_permissions(role_id)]
        }
        resp.status = falcon.HTTP_200


@falcon.before(require_system_owner(SystemResource.RBAC))
class RolePermissionResource:
    """PUT /v1/system/rbac/roles/{role_id}/permissions/{module_key} - set one grant."""

    def __init__(self, role_store: AsyncRoleStore) -> None:
        self._store = role_store

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role_id: str,
        module_key: str,
    ) -> None:
        try:
            key = ModuleKey(module_key)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Unknown module: {module_key}"}
            return

        role = self._store.get_role(role_id)
        if not role:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Role not found"}
            return

        try:
            body = await read_object(req)
            can_read = required_bool(body, "can_read")
            can_write = required_bool(body, "can_write")
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        if not await self._store.update_permission(role_id, key, can_read, can_write):
            resp.status = falcon.HTTP_409
            resp.media = {"error": "Role is locked"}
            return

        state = self._store.get_permission_state(role_id, key)
        resp.media = {
            "role_id": role_id,
            "module_key": key.value,
            "can_read": state.can_read,
            "can_write": state.can_write,
        }
        resp.status = falcon.HTTP_200
