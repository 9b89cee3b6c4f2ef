"""Role management API resources (system tier)."""

import falcon
import falcon.asgi

from accessdesk.application.services.async_role_store import AsyncRoleStore
from accessdesk.domain.exceptions import ValidationError
from accessdesk.domain.value_objects import RoleLevel, SystemResource
from accessdesk.interfaces.api.hooks import require_system_owner
from accessdesk.interfaces.api.request_body import (
    optional_level,
    optional_str,
    read_object,
    required_name,
)
from accessdesk.interfaces.api.serializers import assignment_media, grant_media, role_media

DEFAULT_LEVEL = RoleLevel.OPERATIONAL


@falcon.before(require_system_owner(SystemResource.RBAC))
class RolesResource:
    """GET/POST /v1/system/rbac/roles - list and create roles."""

    def __init__(self, role_store: AsyncRoleStore) -> None:
        self._store = role_store

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List roles with their assigned user counts."""
        resp.media = {
            "items": [
                role_media(r, user_count=self._store.get_user_count(r.id))
                for r in self._store.roles
            ]
        }
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create role with all-false module grants."""
        try:
            body = await read_object(req)
            name = required_name(body)
            description = optional_str(body, "description") or ""
            level = optional_level(body) or DEFAULT_LEVEL
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        role = await self._store.create_role(name, description, level)
        if role is None:
            resp.status = falcon.HTTP_409
            resp.media = {"error": f"Role name already exists: {name.strip()}"}
            return

        resp.media = role_media(role, user_count=0)
        resp.status = falcon.HTTP_201


@falcon.before(require_system_owner(SystemResource.RBAC))
class RoleResource:
    """GET/PATCH/DELETE /v1/system/rbac/roles/{role_id}."""

    def __init__(self, role_store: AsyncRoleStore) -> None:
        self._store = role_store

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Role with its grants and assigned users."""
        role = self._store.get_role(role_id)
        if not role:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Role not found"}
            return

        users = self._store.get_users_for_role(role_id)
        media = role_media(role, user_count=len(users))
        media["permissions"] = [grant_media(g) for g in self._store.get_role_permissions(role_id)]
        media["users"] = [assignment_media(a) for a in users]
        resp.media = media
        resp.status = falcon.HTTP_200

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Update name, description and/or level of an unlocked role."""
        role = self._store.get_role(role_id)
        if not role:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Role not found"}
            return
        if role.is_locked:
            resp.status = falcon.HTTP_409
            resp.media = {"error": "Role is locked"}
            return

        try:
            body = await read_object(req)
            name = required_name(body) if "name" in body else None
            description = optional_str(body, "description")
            level = optional_level(body)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        updated = await self._store.update_role(
            role_id, name=name, description=description, level=level
        )
        if updated is None:
            resp.status = falcon.HTTP_409
            resp.media = {"error": "Role name already exists"}
            return

        resp.media = role_media(updated, user_count=self._store.get_user_count(role_id))
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Delete role with its grants and assignments."""
        role = self._store.get_role(role_id)
        if not role:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Role not found"}
            return
        if not await self._store.delete_role(role_id):
            resp.status = falcon.HTTP_409
            resp.media = {"error": "Role is locked"}
            return
        resp.status = falcon.HTTP_204
