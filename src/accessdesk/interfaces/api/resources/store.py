"""Role store maintenance API resource (system tier)."""

import falcon
import falcon.asgi

from accessdesk.application.services.async_role_store import AsyncRoleStore
from accessdesk.domain.value_objects import SystemResource
from accessdesk.interfaces.api.hooks import require_system_owner


@falcon.before(require_system_owner(SystemResource.RBAC))
class StoreResource:
    """GET /v1/system/rbac/store, POST .../reload and .../reset."""

    def __init__(self, role_store: AsyncRoleStore) -> None:
        self._store = role_store

    def _status_media(self) -> dict:
        load = self._store.last_load_status
        save = self._store.last_save_status
        return {
            "last_load_status": load.value if load else None,
            "last_save_status": save.value if save else None,
            "roles": len(self._store.roles),
            "permissions": len(self._store.permissions),
            "assignments": len(self._store.user_assignments),
        }

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Persistence status and collection sizes."""
        resp.media = self._status_media()
        resp.status = falcon.HTTP_200

    async def on_post_reload(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Discard in-memory state and reload from storage."""
        await self._store.load()
        resp.media = self._status_media()
        resp.status = falcon.HTTP_200

    async def on_post_reset(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Replace state with the seed roles and persist."""
        await self._store.reset_to_defaults()
        resp.media = self._status_media()
        resp.status = falcon.HTTP_200
