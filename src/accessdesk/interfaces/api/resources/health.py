"""Health check endpoints."""

import falcon.asgi

from accessdesk.application.services.role_store import RoleStore


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, role_store: RoleStore) -> None:
        self._role_store = role_store

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - ready once the role store has loaded."""
        status = self._role_store.last_load_status
        if status is None:
            resp.media = {"status": "loading"}
            resp.status = falcon.HTTP_503
            return
        resp.media = {"status": "ready", "role_store": status.value}
        resp.status = falcon.HTTP_200
