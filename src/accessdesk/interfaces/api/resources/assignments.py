"""User assignment API resources (system tier)."""

import falcon
import falcon.asgi

from accessdesk.application.services.async_role_store import AsyncRoleStore
from accessdesk.domain.exceptions import ValidationError
from accessdesk.domain.value_objects import SystemResource
from accessdesk.interfaces.api.hooks import require_system_owner
from accessdesk.interfaces.api.request_body import optional_str, read_object
from accessdesk.interfaces.api.serializers import assignment_media


@falcon.before(require_system_owner(SystemResource.RBAC))
class AssignmentsResource:
    """GET /v1/system/rbac/assignments - list assignments, optionally by role."""

    def __init__(self, role_store: AsyncRoleStore) -> None:
        self._store = role_store

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        role_id = req.get_param("role_id")
        items = (
            self._store.get_users_for_role(role_id)
            if role_id
            else self._store.user_assignments
        )
        resp.media = {"items": [assignment_media(a) for a in items]}
        resp.status = falcon.HTTP_200


@falcon.before(require_system_owner(SystemResource.RBAC))
class AssignmentResource:
    """PUT/DELETE /v1/system/rbac/assignments/{user_id} - assign or unassign a user."""

    def __init__(self, role_store: AsyncRoleStore) -> None:
        self._store = role_store

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        """Assign user to role, replacing any previous assignment."""
        try:
            body = await read_object(req)
            role_id = optional_str(body, "role_id")
            if not role_id:
                raise ValidationError("role_id is required")
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        assignment = await self._store.assign_user_to_role(user_id, role_id)
        if assignment is None:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Role not found"}
            return

        resp.media = assignment_media(assignment)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        if not await self._store.unassign_user(user_id):
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Assignment not found"}
            return
        resp.status = falcon.HTTP_204
