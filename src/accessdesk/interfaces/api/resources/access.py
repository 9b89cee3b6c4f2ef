"""Current-user access endpoints."""

import falcon
import falcon.asgi

from accessdesk.application.use_cases.access.resolve_access import ResolveAccessUseCase
from accessdesk.domain.value_objects import Action, ModuleKey, Resource
from accessdesk.interfaces.api.hooks import require_access
from accessdesk.interfaces.api.serializers import access_summary_media


class AccessResource:
    """GET /v1/me/access - what the current user may view and manage."""

    def __init__(self, resolve_access: ResolveAccessUseCase) -> None:
        self._resolve = resolve_access

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        summary = self._resolve.execute(user)
        resp.media = access_summary_media(summary)
        resp.status = falcon.HTTP_200


class ModulesResource:
    """GET /v1/modules - module catalog."""

    @falcon.before(require_access(Resource.MODULES, Action.VIEW))
    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {
            "items": [{"key": key.value, "label": key.label} for key in ModuleKey]
        }
        resp.status = falcon.HTTP_200
