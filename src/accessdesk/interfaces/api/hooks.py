"""Route guards as Falcon before-hooks.

Usage::

    @falcon.before(require_access(Resource.MODULES, Action.VIEW))
    async def on_get(self, req, resp): ...
"""

import falcon
import falcon.asgi

from accessdesk.application.use_cases.access.check_access import CheckAccessUseCase
from accessdesk.domain.exceptions import PermissionDenied
from accessdesk.domain.value_objects import Action, Resource, SystemResource

_check = CheckAccessUseCase()


def _current_user(req: falcon.asgi.Request):
    user = getattr(req.context, "user", None)
    if user is None:
        raise falcon.HTTPUnauthorized(title="Unauthorized", description="Login required")
    return user


def require_access(resource: Resource, action: Action):
    """Hook: 401 without a user, 403 unless the matrix allows *action* on *resource*."""

    async def hook(req: falcon.asgi.Request, resp: falcon.asgi.Response, responder, params) -> None:
        user = _current_user(req)
        try:
            _check.execute(user, resource, action)
        except PermissionDenied as e:
            raise falcon.HTTPForbidden(title="Forbidden", description=str(e)) from e

    return hook


def require_system_owner(resource: SystemResource):
    """Hook: 401 without a user, 403 for every role but the system owner."""

    async def hook(req: falcon.asgi.Request, resp: falcon.asgi.Response, responder, params) -> None:
        user = _current_user(req)
        try:
            _check.execute_system(user, resource)
        except PermissionDenied as e:
            raise falcon.HTTPForbidden(title="Forbidden", description=str(e)) from e

    return hook
