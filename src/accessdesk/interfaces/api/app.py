"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
from falcon.asgi import App

from accessdesk.interfaces.api.resources.access import AccessResource, ModulesResource
from accessdesk.interfaces.api.resources.assignments import (
    AssignmentResource,
    AssignmentsResource,
)
from accessdesk.interfaces.api.resources.health import HealthResource
from accessdesk.interfaces.api.resources.role_permissions import (
    RolePermissionResource,
    RolePermissionsResource,
)
from accessdesk.interfaces.api.resources.roles import RoleResource, RolesResource
from accessdesk.interfaces.api.resources.store import StoreResource

logger = logging.getLogger(__name__)

RBAC_PREFIX = "/v1/system/rbac"


async def handle_unexpected(req: falcon.asgi.Request, resp: falcon.asgi.Response, ex, params) -> None:
    """Log unhandled exceptions and answer 500."""
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal Server Error"}


def create_app(
    health_resource: HealthResource,
    access_resource: AccessResource,
    modules_resource: ModulesResource,
    roles_resource: RolesResource,
    role_resource: RoleResource,
    role_permissions_resource: RolePermissionsResource,
    role_permission_resource: RolePermissionResource,
    assignments_resource: AssignmentsResource,
    assignment_resource: AssignmentResource,
    store_resource: StoreResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected)

    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/me/access", access_resource)
    app.add_route("/v1/modules", modules_resource)

    app.add_route(f"{RBAC_PREFIX}/roles", roles_resource)
    app.add_route(f"{RBAC_PREFIX}/roles/{{role_id}}", role_resource)
    app.add_route(f"{RBAC_PREFIX}/roles/{{role_id}}/permissions", role_permissions_resource)
    app.add_route(
        f"{RBAC_PREFIX}/roles/{{role_id}}/permissions/{{module_key}}",
        role_permission_resource,
    )
    app.add_route(f"{RBAC_PREFIX}/assignments", assignments_resource)
    app.add_route(f"{RBAC_PREFIX}/assignments/{{user_id}}", assignment_resource)
    app.add_route(f"{RBAC_PREFIX}/store", store_resource)
    app.add_route(f"{RBAC_PREFIX}/store/reload", store_resource, suffix="reload")
    app.add_route(f"{RBAC_PREFIX}/store/reset", store_resource, suffix="reset")
    return app
