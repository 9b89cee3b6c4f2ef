"""Fixtures for API tests."""

import pytest

from accessdesk.application.services.async_role_store import AsyncRoleStore
from accessdesk.application.use_cases.access.resolve_access import ResolveAccessUseCase
from accessdesk.domain.value_objects import parse_platform_role
from accessdesk.interfaces.api.app import create_app
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

from tests.conftest import make_user


class AuthBypassMiddleware:
    """Middleware that sets context.user from the X-Test-Role header."""

    async def process_request(self, req, resp):
        role = parse_platform_role(req.get_header("X-Test-Role"))
        req.context.user = make_user(role) if role else None


@pytest.fixture
def app(role_store):
    """Falcon ASGI app wired to the test role store."""
    writer = AsyncRoleStore(role_store)
    return create_app(
        health_resource=HealthResource(role_store),
        access_resource=AccessResource(ResolveAccessUseCase(role_store)),
        modules_resource=ModulesResource(),
        roles_resource=RolesResource(writer),
        role_resource=RoleResource(writer),
        role_permissions_resource=RolePermissionsResource(writer),
        role_permission_resource=RolePermissionResource(writer),
        assignments_resource=AssignmentsResource(writer),
        assignment_resource=AssignmentResource(writer),
        store_resource=StoreResource(writer),
        middleware=[AuthBypassMiddleware()],
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    from falcon.testing import TestClient
    return TestClient(app)
