"""Application entry point and composition root."""

import argparse
import logging
import sys

from accessdesk import __version__
from accessdesk.application.services.async_role_store import AsyncRoleStore
from accessdesk.application.services.role_store import RoleStore
from accessdesk.application.use_cases.access.resolve_access import ResolveAccessUseCase
from accessdesk.config import Settings, get_settings
from accessdesk.domain.permission_matrix import can_access
from accessdesk.infrastructure.auth.keycloak_provider import KeycloakProvider
from accessdesk.infrastructure.storage.factory import create_storage
from accessdesk.interfaces.api.app import create_app
from accessdesk.interfaces.api.middleware.auth import AuthMiddleware
from accessdesk.interfaces.api.middleware.cors import CORSMiddleware
from accessdesk.interfaces.api.middleware.store_lifespan import RoleStoreLifespanMiddleware
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
from accessdesk.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_accessdesk_app(settings: Settings | None = None):
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    storage = create_storage(settings)
    role_store = RoleStore(storage, storage_key=settings.storage_key)
    writer = AsyncRoleStore(role_store)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
            role_overrides=settings.role_overrides,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak client secret not set, every request is unauthenticated")

    resolve_access = ResolveAccessUseCase(role_store)

    cors_origins = [
        o.strip() for o in settings.cors_origins.split(",") if o.strip()
    ]
    return create_app(
        health_resource=HealthResource(role_store),
        access_resource=AccessResource(resolve_access),
        modules_resource=ModulesResource(),
        roles_resource=RolesResource(writer),
        role_resource=RoleResource(writer),
        role_permissions_resource=RolePermissionsResource(writer),
        role_permission_resource=RolePermissionResource(writer),
        assignments_resource=AssignmentsResource(writer),
        assignment_resource=AssignmentResource(writer),
        store_resource=StoreResource(writer),
        middleware=[
            CORSMiddleware(cors_origins),
            RoleStoreLifespanMiddleware(writer, storage),
            AuthMiddleware(keycloak),
        ],
    )


def run_server(settings: Settings, host: str | None = None, port: int | None = None) -> None:
    """Run uvicorn server."""
    import uvicorn

    app = create_accessdesk_app(settings)
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


def _cmd_check(args: argparse.Namespace) -> int:
    allowed = can_access(args.role, args.resource, args.action)
    print("allowed" if allowed else "denied")
    return 0 if allowed else 1


def _cmd_roles(settings: Settings) -> int:
    storage = create_storage(settings)
    opener = getattr(storage, "open", None)
    if opener:
        opener()
    try:
        store = RoleStore(storage, storage_key=settings.storage_key)
        status = store.load()
        print(f"# role store: {status}")
        for role in store.roles:
            lock = " (locked)" if role.is_locked else ""
            print(
                f"{role.id}\t{role.name}\t{role.level.label}\t"
                f"{store.get_user_count(role.id)} users{lock}"
            )
    finally:
        closer = getattr(storage, "close", None)
        if closer:
            closer()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="accessdesk", description="AccessDesk RBAC service")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("version", help="Print version")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    check = sub.add_parser("check", help="Check the static permission matrix")
    check.add_argument("role")
    check.add_argument("resource")
    check.add_argument("action")

    sub.add_parser("roles", help="List roles from the configured storage")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings)

    if args.command == "version":
        print(f"AccessDesk v{__version__}")
        return 0
    if args.command == "serve":
        run_server(settings, host=args.host, port=args.port)
        return 0
    if args.command == "check":
        return _cmd_check(args)
    return _cmd_roles(settings)


if __name__ == "__main__":
    sys.exit(main())
