"""Check access use case - the route guard predicates."""

from accessdesk.domain.entities import CurrentUser
from accessdesk.domain.exceptions import PermissionDenied
from accessdesk.domain.permission_matrix import can_access, can_access_system_resource
from accessdesk.domain.value_objects import Action, Resource, SystemResource


class CheckAccessUseCase:
    """Raise PermissionDenied unless the user passes the matrix."""

    def execute(self, user: CurrentUser, resource: Resource, action: Action) -> None:
        if not can_access(user.role, resource, action):
            raise PermissionDenied(
                f"Role {user.role} cannot {action} {resource}"
            )

    def execute_system(self, user: CurrentUser, resource: SystemResource) -> None:
        if not can_access_system_resource(user.role, resource):
            raise PermissionDenied(
                f"Role {user.role} has no access to system resource {resource}"
            )
