"""Resolve access use case."""

from accessdesk.application.dto.access_summary import AccessSummary
from accessdesk.application.services.role_store import RoleStore
from accessdesk.domain.entities import CurrentUser
from accessdesk.domain.permission_matrix import (
    allowed_actions,
    can_access_business,
    can_access_system,
)
from accessdesk.domain.value_objects import ModuleKey


class ResolveAccessUseCase:
    """Summarize what the current user may view and manage."""

    def __init__(self, role_store: RoleStore) -> None:
        self._role_store = role_store

    def execute(self, user: CurrentUser) -> AccessSummary:
        """Matrix row for the user's platform role, plus module grants of the assigned role."""
        summary = AccessSummary(
            user_id=user.id,
            role=user.role,
            resources=allowed_actions(user.role),
            system=can_access_system(user.role),
            business=can_access_business(user.role),
        )
        assignment = self._role_store.get_assignment(user.id)
        if assignment:
            summary.assigned_role_id = assignment.role_id
            summary.modules = {
                key: self._role_store.get_permission_state(assignment.role_id, key)
                for key in ModuleKey
            }
        return summary
