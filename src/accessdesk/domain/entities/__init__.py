"""Domain entities."""

from accessdesk.domain.entities.current_user import CurrentUser
from accessdesk.domain.entities.module_grant import ModuleGrant
from accessdesk.domain.entities.role import Role
from accessdesk.domain.entities.role_definition import RoleDefinition, blank_grants
from accessdesk.domain.entities.user_assignment import UserAssignment

__all__ = [
    "CurrentUser",
    "ModuleGrant",
    "Role",
    "RoleDefinition",
    "UserAssignment",
    "blank_grants",
]
