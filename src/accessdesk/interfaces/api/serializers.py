"""Response media for API resources."""

from typing import Any

from accessdesk.application.dto.access_summary import AccessSummary
from accessdesk.application.dto.permission_state import PermissionState
from accessdesk.domain.entities import ModuleGrant, Role, UserAssignment


def role_media(role: Role, user_count: int | None = None) -> dict[str, Any]:
    media = {
        "id": role.id,
        "name": role.name,
        "description": role.description,
        "level": int(role.level),
        "level_label": role.level.label,
        "is_locked": role.is_locked,
        "created_at": role.created_at.isoformat(),
        "updated_at": role.updated_at.isoformat(),
    }
    if user_count is not None:
        media["user_count"] = user_count
    return media


def grant_media(grant: ModuleGrant) -> dict[str, Any]:
    return {
        "role_id": grant.role_id,
        "module_key": grant.module_key.value,
        "module_label": grant.module_key.label,
        "can_read": grant.can_read,
        "can_write": grant.can_write,
    }


def assignment_media(assignment: UserAssignment) -> dict[str, Any]:
    return {
        "user_id": assignment.user_id,
        "role_id": assignment.role_id,
        "assigned_at": assignment.assigned_at.isoformat(),
    }


def permission_state_media(state: PermissionState) -> dict[str, bool]:
    return {"can_read": state.can_read, "can_write": state.can_write}


def access_summary_media(summary: AccessSummary) -> dict[str, Any]:
    return {
        "user_id": summary.user_id,
        "role": summary.role.value,
        "resources": {
            resource.value: [action.value for action in actions]
            for resource, actions in summary.resources.items()
        },
        "system": summary.system,
        "business": summary.business,
        "assigned_role_id": summary.assigned_role_id,
        "modules": {
            key.value: permission_state_media(state)
            for key, state in summary.modules.items()
        },
    }
