"""Access summary DTO - what a user may reach."""

from dataclasses import dataclass, field

from accessdesk.application.dto.permission_state import PermissionState
from accessdesk.domain.value_objects import Action, ModuleKey, PlatformRole, Resource


@dataclass
class AccessSummary:
    """Static matrix row plus the user's dynamic role grants."""

    user_id: str
    role: PlatformRole
    resources: dict[Resource, list[Action]]
    system: bool
    business: bool
    assigned_role_id: str | None = None
    modules: dict[ModuleKey, PermissionState] = field(default_factory=dict)
