"""Static RBAC permission matrix.

SYSTEM_OWNER holds every business permission and is the only role that
reaches system resources. CEO holds every business permission but no
system access. ADMIN, STAFF and VIEWER are business-only and granular.

Lookups are fail-closed: a role or resource missing from the matrix grants
nothing, and no predicate here raises.
"""

from accessdesk.domain.value_objects import Action, PlatformRole, Resource, SystemResource

_FULL = frozenset({Action.VIEW, Action.MANAGE})
_VIEW = frozenset({Action.VIEW})
_NONE: frozenset[Action] = frozenset()

BUSINESS_MATRIX: dict[PlatformRole, dict[Resource, frozenset[Action]]] = {
    PlatformRole.SYSTEM_OWNER: {resource: _FULL for resource in Resource},
    PlatformRole.CEO: {resource: _FULL for resource in Resource},
    PlatformRole.ADMIN: {resource: _FULL for resource in Resource},
    PlatformRole.STAFF: {
        Resource.DASHBOARD: _VIEW,
        Resource.MODULES: _VIEW,
        Resource.PERSONNEL: _VIEW,
        Resource.PROFILE: _FULL,
        Resource.SETTINGS: _VIEW,
        Resource.NOTIFICATIONS: _VIEW,
    },
    PlatformRole.VIEWER: {
        Resource.DASHBOARD: _VIEW,
        Resource.MODULES: _VIEW,
        Resource.PERSONNEL: _NONE,
        Resource.PROFILE: _VIEW,
        Resource.SETTINGS: _NONE,
        Resource.NOTIFICATIONS: _VIEW,
    },
}


def can_access(role: str | None, resource: str, action: str) -> bool:
    """Return True when *role* may perform *action* on *resource*."""
    allowed = BUSINESS_MATRIX.get(role, {}).get(resource)
    if not allowed:
        return False
    return action in allowed


def can_access_system(role: str | None) -> bool:
    """System tier is open to the system owner only; CEO is denied."""
    return role == PlatformRole.SYSTEM_OWNER


def can_access_system_resource(role: str | None, resource: SystemResource | str) -> bool:
    """Per-resource system gate. Every system resource currently shares one gate."""
    return can_access_system(role)


def can_access_business(role: str | None) -> bool:
    """Return True for any known platform role."""
    return role in BUSINESS_MATRIX


def allowed_actions(role: str | None) -> dict[Resource, list[Action]]:
    """Matrix row for *role*, with actions in declaration order."""
    row = BUSINESS_MATRIX.get(role, {})
    return {
        resource: [action for action in Action if action in row.get(resource, _NONE)]
        for resource in Resource
    }
