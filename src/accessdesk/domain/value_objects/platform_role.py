"""Static platform roles used by the permission matrix."""

from enum import StrEnum


class PlatformRole(StrEnum):
    """Fixed role tiers, highest privilege first."""

    SYSTEM_OWNER = "system_owner"
    CEO = "ceo"
    ADMIN = "admin"
    STAFF = "staff"
    VIEWER = "viewer"


_ALIASES = {"system owner": PlatformRole.SYSTEM_OWNER}


def parse_platform_role(value: object) -> PlatformRole | None:
    """Parse a role claim case-insensitively. Unknown values return None."""
    if not isinstance(value, str):
        return None
    lowered = value.strip().lower()
    if lowered in _ALIASES:
        return _ALIASES[lowered]
    try:
        return PlatformRole(lowered)
    except ValueError:
        return None
