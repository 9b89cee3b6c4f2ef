"""Read/write flags of a role on one module."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionState:
    """Flags returned to the role-editing surface."""

    can_read: bool = False
    can_write: bool = False
