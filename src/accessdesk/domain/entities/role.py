"""Dynamic role entity."""

from dataclasses import dataclass
from datetime import datetime

from accessdesk.domain.value_objects import RoleLevel


@dataclass
class Role:
    """User-definable role. Locked roles cannot be edited or deleted."""

    id: str
    name: str
    description: str
    level: RoleLevel
    created_at: datetime
    updated_at: datetime
    is_locked: bool = False
