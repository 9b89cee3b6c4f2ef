"""User assignment entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class UserAssignment:
    """User holds one dynamic role."""

    user_id: str
    role_id: str
    assigned_at: datetime
