"""Module grant entity - read/write flags of a role on one module."""

from dataclasses import dataclass

from accessdesk.domain.value_objects import ModuleKey


@dataclass
class ModuleGrant:
    """Grant row for one (role, module) pair."""

    role_id: str
    module_key: ModuleKey
    can_read: bool = False
    can_write: bool = False

    @property
    def has_access(self) -> bool:
        return self.can_read or self.can_write
