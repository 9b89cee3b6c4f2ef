"""Role definition - a role together with its full grant set."""

from dataclasses import dataclass, field
from datetime import datetime

from accessdesk.domain.entities.module_grant import ModuleGrant
from accessdesk.domain.entities.role import Role
from accessdesk.domain.exceptions import ValidationError
from accessdesk.domain.value_objects import ModuleKey, RoleLevel


@dataclass
class RoleDefinition:
    """Role plus exactly one grant per module key.

    Roles enter the store only through this unit, so a role never exists
    without a complete grant set.
    """

    role: Role
    grants: list[ModuleGrant] = field(default_factory=list)

    def __post_init__(self) -> None:
        keys = [g.module_key for g in self.grants]
        if sorted(keys) != sorted(ModuleKey):
            raise ValidationError(
                f"Role {self.role.id!r} must have exactly one grant per module"
            )
        for grant in self.grants:
            if grant.role_id != self.role.id:
                raise ValidationError(
                    f"Grant for {grant.module_key} belongs to {grant.role_id!r}, "
                    f"not {self.role.id!r}"
                )

    @classmethod
    def new(
        cls,
        role_id: str,
        name: str,
        description: str,
        level: RoleLevel,
        now: datetime,
        is_locked: bool = False,
        readable: int = 0,
        writable: int = 0,
    ) -> "RoleDefinition":
        """Build a role whose first `readable` modules are readable and first `writable` writable."""
        role = Role(
            id=role_id,
            name=name,
            description=description,
            level=level,
            is_locked=is_locked,
            created_at=now,
            updated_at=now,
        )
        return cls(role=role, grants=blank_grants(role_id, readable, writable))


def blank_grants(role_id: str, readable: int = 0, writable: int = 0) -> list[ModuleGrant]:
    """One grant per module in display order, all-false unless counts say otherwise."""
    return [
        ModuleGrant(
            role_id=role_id,
            module_key=key,
            can_read=i < readable,
            can_write=i < writable,
        )
        for i, key in enumerate(ModuleKey)
    ]
