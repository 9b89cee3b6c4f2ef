"""Ordinal privilege level of a dynamic role."""

from enum import IntEnum


class RoleLevel(IntEnum):
    """Levels 1 (read only) to 5 (system)."""

    READ_ONLY = 1
    LIMITED = 2
    OPERATIONAL = 3
    FULL_ACCESS = 4
    SYSTEM = 5

    @property
    def label(self) -> str:
        return f"Level {self.value} - {_LABELS[self]}"


_LABELS = {
    RoleLevel.READ_ONLY: "Read Only",
    RoleLevel.LIMITED: "Limited",
    RoleLevel.OPERATIONAL: "Operational",
    RoleLevel.FULL_ACCESS: "Full Access",
    RoleLevel.SYSTEM: "System",
}
