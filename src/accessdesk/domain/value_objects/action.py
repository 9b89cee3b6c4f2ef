"""Actions gated by the permission matrix."""

from enum import StrEnum


class Action(StrEnum):
    """Operations on a resource. MANAGE does not imply VIEW."""

    VIEW = "view"
    MANAGE = "manage"
