"""Domain value objects."""

from accessdesk.domain.value_objects.action import Action
from accessdesk.domain.value_objects.module_key import MODULE_LABELS, ModuleKey
from accessdesk.domain.value_objects.platform_role import PlatformRole, parse_platform_role
from accessdesk.domain.value_objects.resource import Resource, SystemResource
from accessdesk.domain.value_objects.role_level import RoleLevel

__all__ = [
    "MODULE_LABELS",
    "Action",
    "ModuleKey",
    "PlatformRole",
    "Resource",
    "RoleLevel",
    "SystemResource",
    "parse_platform_role",
]
