"""Seed roles and grants used when storage is empty or unreadable."""

from datetime import datetime

from accessdesk.domain.entities import RoleDefinition
from accessdesk.domain.value_objects import ModuleKey, RoleLevel

SUPER_ADMIN_ID = "super_admin"

_ALL = len(ModuleKey)

# id, name, description, level, locked, readable modules, writable modules
_SEED = [
    (
        SUPER_ADMIN_ID,
        "Super Admin",
        "Tam sistem erişimi. Tüm modüllere ve sistem ayarlarına erişebilir.",
        RoleLevel.SYSTEM,
        True,
        _ALL,
        _ALL,
    ),
    (
        "admin",
        "Admin",
        "Tam iş erişimi. Modülleri ve personeli yönetebilir.",
        RoleLevel.FULL_ACCESS,
        False,
        _ALL,
        _ALL,
    ),
    (
        "manager",
        "Manager",
        "Operasyonel erişim. Günlük işlemleri yönetebilir.",
        RoleLevel.OPERATIONAL,
        False,
        _ALL,
        4,
    ),
    (
        "editor",
        "Editor",
        "Sınırlı erişim. Belirli modüllerde düzenleme yapabilir.",
        RoleLevel.LIMITED,
        False,
        _ALL,
        3,
    ),
    (
        "viewer",
        "Viewer",
        "Sadece okuma. İçerikleri görüntüleyebilir, düzenleyemez.",
        RoleLevel.READ_ONLY,
        False,
        2,
        0,
    ),
]


def default_definitions(now: datetime) -> list[RoleDefinition]:
    """The five seed roles, each with its full grant set."""
    return [
        RoleDefinition.new(
            role_id=role_id,
            name=name,
            description=description,
            level=level,
            now=now,
            is_locked=locked,
            readable=readable,
            writable=writable,
        )
        for role_id, name, description, level, locked, readable, writable in _SEED
    ]


def super_admin_definition(now: datetime) -> RoleDefinition:
    """Seed definition of the locked level-5 role."""
    return default_definitions(now)[0]
