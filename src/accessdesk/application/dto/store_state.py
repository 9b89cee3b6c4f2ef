"""Role store state and its JSON codec.

The blob layout matches what the dashboard client has always written under
``gmw_role_management``::

    {"roles": [...], "permissions": [...], "userAssignments": [...]}

with camelCase row keys and ISO-8601 timestamps.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from accessdesk.domain.default_roles import (
    SUPER_ADMIN_ID,
    default_definitions,
    super_admin_definition,
)
from accessdesk.domain.entities import ModuleGrant, Role, UserAssignment, blank_grants
from accessdesk.domain.exceptions import ValidationError
from accessdesk.domain.value_objects import ModuleKey, RoleLevel

STORAGE_KEY = "gmw_role_management"


@dataclass
class StoreState:
    """Snapshot of roles, grants and assignments."""

    roles: list[Role] = field(default_factory=list)
    permissions: list[ModuleGrant] = field(default_factory=list)
    user_assignments: list[UserAssignment] = field(default_factory=list)


def default_state(now: datetime) -> StoreState:
    """Five seed roles with their grants and no assignments."""
    definitions = default_definitions(now)
    return StoreState(
        roles=[d.role for d in definitions],
        permissions=[g for d in definitions for g in d.grants],
        user_assignments=[],
    )


# --- Encoding ---


def _role_to_dict(role: Role) -> dict[str, Any]:
    return {
        "id": role.id,
        "name": role.name,
        "description": role.description,
        "level": int(role.level),
        "isLocked": role.is_locked,
        "createdAt": role.created_at.isoformat(),
        "updatedAt": role.updated_at.isoformat(),
    }


def _grant_to_dict(grant: ModuleGrant) -> dict[str, Any]:
    return {
        "roleId": grant.role_id,
        "moduleKey": grant.module_key.value,
        "canRead": grant.can_read,
        "canWrite": grant.can_write,
    }


def _assignment_to_dict(assignment: UserAssignment) -> dict[str, Any]:
    return {
        "userId": assignment.user_id,
        "roleId": assignment.role_id,
        "assignedAt": assignment.assigned_at.isoformat(),
    }


def encode_state(state: StoreState) -> str:
    """Serialize state to the JSON blob."""
    return json.dumps(
        {
            "roles": [_role_to_dict(r) for r in state.roles],
            "permissions": [_grant_to_dict(p) for p in state.permissions],
            "userAssignments": [_assignment_to_dict(a) for a in state.user_assignments],
        },
        ensure_ascii=False,
    )


# --- Decoding ---


def _flag(row: dict[str, Any], key: str) -> bool:
    """JSON boolean at *key*; a missing key reads as False."""
    value = row.get(key, False)
    if not isinstance(value, bool):
        raise ValidationError(f"{key} must be a boolean, got {value!r}")
    return value


def _level(value: Any) -> RoleLevel:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"level must be an integer, got {value!r}")
    return RoleLevel(value)


def _role_from_dict(row: dict[str, Any]) -> Role:
    return Role(
        id=str(row["id"]),
        name=str(row["name"]),
        description=str(row.get("description") or ""),
        level=_level(row["level"]),
        is_locked=_flag(row, "isLocked"),
        created_at=datetime.fromisoformat(row["createdAt"]),
        updated_at=datetime.fromisoformat(row["updatedAt"]),
    )


def _grant_from_dict(row: dict[str, Any]) -> ModuleGrant:
    return ModuleGrant(
        role_id=str(row["roleId"]),
        module_key=str(row["moduleKey"]),
        can_read=_flag(row, "canRead"),
        can_write=_flag(row, "canWrite"),
    )


def _assignment_from_dict(row: dict[str, Any]) -> UserAssignment:
    return UserAssignment(
        user_id=str(row["userId"]),
        role_id=str(row["roleId"]),
        assigned_at=datetime.fromisoformat(row["assignedAt"]),
    )


def decode_state(raw: str, now: datetime) -> StoreState:
    """Parse the JSON blob.

    Missing or empty ``roles``/``permissions`` lists fall back to the seed
    set; a non-list ``userAssignments`` becomes empty. Grant module keys are
    left as read so normalize_state can drop unknown ones.

    Raises:
        ValidationError: blob is not JSON, not an object, or holds a row
            that cannot be decoded.
    """
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Role store blob is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise ValidationError("Role store blob must be a JSON object")

    defaults = default_state(now)
    roles_raw = parsed.get("roles")
    permissions_raw = parsed.get("permissions")
    assignments_raw = parsed.get("userAssignments")

    try:
        roles = (
            [_role_from_dict(r) for r in roles_raw]
            if isinstance(roles_raw, list) and roles_raw
            else defaults.roles
        )
        permissions = (
            [_grant_from_dict(p) for p in permissions_raw]
            if isinstance(permissions_raw, list) and permissions_raw
            else defaults.permissions
        )
        assignments = (
            [_assignment_from_dict(a) for a in assignments_raw]
            if isinstance(assignments_raw, list)
            else []
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ValidationError(f"Role store blob has an undecodable row: {e}") from e

    return StoreState(roles=roles, permissions=permissions, user_assignments=assignments)


# --- Invariant repair ---


def normalize_state(state: StoreState, now: datetime) -> tuple[StoreState, list[str]]:
    """Bring a decoded state back to whole role units.

    Returns the repaired state and a list of human-readable repairs.
    """
    repairs: list[str] = []
    permissions = list(state.permissions)

    by_id: dict[str, Role] = {}
    for role in state.roles:
        if role.id in by_id:
            repairs.append(f"dropped duplicate role {role.id!r}")
            del by_id[role.id]
        by_id[role.id] = role
    roles = list(by_id.values())

    if not any(r.is_locked and r.level == RoleLevel.SYSTEM for r in roles):
        seed = super_admin_definition(now)
        roles = [r for r in roles if r.id != SUPER_ADMIN_ID]
        permissions = [p for p in permissions if p.role_id != SUPER_ADMIN_ID]
        roles.insert(0, seed.role)
        permissions = seed.grants + permissions
        repairs.append("re-seeded locked super admin role")

    # Locked roles keep their names; later unlocked collisions are dropped.
    names = {r.name.lower() for r in roles if r.is_locked}
    unique: list[Role] = []
    for role in roles:
        lowered = role.name.lower()
        if not role.is_locked:
            if lowered in names:
                repairs.append(f"dropped role {role.id!r} with duplicate name {role.name!r}")
                continue
            names.add(lowered)
        unique.append(role)
    roles = unique

    role_ids = {r.id for r in roles}
    valid_keys = {k.value for k in ModuleKey}
    by_pair: dict[tuple[str, ModuleKey], ModuleGrant] = {}
    for grant in permissions:
        if grant.role_id not in role_ids:
            repairs.append(f"dropped grant for unknown role {grant.role_id!r}")
            continue
        if grant.module_key not in valid_keys:
            repairs.append(f"dropped grant for unknown module {grant.module_key!r}")
            continue
        key = ModuleKey(grant.module_key)
        pair = (grant.role_id, key)
        if pair in by_pair:
            repairs.append(f"dropped duplicate grant {grant.role_id}/{key}")
        by_pair[pair] = ModuleGrant(
            role_id=grant.role_id,
            module_key=key,
            can_read=grant.can_read,
            can_write=grant.can_write,
        )

    normalized: list[ModuleGrant] = []
    for role in roles:
        for blank in blank_grants(role.id):
            grant = by_pair.get((role.id, blank.module_key))
            if grant is None:
                repairs.append(f"filled missing grant {role.id}/{blank.module_key}")
                grant = blank
            normalized.append(grant)

    by_user: dict[str, UserAssignment] = {}
    for assignment in state.user_assignments:
        if assignment.role_id not in role_ids:
            repairs.append(f"dropped assignment of {assignment.user_id!r} to unknown role")
            continue
        if assignment.user_id in by_user:
            repairs.append(f"dropped duplicate assignment of {assignment.user_id!r}")
            del by_user[assignment.user_id]
        by_user[assignment.user_id] = assignment

    return (
        StoreState(
            roles=roles,
            permissions=normalized,
            user_assignments=list(by_user.values()),
        ),
        repairs,
    )
