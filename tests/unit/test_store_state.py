"""Unit tests for the role store blob codec and repair."""

import json
from datetime import UTC, datetime

import pytest

from accessdesk.application.dto.store_state import (
    decode_state,
    default_state,
    encode_state,
    normalize_state,
)
from accessdesk.domain.default_roles import SUPER_ADMIN_ID
from accessdesk.domain.entities import ModuleGrant, Role, UserAssignment
from accessdesk.domain.exceptions import ValidationError
from accessdesk.domain.value_objects import ModuleKey, RoleLevel

NOW = datetime(2026, 1, 1, 9, 0, tzinfo=UTC)


def _role(role_id: str, name: str, level: int = 2, locked: bool = False) -> dict:
    return {
        "id": role_id,
        "name": name,
        "description": "",
        "level": level,
        "isLocked": locked,
        "createdAt": NOW.isoformat(),
        "updatedAt": NOW.isoformat(),
    }


def test_encode_uses_camel_case_keys() -> None:
    blob = json.loads(encode_state(default_state(NOW)))

    assert set(blob) == {"roles", "permissions", "userAssignments"}
    assert set(blob["roles"][0]) == {
        "id",
        "name",
        "description",
        "level",
        "isLocked",
        "createdAt",
        "updatedAt",
    }
    assert set(blob["permissions"][0]) == {"roleId", "moduleKey", "canRead", "canWrite"}
    assert blob["roles"][0]["isLocked"] is True
    assert blob["roles"][0]["level"] == 5


def test_encode_keeps_non_ascii_text() -> None:
    raw = encode_state(default_state(NOW))
    assert "erişim" in raw


def test_decode_reads_what_encode_wrote() -> None:
    state = default_state(NOW)
    state.user_assignments.append(UserAssignment("u1", "viewer", NOW))

    decoded = decode_state(encode_state(state), NOW)

    assert decoded.roles == state.roles
    assert decoded.permissions == state.permissions
    assert decoded.user_assignments == state.user_assignments


@pytest.mark.parametrize("raw", ["{not json", "[]", '"text"', "42"])
def test_decode_rejects_malformed_blob(raw: str) -> None:
    with pytest.raises(ValidationError):
        decode_state(raw, NOW)


def test_decode_rejects_undecodable_row() -> None:
    raw = json.dumps({"roles": [{"id": "x"}], "permissions": [], "userAssignments": []})
    with pytest.raises(ValidationError):
        decode_state(raw, NOW)


def test_decode_empty_lists_fall_back_to_defaults() -> None:
    state = decode_state(json.dumps({"roles": [], "permissions": []}), NOW)
    assert len(state.roles) == 5
    assert len(state.permissions) == 25
    assert state.user_assignments == []


def test_decode_non_list_assignments_become_empty() -> None:
    raw = json.dumps({"userAssignments": {"u1": "viewer"}})
    assert decode_state(raw, NOW).user_assignments == []


def test_normalize_default_state_needs_no_repairs() -> None:
    state, repairs = normalize_state(default_state(NOW), NOW)
    assert repairs == []
    assert len(state.permissions) == 25


def test_normalize_fills_missing_grants() -> None:
    raw = json.dumps(
        {
            "roles": [_role(SUPER_ADMIN_ID, "Super Admin", 5, True), _role("qa", "QA")],
            "permissions": [
                {"roleId": "qa", "moduleKey": "gm_dna", "canRead": True, "canWrite": False}
            ],
        }
    )
    state, repairs = normalize_state(decode_state(raw, NOW), NOW)

    qa = [g for g in state.permissions if g.role_id == "qa"]
    assert [g.module_key for g in qa] == list(ModuleKey)
    assert next(g for g in qa if g.module_key == ModuleKey.GM_DNA).can_read is True
    assert len(state.permissions) == 10
    assert repairs


def test_normalize_reseeds_super_admin() -> None:
    raw = json.dumps({"roles": [_role("qa", "QA")], "permissions": []})
    state, repairs = normalize_state(decode_state(raw, NOW), NOW)

    assert state.roles[0].id == SUPER_ADMIN_ID
    assert state.roles[0].is_locked is True
    assert state.roles[0].level == RoleLevel.SYSTEM
    assert all(g.can_read and g.can_write for g in state.permissions if g.role_id == SUPER_ADMIN_ID)
    assert "re-seeded locked super admin role" in repairs


def test_normalize_replaces_unlocked_super_admin() -> None:
    raw = json.dumps({"roles": [_role(SUPER_ADMIN_ID, "Hijacked", 5, False)]})
    state, _ = normalize_state(decode_state(raw, NOW), NOW)

    assert [r.id for r in state.roles] == [SUPER_ADMIN_ID]
    assert state.roles[0].is_locked is True
    assert state.roles[0].name == "Super Admin"


def test_normalize_drops_unknown_module_and_role() -> None:
    state = default_state(NOW)
    state.permissions.append(ModuleGrant("viewer", "finance", True, True))
    state.permissions.append(ModuleGrant("ghost", ModuleKey.GM_DNA, True, True))

    repaired, repairs = normalize_state(state, NOW)

    assert len(repaired.permissions) == 25
    assert all(isinstance(g.module_key, ModuleKey) for g in repaired.permissions)
    assert len(repairs) == 2


def test_normalize_duplicate_grant_keeps_last() -> None:
    state = default_state(NOW)
    state.permissions.append(ModuleGrant("viewer", ModuleKey.GMW_HUB, False, True))

    repaired, _ = normalize_state(state, NOW)

    rows = [
        g
        for g in repaired.permissions
        if g.role_id == "viewer" and g.module_key == ModuleKey.GMW_HUB
    ]
    assert len(rows) == 1
    assert rows[0].can_read is False
    assert rows[0].can_write is True


def test_normalize_assignments() -> None:
    state = default_state(NOW)
    state.user_assignments.extend(
        [
            UserAssignment("u1", "editor", NOW),
            UserAssignment("u2", "ghost", NOW),
            UserAssignment("u1", "viewer", NOW),
        ]
    )

    repaired, _ = normalize_state(state, NOW)

    assert [(a.user_id, a.role_id) for a in repaired.user_assignments] == [("u1", "viewer")]


def test_normalize_keeps_role_order() -> None:
    state = default_state(NOW)
    state.roles.append(
        Role(
            id="qa",
            name="QA",
            description="",
            level=RoleLevel.LIMITED,
            created_at=NOW,
            updated_at=NOW,
        )
    )
    repaired, _ = normalize_state(state, NOW)
    assert [r.id for r in repaired.roles][-1] == "qa"
    assert [g.role_id for g in repaired.permissions][-5:] == ["qa"] * 5


def _default_blob() -> dict:
    return json.loads(encode_state(default_state(NOW)))


@pytest.mark.parametrize("value", ["false", "true", 0, 1, None])
def test_decode_rejects_non_boolean_grant_flags(value) -> None:
    blob = _default_blob()
    for row in blob["permissions"]:
        if row["roleId"] == "viewer":
            row["canWrite"] = value
    with pytest.raises(ValidationError):
        decode_state(json.dumps(blob), NOW)


def test_decode_rejects_non_boolean_lock_flag() -> None:
    blob = _default_blob()
    blob["roles"][1]["isLocked"] = "no"
    with pytest.raises(ValidationError):
        decode_state(json.dumps(blob), NOW)


@pytest.mark.parametrize("value", ["3", True, 2.0])
def test_decode_rejects_non_integer_level(value) -> None:
    blob = _default_blob()
    blob["roles"][1]["level"] = value
    with pytest.raises(ValidationError):
        decode_state(json.dumps(blob), NOW)


def test_normalize_duplicate_role_id_keeps_last() -> None:
    blob = _default_blob()
    blob["roles"].append(_role("admin", "ADMIN", 4))

    state, repairs = normalize_state(decode_state(json.dumps(blob), NOW), NOW)

    admins = [r for r in state.roles if r.id == "admin"]
    assert len(state.roles) == 5
    assert [r.name for r in admins] == ["ADMIN"]
    assert len([g for g in state.permissions if g.role_id == "admin"]) == 5
    assert "dropped duplicate role 'admin'" in repairs


def test_normalize_drops_later_case_insensitive_name_collision() -> None:
    blob = _default_blob()
    blob["roles"].append(_role("role_dup", "EDITOR"))
    blob["permissions"].append(
        {"roleId": "role_dup", "moduleKey": "gm_dna", "canRead": True, "canWrite": True}
    )
    blob["userAssignments"] = [
        {"userId": "u1", "roleId": "role_dup", "assignedAt": NOW.isoformat()}
    ]

    state, repairs = normalize_state(decode_state(json.dumps(blob), NOW), NOW)

    assert [r.id for r in state.roles] == [SUPER_ADMIN_ID, "admin", "manager", "editor", "viewer"]
    assert len(state.permissions) == 25
    assert state.user_assignments == []
    assert "dropped role 'role_dup' with duplicate name 'EDITOR'" in repairs


def test_normalize_locked_role_keeps_name_over_earlier_role() -> None:
    blob = _default_blob()
    blob["roles"].insert(1, _role("impostor", "super admin"))
    blob["roles"].insert(0, blob["roles"].pop(1))

    state, repairs = normalize_state(decode_state(json.dumps(blob), NOW), NOW)

    assert state.roles[0].id == SUPER_ADMIN_ID
    assert "impostor" not in [r.id for r in state.roles]
    assert any("impostor" in r for r in repairs)
