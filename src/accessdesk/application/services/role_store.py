"""Role management store.

Owns dynamic roles, module grants and user assignments. One instance is
built at the composition root and injected wherever it is needed.

Validation failures come back as None/False, never as exceptions. Storage
failures are logged and reported through PersistenceStatus; they never
escape. Every mutation builds a new StoreState and swaps it in with a single
assignment, then saves.
"""

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime
from uuid import uuid4

from accessdesk.application.dto.permission_state import PermissionState
from accessdesk.application.dto.persistence_status import PersistenceStatus
from accessdesk.application.dto.store_state import (
    STORAGE_KEY,
    StoreState,
    decode_state,
    default_state,
    encode_state,
    normalize_state,
)
from accessdesk.application.ports import KeyValueStorage
from accessdesk.domain.entities import (
    ModuleGrant,
    Role,
    RoleDefinition,
    UserAssignment,
    blank_grants,
)
from accessdesk.domain.exceptions import StorageError, ValidationError
from accessdesk.domain.value_objects import ModuleKey, RoleLevel

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _parse_level(level: int) -> RoleLevel | None:
    try:
        return RoleLevel(level)
    except ValueError:
        return None


def _parse_module(module_key: str) -> ModuleKey | None:
    try:
        return ModuleKey(module_key)
    except ValueError:
        return None


class RoleStore:
    """In-memory role/grant/assignment state backed by key-value storage."""

    def __init__(
        self,
        storage: KeyValueStorage,
        storage_key: str = STORAGE_KEY,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._storage = storage
        self._key = storage_key
        self._clock = clock
        self._state = default_state(clock())
        self.last_load_status: PersistenceStatus | None = None
        self.last_save_status: PersistenceStatus | None = None

    # --- Snapshots ---

    @property
    def roles(self) -> list[Role]:
        return list(self._state.roles)

    @property
    def permissions(self) -> list[ModuleGrant]:
        return list(self._state.permissions)

    @property
    def user_assignments(self) -> list[UserAssignment]:
        return list(self._state.user_assignments)

    @property
    def state(self) -> StoreState:
        return self._state

    # --- Persistence ---

    def load(self) -> PersistenceStatus:
        """Replace state with what storage holds, or with defaults.

        Empty storage, unreadable storage and corrupt blobs all fall back to
        the default state. The returned status says which case applied.
        """
        now = self._clock()
        state = default_state(now)
        try:
            raw = self._storage.get(self._key)
        except StorageError as e:
            logger.warning("Role store load failed, using defaults: %s", e)
            status = PersistenceStatus.FAILED
        else:
            if not raw:
                status = PersistenceStatus.DEFAULTED
            else:
                try:
                    state = decode_state(raw, now)
                    status = PersistenceStatus.LOADED
                except ValidationError as e:
                    logger.warning("Role store blob is corrupt, using defaults: %s", e)
                    status = PersistenceStatus.CORRUPT

        state, repairs = normalize_state(state, now)
        for repair in repairs:
            logger.warning("Role store repair: %s", repair)

        self._state = state
        self.last_load_status = status
        logger.info(
            "Role store %s: %d roles, %d grants, %d assignments",
            status,
            len(state.roles),
            len(state.permissions),
            len(state.user_assignments),
        )
        return status

    def save(self) -> PersistenceStatus:
        """Write current state to storage. Failures are logged, not raised."""
        try:
            self._storage.set(self._key, encode_state(self._state))
        except StorageError as e:
            logger.warning("Role store save failed, change kept in memory only: %s", e)
            status = PersistenceStatus.FAILED
        else:
            status = PersistenceStatus.SAVED
        self.last_save_status = status
        return status

    def reset_to_defaults(self) -> PersistenceStatus:
        """Drop every change and persist the seed state."""
        self._commit(default_state(self._clock()))
        logger.info("Role store reset to defaults")
        return self.last_save_status

    def _commit(self, state: StoreState) -> None:
        self._state = state
        self.save()

    # --- Queries ---

    def get_role(self, role_id: str) -> Role | None:
        for role in self._state.roles:
            if role.id == role_id:
                return role
        return None

    def get_user_count(self, role_id: str) -> int:
        return sum(1 for a in self._state.user_assignments if a.role_id == role_id)

    def get_role_permissions(self, role_id: str) -> list[ModuleGrant]:
        return [p for p in self._state.permissions if p.role_id == role_id]

    def get_users_for_role(self, role_id: str) -> list[UserAssignment]:
        return [a for a in self._state.user_assignments if a.role_id == role_id]

    def get_assignment(self, user_id: str) -> UserAssignment | None:
        for assignment in self._state.user_assignments:
            if assignment.user_id == user_id:
                return assignment
        return None

    def get_permission_state(self, role_id: str, module_key: str) -> PermissionState:
        """Flags for one (role, module) pair; all-false when no row exists."""
        for p in self._state.permissions:
            if p.role_id == role_id and p.module_key == module_key:
                return PermissionState(can_read=p.can_read, can_write=p.can_write)
        return PermissionState()

    def has_module_access(self, role_id: str, module_key: str) -> bool:
        state = self.get_permission_state(role_id, module_key)
        return state.can_read or state.can_write

    def _name_taken(self, name: str, exclude_id: str | None = None) -> bool:
        lowered = name.lower()
        return any(
            r.name.lower() == lowered and r.id != exclude_id for r in self._state.roles
        )

    # --- Roles ---

    def create_role(self, name: str, description: str, level: int) -> Role | None:
        """Create an unlocked role with all-false grants on every module.

        Returns None for a blank name, a case-insensitive name collision or
        a level outside 1-5.
        """
        name = name.strip()
        if not name or self._name_taken(name):
            return None
        role_level = _parse_level(level)
        if role_level is None:
            return None

        definition = RoleDefinition.new(
            role_id=f"role_{uuid4().hex[:12]}",
            name=name,
            description=description.strip(),
            level=role_level,
            now=self._clock(),
        )
        self._commit(
            replace(
                self._state,
                roles=[*self._state.roles, definition.role],
                permissions=[*self._state.permissions, *definition.grants],
            )
        )
        logger.info("Created role %s (%s)", definition.role.id, name)
        return definition.role

    def update_role(
        self,
        role_id: str,
        name: str | None = None,
        description: str | None = None,
        level: int | None = None,
    ) -> Role | None:
        """Overwrite the provided fields of an unlocked role.

        Returns None when the role is missing or locked, the new name is
        blank or taken by another role, or the level is out of range.
        """
        role = self.get_role(role_id)
        if role is None or role.is_locked:
            return None

        changes: dict[str, object] = {}
        if name is not None:
            name = name.strip()
            if not name or self._name_taken(name, exclude_id=role_id):
                return None
            changes["name"] = name
        if description is not None:
            changes["description"] = description.strip()
        if level is not None:
            role_level = _parse_level(level)
            if role_level is None:
                return None
            changes["level"] = role_level

        updated = replace(role, **changes, updated_at=self._clock())
        self._commit(
            replace(
                self._state,
                roles=[updated if r.id == role_id else r for r in self._state.roles],
            )
        )
        return updated

    def delete_role(self, role_id: str) -> bool:
        """Remove an unlocked role with its grants and assignments."""
        role = self.get_role(role_id)
        if role is None or role.is_locked:
            return False

        self._commit(
            StoreState(
                roles=[r for r in self._state.roles if r.id != role_id],
                permissions=[p for p in self._state.permissions if p.role_id != role_id],
                user_assignments=[
                    a for a in self._state.user_assignments if a.role_id != role_id
                ],
            )
        )
        logger.info("Deleted role %s", role_id)
        return True

    # --- Assignments ---

    def assign_user_to_role(self, user_id: str, role_id: str) -> UserAssignment | None:
        """Give *user_id* exactly one assignment, to *role_id*.

        Returns None when the role does not exist.
        """
        if self.get_role(role_id) is None:
            return None

        assignment = UserAssignment(
            user_id=user_id, role_id=role_id, assigned_at=self._clock()
        )
        self._commit(
            replace(
                self._state,
                user_assignments=[
                    *(a for a in self._state.user_assignments if a.user_id != user_id),
                    assignment,
                ],
            )
        )
        return assignment

    def unassign_user(self, user_id: str) -> bool:
        if self.get_assignment(user_id) is None:
            return False
        self._commit(
            replace(
                self._state,
                user_assignments=[
                    a for a in self._state.user_assignments if a.user_id != user_id
                ],
            )
        )
        return True

    # --- Grants ---

    def _editable(self, role_id: str) -> bool:
        role = self.get_role(role_id)
        return role is not None and not role.is_locked

    def update_permission(
        self, role_id: str, module_key: str, can_read: bool, can_write: bool
    ) -> bool:
        """Replace the grant row for (role, module). No-op on locked or unknown roles."""
        key = _parse_module(module_key)
        if key is None or not self._editable(role_id):
            return False

        grant = ModuleGrant(
            role_id=role_id, module_key=key, can_read=can_read, can_write=can_write
        )
        self._commit(self._with_grants(role_id, {key: grant}))
        return True

    def reset_permissions(self, role_id: str) -> bool:
        """Set every grant of an unlocked role back to all-false."""
        if not self._editable(role_id):
            return False

        grants = {g.module_key: g for g in blank_grants(role_id)}
        self._commit(self._with_grants(role_id, grants))
        return True

    def _with_grants(self, role_id: str, grants: dict[ModuleKey, ModuleGrant]) -> StoreState:
        """State with *grants* swapped in place for the matching rows of *role_id*."""
        permissions = [
            grants.get(p.module_key, p) if p.role_id == role_id else p
            for p in self._state.permissions
        ]
        return replace(self._state, permissions=permissions)
