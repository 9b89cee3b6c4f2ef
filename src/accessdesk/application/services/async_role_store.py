"""Async access to the role store for ASGI responders.

Mutations and loads run in a worker thread, one at a time, so a blocking
storage round trip never stalls the event loop and a reload cannot interleave
with a commit. Reads stay on the loop; they see whole snapshots because the
store swaps its state with a single assignment.
"""

import asyncio

from accessdesk.application.dto.permission_state import PermissionState
from accessdesk.application.dto.persistence_status import PersistenceStatus
from accessdesk.application.services.role_store import RoleStore
from accessdesk.domain.entities import ModuleGrant, Role, UserAssignment


class AsyncRoleStore:
    """Serializes RoleStore writes behind one asyncio.Lock."""

    def __init__(self, role_store: RoleStore) -> None:
        self._store = role_store
        self._lock = asyncio.Lock()

    async def _run(self, fn, *args, **kwargs):
        async with self._lock:
            return await asyncio.to_thread(fn, *args, **kwargs)

    # --- Writes ---

    async def load(self) -> PersistenceStatus:
        return await self._run(self._store.load)

    async def reset_to_defaults(self) -> PersistenceStatus:
        return await self._run(self._store.reset_to_defaults)

    async def create_role(self, name: str, description: str, level: int) -> Role | None:
        return await self._run(self._store.create_role, name, description, level)

    async def update_role(
        self,
        role_id: str,
        name: str | None = None,
        description: str | None = None,
        level: int | None = None,
    ) -> Role | None:
        return await self._run(
            self._store.update_role, role_id, name=name, description=description, level=level
        )

    async def delete_role(self, role_id: str) -> bool:
        return await self._run(self._store.delete_role, role_id)

    async def assign_user_to_role(self, user_id: str, role_id: str) -> UserAssignment | None:
        return await self._run(self._store.assign_user_to_role, user_id, role_id)

    async def unassign_user(self, user_id: str) -> bool:
        return await self._run(self._store.unassign_user, user_id)

    async def update_permission(
        self, role_id: str, module_key: str, can_read: bool, can_write: bool
    ) -> bool:
        return await self._run(
            self._store.update_permission, role_id, module_key, can_read, can_write
        )

    async def reset_permissions(self, role_id: str) -> bool:
        return await self._run(self._store.reset_permissions, role_id)

    # --- Reads ---

    @property
    def roles(self) -> list[Role]:
        return self._store.roles

    @property
    def permissions(self) -> list[ModuleGrant]:
        return self._store.permissions

    @property
    def user_assignments(self) -> list[UserAssignment]:
        return self._store.user_assignments

    @property
    def last_load_status(self) -> PersistenceStatus | None:
        return self._store.last_load_status

    @property
    def last_save_status(self) -> PersistenceStatus | None:
        return self._store.last_save_status

    def get_role(self, role_id: str) -> Role | None:
        return self._store.get_role(role_id)

    def get_user_count(self, role_id: str) -> int:
        return self._store.get_user_count(role_id)

    def get_role_permissions(self, role_id: str) -> list[ModuleGrant]:
        return self._store.get_role_permissions(role_id)

    def get_users_for_role(self, role_id: str) -> list[UserAssignment]:
        return self._store.get_users_for_role(role_id)

    def get_permission_state(self, role_id: str, module_key: str) -> PermissionState:
        return self._store.get_permission_state(role_id, module_key)
