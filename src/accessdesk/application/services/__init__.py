"""Application services."""

from accessdesk.application.services.async_role_store import AsyncRoleStore
from accessdesk.application.services.role_store import RoleStore

__all__ = ["AsyncRoleStore", "RoleStore"]
