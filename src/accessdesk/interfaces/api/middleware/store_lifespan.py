"""Role store lifespan middleware - loads on startup, closes storage on shutdown."""

import asyncio
import logging
from typing import Any

from accessdesk.application.services.async_role_store import AsyncRoleStore

logger = logging.getLogger(__name__)


class RoleStoreLifespanMiddleware:
    """Opens storage and loads the role store when the ASGI server starts.

    Loading runs in a worker thread. Requests served before it finishes see
    the default state.
    """

    def __init__(self, role_store: AsyncRoleStore, storage: object) -> None:
        self._role_store = role_store
        self._storage = storage

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Open storage (when it has a pool) and load state."""
        opener = getattr(self._storage, "open", None)
        if opener:
            await asyncio.to_thread(opener)
        status = await self._role_store.load()
        logger.info("Role store ready (%s)", status)

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Close storage when the ASGI server shuts down."""
        closer = getattr(self._storage, "close", None)
        if closer:
            await asyncio.to_thread(closer)
