"""Pytest fixtures for AccessDesk tests."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from accessdesk.application.services.role_store import RoleStore
from accessdesk.domain.entities import CurrentUser
from accessdesk.domain.exceptions import StorageError
from accessdesk.domain.value_objects import PlatformRole
from accessdesk.infrastructure.storage.memory_storage import InMemoryStorage


# --- Fake adapters ---


class TickingClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or datetime(2026, 1, 1, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        now = self._now
        self._now = now + timedelta(seconds=1)
        return now


class FailingStorage:
    """Storage whose reads and/or writes raise StorageError."""

    def __init__(self, fail_get: bool = True, fail_set: bool = True) -> None:
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        if self.fail_get:
            raise StorageError("storage unavailable")
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_set:
            raise StorageError("quota exceeded")
        self.data[key] = value


class LoopRecordingStorage(InMemoryStorage):
    """In-memory storage that records whether each call ran on an event loop thread."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, bool]] = []

    def _record(self, op: str) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self.calls.append((op, False))
        else:
            self.calls.append((op, True))

    def get(self, key: str) -> str | None:
        self._record("get")
        return super().get(key)

    def set(self, key: str, value: str) -> None:
        self._record("set")
        super().set(key, value)


class FakeIdentityProvider:
    """Maps fixed tokens to users."""

    def __init__(self, users: dict[str, CurrentUser]) -> None:
        self._users = users

    def authenticate(self, token: str) -> CurrentUser | None:
        return self._users.get(token)


def make_user(role: PlatformRole, user_id: str | None = None) -> CurrentUser:
    """CurrentUser with the given platform role."""
    return CurrentUser(
        id=user_id or f"user-{role.value}",
        email=f"{role.value}@example.com",
        full_name=role.value.title(),
        title=role.value,
        role=role,
    )


# --- Fixtures ---


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def storage() -> InMemoryStorage:
    """Fresh in-memory storage for each test."""
    return InMemoryStorage()


@pytest.fixture
def role_store(storage, clock) -> RoleStore:
    """Role store loaded from empty storage (default state)."""
    store = RoleStore(storage, clock=clock)
    store.load()
    return store


@pytest.fixture
def owner() -> CurrentUser:
    return make_user(PlatformRole.SYSTEM_OWNER)


@pytest.fixture
def ceo() -> CurrentUser:
    return make_user(PlatformRole.CEO)


@pytest.fixture
def viewer() -> CurrentUser:
    return make_user(PlatformRole.VIEWER)
