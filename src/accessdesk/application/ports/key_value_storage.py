"""Key-value storage port - durable home of the serialized role store."""

from typing import Protocol


class KeyValueStorage(Protocol):
    """Port for string blobs under fixed keys.

    Implementations raise StorageError when the backend cannot be read or
    written.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...
