"""Storage backend selection."""

from accessdesk.config import Settings
from accessdesk.infrastructure.storage.file_storage import FileStorage
from accessdesk.infrastructure.storage.memory_storage import InMemoryStorage
from accessdesk.infrastructure.storage.postgres_storage import PostgresStorage, create_pool


def create_storage(settings: Settings) -> InMemoryStorage | FileStorage | PostgresStorage:
    """Build the storage adapter named by ``settings.storage_backend``."""
    if settings.storage_backend == "postgres":
        return PostgresStorage(create_pool(settings.database_url))
    if settings.storage_backend == "file":
        return FileStorage(settings.storage_path)
    return InMemoryStorage()
