from paged_content.config.settings import Settings
from paged_content.database.connection import init_pool
from paged_content.store.base import BaseRepositoryStore
from paged_content.store.memory_store import InMemoryRepositoryStore
from paged_content.store.postgres_store import PostgresRepositoryStore


class StoreFactory:
    """Creates the repository store selected by settings."""

    BACKENDS: tuple[str, ...] = ("memory", "postgres")

    @classmethod
    def create(cls, settings: Settings) -> BaseRepositoryStore:
        backend = settings.store_backend.lower()
        if backend == "memory":
            return InMemoryRepositoryStore()
        if backend == "postgres":
            init_pool(settings)
            return PostgresRepositoryStore()
        raise ValueError(
            f"Unknown store backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
