from unittest.mock import MagicMock, patch

import pytest

from paged_content.store.factory import StoreFactory
from paged_content.store.memory_store import InMemoryRepositoryStore
from paged_content.store.postgres_store import PostgresRepositoryStore


class TestStoreFactory:
    def test_creates_memory_store(self) -> None:
        store = StoreFactory.create(MagicMock(store_backend="memory"))
        assert isinstance(store, InMemoryRepositoryStore)

    @patch("paged_content.store.factory.init_pool")
    def test_creates_postgres_store_and_opens_pool(self, mock_init_pool: MagicMock) -> None:
        settings = MagicMock(store_backend="Postgres")

        store = StoreFactory.create(settings)

        assert isinstance(store, PostgresRepositoryStore)
        mock_init_pool.assert_called_once_with(settings)

    def test_raises_for_unknown_backend(self) -> None:
        with pytest.raises(ValueError, match="Unknown store backend"):
            StoreFactory.create(MagicMock(store_backend="fedora"))
