import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from paged_content.config.settings import Settings
from paged_content.database.connection import close_pool, get_connection, init_pool
from paged_content.database.schema import create_schema
from paged_content.objects.models import BOOK, BOOK_PAGE, Datastream, RepositoryObject
from paged_content.pages.enumerator import PageEnumerator
from paged_content.store.postgres_store import PostgresRepositoryStore


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "paged_content_test")
    return Settings(store_backend="postgres")


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            create_schema(conn)
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def id_prefix(db_conn: psycopg.Connection[Any]) -> Generator[str, None, None]:
    """A unique object id prefix; rows using it are deleted afterwards."""
    prefix = f"it-{uuid.uuid4().hex[:8]}"
    yield prefix
    pattern = f"{prefix}%"
    with db_conn.cursor() as cur:
        cur.execute("DELETE FROM relationships WHERE subject LIKE %s", (pattern,))
        cur.execute("DELETE FROM repository_objects WHERE id LIKE %s", (pattern,))
    db_conn.commit()


@pytest.fixture
def pg_store(integration_pool: None) -> PostgresRepositoryStore:
    return PostgresRepositoryStore()


@pytest.fixture
def pg_book(pg_store: PostgresRepositoryStore, id_prefix: str) -> RepositoryObject:
    """A stored book with two pages carrying OBJ images."""
    book = RepositoryObject(id=f"{id_prefix}:book", label="Book", models=frozenset({BOOK}))
    pg_store.save_object(book)
    enumerator = PageEnumerator(pg_store)
    for number in (1, 2):
        page = RepositoryObject(
            id=f"{id_prefix}:book-p{number}",
            label=f"Page {number}",
            models=frozenset({BOOK_PAGE}),
            datastreams={
                "OBJ": Datastream("OBJ", f"image {number}".encode(), "image/tiff", "OBJ"),
            },
        )
        pg_store.save_object(page)
        enumerator.set_page_number(page.id, book.id, number)
    return book
