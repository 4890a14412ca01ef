import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from research_reader.config.settings import Settings
from research_reader.database.connection import Database
from research_reader.database.schema import init_schema

TABLES = ("audio_files", "transcreations", "documents", "cache")


def _truncate(db: Database) -> None:
    with db.connection() as conn:
        with conn.cursor() as cur:
            for table in TABLES:
                cur.execute(f"DELETE FROM {table}")
        conn.commit()


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "research_reader_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def database(test_settings: Settings) -> Generator[Database, None, None]:
    db = Database.from_settings(test_settings)
    try:
        db.open()
        init_schema(db)
    except Exception as e:
        db.close()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a scratch database"
        )
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db(database: Database) -> Generator[Database, None, None]:
    """The shared database, emptied around each test."""
    _truncate(database)
    yield database
    _truncate(database)


@pytest.fixture
def db_conn(db: Database) -> Generator[psycopg.Connection[Any], None, None]:
    with db.connection() as conn:
        yield conn
