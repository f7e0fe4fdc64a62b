"""
Pytest configuration for englitune.

Provides fixtures for:
- An in-memory row store recording the queries it receives
- Database connection management
- Test corpus seeding for integration tests
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Generator

import psycopg
import pytest

from englitune.config import Settings
from tests.fakes import FakeRowStore


@pytest.fixture
def fake_store() -> FakeRowStore:
    return FakeRowStore()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "englitune"),
        log_level="DEBUG",
        cors_origin="*",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped database connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="session")
def db_schema_initialized(db_connection: psycopg.Connection) -> bool:
    """
    Ensure the corpus schema exists (db/init.sql is idempotent).
    """
    init_sql_path = Path(__file__).parent.parent / "db" / "init.sql"
    with db_connection.cursor() as cur:
        cur.execute(init_sql_path.read_text(encoding="utf-8"))
    db_connection.commit()
    return True


@pytest.fixture(scope="function")
def clean_corpus_tables(db_connection: psycopg.Connection, db_schema_initialized: bool):
    """
    Empty both corpus tables before and after each test function.
    """
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE transcripts, speakers CASCADE;")
    db_connection.commit()
    yield
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE transcripts, speakers CASCADE;")
    db_connection.commit()


@pytest.fixture(scope="function")
def seeded_corpus_small(
    db_connection: psycopg.Connection,
    clean_corpus_tables,
    test_dsn: str,
) -> int:
    """
    Seed 3 speakers x 4 transcripts for quick integration tests.

    Returns the number of transcripts seeded.
    """
    from scripts.seed_corpus import _copy_into_db, _generate_corpus_csv

    with tempfile.TemporaryDirectory() as tmpdir:
        speakers_path, transcripts_path, _ = _generate_corpus_csv(
            Path(tmpdir), speakers=3, per_speaker=4, seed=42
        )
        _copy_into_db(test_dsn, speakers_path, transcripts_path)

    with db_connection.cursor() as cur:
        cur.execute("SELECT COUNT(*) FROM transcripts;")
        count = cur.fetchone()[0]

    return count
