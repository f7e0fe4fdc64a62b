"""
Integration tests for englitune against a real PostgreSQL instance.

These tests seed a small corpus and verify that:
1. The psycopg row store runs the generated query end to end
2. Exclusions remove exactly the named speaker/sequence pairs
3. The HTTP app serves the same data through its lifespan-managed pool

Run with: RUN_INTEGRATION_TESTS=1 pytest tests/integration/
"""

from __future__ import annotations

import os

import psycopg
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from englitune.api.app import create_app
from englitune.config import Settings
from englitune.domain.errors import StoreError
from englitune.infrastructure.db_factory import PoolManager, PsycopgRowStore
from englitune.queries.executor import get_random_transcripts_with_speaker

SEEDED_SPEAKERS = ["p225", "p226", "p227"]
SEEDED_SEQUENCES = ["001", "002", "003", "004"]

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_INTEGRATION_TESTS", "0") != "1",
    reason="Integration tests require RUN_INTEGRATION_TESTS=1 and reachable Postgres",
)


@pytest_asyncio.fixture
async def pool_manager(test_dsn: str):
    manager = PoolManager(Settings(), dsn=test_dsn, min_size=1, max_size=2)
    await manager.open()
    try:
        yield manager
    finally:
        await manager.close()


class TestRowStore:
    """Queries against the seeded corpus."""

    @pytest.mark.asyncio
    async def test_limit_caps_result_size(self, pool_manager, seeded_corpus_small: int):
        records = await get_random_transcripts_with_speaker(pool_manager.row_store(), 5, {})

        assert len(records) == 5
        assert all(record.speaker in SEEDED_SPEAKERS for record in records)

    @pytest.mark.asyncio
    async def test_limit_above_corpus_size_returns_everything(
        self, pool_manager, seeded_corpus_small: int
    ):
        records = await get_random_transcripts_with_speaker(pool_manager.row_store(), 100, {})

        assert len(records) == seeded_corpus_small

    @pytest.mark.asyncio
    async def test_exclusions_remove_only_named_pairs(self, pool_manager, seeded_corpus_small: int):
        excluded = {"p225": ("001", "002"), "p226": tuple(SEEDED_SEQUENCES)}

        records = await get_random_transcripts_with_speaker(pool_manager.row_store(), 100, excluded)

        pairs = {(record.speaker, record.sequence) for record in records}
        assert len(records) == seeded_corpus_small - 6
        assert ("p225", "001") not in pairs
        assert ("p225", "003") in pairs
        assert not any(speaker == "p226" for speaker, _ in pairs)

    @pytest.mark.asyncio
    async def test_null_regions_round_trip(
        self, pool_manager, seeded_corpus_small: int, db_connection: psycopg.Connection
    ):
        with db_connection.cursor() as cur:
            cur.execute("UPDATE speakers SET region = NULL WHERE id = 'p227';")
        db_connection.commit()

        records = await get_random_transcripts_with_speaker(
            pool_manager.row_store(), 100, {"p225": tuple(SEEDED_SEQUENCES), "p226": tuple(SEEDED_SEQUENCES)}
        )

        assert records
        assert all(record.region is None for record in records)

    @pytest.mark.asyncio
    async def test_missing_table_raises_store_error(self, pool_manager, db_connection_available: bool):
        store = pool_manager.row_store()

        with pytest.raises(StoreError) as excinfo:
            await store.fetch_all("SELECT * FROM no_such_table LIMIT %s;", (1,))

        assert isinstance(excinfo.value.__cause__, psycopg.Error)


class TestHttp:
    """The app opens its own pool when no row store is injected."""

    def test_serves_records(self, test_settings: Settings, seeded_corpus_small: int):
        with TestClient(create_app(settings=test_settings)) as client:
            response = client.get("/", params={"limit": "3", "excluded": "p225=001"})

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 3
        assert isinstance(client.app.state.row_store, PsycopgRowStore)
