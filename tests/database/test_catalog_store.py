"""
Integration tests for CatalogStore on SQLite
"""
import re

import pytest

from catalog_bot.database.connection import create_engine, create_session_maker
from catalog_bot.database.store import CatalogStore
from catalog_bot.exceptions import StoreFailure


class TestCatalogStore:

    @pytest.mark.asyncio
    async def test_create_assigns_opaque_id(self, store):
        record = await store.create(title="Trailer", file_id="tg-file", thumbnail="https://x/t.jpg")

        assert re.fullmatch(r"[0-9a-f]{24}", record.id)
        assert record.title == "Trailer"
        assert record.file_id == "tg-file"
        assert record.thumbnail == "https://x/t.jpg"
        assert record.created_at is not None

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, store):
        ids = {(await store.create(title="t", file_id=f"f{i}")).id for i in range(10)}
        assert len(ids) == 10

    @pytest.mark.asyncio
    async def test_find_by_id(self, store):
        record = await store.create(title="Trailer", file_id="tg-file")

        assert await store.find_by_id(record.id) == record
        assert await store.find_by_id("abc123") is None
        assert await store.find_file_id(record.id) == "tg-file"
        assert await store.find_file_id("abc123") is None

    @pytest.mark.asyncio
    async def test_records_are_frozen_values(self, store):
        record = await store.create(title="Trailer", file_id="tg-file")
        with pytest.raises(Exception):
            record.title = "Changed"

    @pytest.mark.asyncio
    async def test_find_page_newest_first(self, store, seed_media):
        rows = await seed_media(5)

        page = await store.find_page(offset=1, limit=2)

        assert [r.title for r in page] == ["Video 3", "Video 2"]
        assert page[0].id == rows[3].id

    @pytest.mark.asyncio
    async def test_count(self, store, seed_media):
        assert await store.count() == 0
        await seed_media(3)
        assert await store.count() == 3

    @pytest.mark.asyncio
    async def test_database_errors_become_store_failure(self, tmp_path):
        # Схема не создана: любой запрос падает с OperationalError
        engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
        store = CatalogStore(create_session_maker(engine))
        try:
            with pytest.raises(StoreFailure):
                await store.count()
            with pytest.raises(StoreFailure):
                await store.find_page(0, 30)
            with pytest.raises(StoreFailure):
                await store.find_by_id("abc")
            with pytest.raises(StoreFailure):
                await store.create(title="t", file_id="f")
        finally:
            await engine.dispose()
