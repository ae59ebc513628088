"""
Pytest configuration and fixtures for the video catalog bot tests
"""
import os
from datetime import datetime, timedelta
from typing import AsyncGenerator, List
from unittest.mock import AsyncMock

import httpx
import pytest

# Set test environment variables BEFORE any imports
os.environ["BOT_TOKEN"] = "123456:TEST-TOKEN"
os.environ["ADMIN_ID"] = "42"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["EXTERNAL_URL"] = ""

from tests.factories import ADMIN_ID, THUMBNAIL_URL, WEBHOOK_SECRET


class FakeClock:
    """Управляемые часы для проверки TTL."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite file"""
    from catalog_bot.config import Settings

    return Settings(
        _env_file=None,
        BOT_TOKEN="123456:TEST-TOKEN",
        ADMIN_ID=str(ADMIN_ID),
        WEBHOOK_SECRET=WEBHOOK_SECRET,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        EXTERNAL_URL="",
        GITHUB_TOKEN="gh-token",
        GITHUB_USERNAME="owner",
        GITHUB_REPO="repo",
    )


@pytest.fixture
async def engine(settings) -> AsyncGenerator:
    """
    File-backed SQLite engine with the schema created

    A file (not :memory:) lets concurrent sessions see the same data.
    """
    from catalog_bot.database.connection import create_engine, init_db

    engine = create_engine(settings.database_url)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    from catalog_bot.database.connection import create_session_maker

    return create_session_maker(engine)


@pytest.fixture
def store(session_maker):
    from catalog_bot.database.store import CatalogStore

    return CatalogStore(session_maker)


@pytest.fixture
def seed_media(session_maker):
    """Insert N records with strictly increasing created_at; returns them oldest first."""
    from catalog_bot.database.models.media import MediaFile

    async def _seed(count: int) -> List[MediaFile]:
        base = datetime(2024, 1, 1, 12, 0, 0)
        rows = [
            MediaFile(
                title=f"Video {i}",
                file_id=f"file-{i}",
                thumbnail="",
                created_at=base + timedelta(minutes=i),
                updated_at=base + timedelta(minutes=i),
            )
            for i in range(count)
        ]
        async with session_maker() as session:
            session.add_all(rows)
            await session.commit()
        return rows

    return _seed


@pytest.fixture
def transport():
    """Мок исходящих вызовов Telegram (порядок виден в mock_calls)."""
    return AsyncMock()


@pytest.fixture
def relay():
    """Мок MediaRelay: миниатюра всегда публикуется успешно."""
    mock = AsyncMock()
    mock.relay.return_value = THUMBNAIL_URL
    return mock


@pytest.fixture
async def container(settings, store, transport, relay):
    from catalog_bot.dependencies import build_container

    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    container = build_container(settings, store=store, transport=transport, relay=relay, http=http)
    yield container
    await container.aclose()


@pytest.fixture
async def client(container) -> AsyncGenerator:
    """Async HTTP client against the app with the test container"""
    from httpx import ASGITransport, AsyncClient
    from catalog_bot.main import create_app

    app = create_app(container=container)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

