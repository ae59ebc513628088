"""
Database connection management
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from catalog_bot.config import settings
from catalog_bot.database.models.base import BaseModel

logger = logging.getLogger(__name__)

# Base для моделей (импортируем из моделей)
Base = BaseModel

_engine: Optional[AsyncEngine] = None
_session_maker: Optional[async_sessionmaker] = None


def create_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Создание async engine (для SQLite без параметров пула)"""
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=echo)
    return create_async_engine(
        url,
        echo=echo,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )


def get_engine() -> AsyncEngine:
    """Engine создаётся при первом обращении"""
    global _engine
    if _engine is None:
        _engine = create_engine(settings.database_url, echo=settings.DEBUG)
    return _engine


def get_session_maker() -> async_sessionmaker:
    global _session_maker
    if _session_maker is None:
        _session_maker = create_session_maker(get_engine())
    return _session_maker


async def init_db(engine: Optional[AsyncEngine] = None):
    """Инициализация базы данных: создание отсутствующих таблиц"""
    engine = engine or get_engine()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


async def close_db():
    """Закрытие соединения с базой данных"""
    global _engine, _session_maker
    if _engine is None:
        return
    try:
        await _engine.dispose()
        logger.info("Database connection closed")
    except Exception as e:
        logger.error(f"Failed to close database connection: {e}")
    finally:
        _engine = None
        _session_maker = None

