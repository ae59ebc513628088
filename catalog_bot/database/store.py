"""
Catalog store: session-per-call facade over MediaRepository
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from catalog_bot.database.repositories.media_repository import MediaRepository
from catalog_bot.exceptions import StoreFailure
from catalog_bot.schemas.media import MediaItem

logger = logging.getLogger(__name__)


class CatalogStore:
    """
    Хранилище каталога.

    Каждый вызов открывает собственную сессию, поэтому чтение страницы и
    подсчёт записей можно выполнять одновременно. Ошибки SQLAlchemy
    поднимаются как StoreFailure, наружу отдаются неизменяемые MediaItem.
    """

    def __init__(self, session_maker: async_sessionmaker):
        self._session_maker = session_maker

    async def create(self, title: str, file_id: str, thumbnail: str = "") -> MediaItem:
        """Создание записи; после возврата она видна всем читателям."""
        try:
            async with self._session_maker() as session:
                record = await MediaRepository(session).create(
                    title=title,
                    file_id=file_id,
                    thumbnail=thumbnail,
                )
                await session.commit()
                return MediaItem.model_validate(record)
        except SQLAlchemyError as e:
            logger.error("Failed to create media record: %s", e)
            raise StoreFailure("Failed to create media record") from e

    async def find_by_id(self, record_id: str) -> Optional[MediaItem]:
        try:
            async with self._session_maker() as session:
                record = await MediaRepository(session).get_by_id(record_id)
                return MediaItem.model_validate(record) if record else None
        except SQLAlchemyError as e:
            logger.error("Failed to read media record %s: %s", record_id, e)
            raise StoreFailure("Failed to read media record") from e

    async def find_file_id(self, record_id: str) -> Optional[str]:
        """file_id записи или None (поиск для IdentifierCache)."""
        record = await self.find_by_id(record_id)
        return record.file_id if record else None

    async def find_page(self, offset: int, limit: int) -> List[MediaItem]:
        """Страница записей, новые первыми."""
        try:
            async with self._session_maker() as session:
                records = await MediaRepository(session).get_all(offset=offset, limit=limit)
                return [MediaItem.model_validate(r) for r in records]
        except SQLAlchemyError as e:
            logger.error("Failed to read media page offset=%s: %s", offset, e)
            raise StoreFailure("Failed to read media page") from e

    async def count(self) -> int:
        try:
            async with self._session_maker() as session:
                return await MediaRepository(session).count()
        except SQLAlchemyError as e:
            logger.error("Failed to count media records: %s", e)
            raise StoreFailure("Failed to count media records") from e
