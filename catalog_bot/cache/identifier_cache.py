"""
Short public id -> Telegram file_id cache
"""
import logging
from typing import Awaitable, Callable, MutableMapping, Optional

from cachetools import LRUCache

from catalog_bot.exceptions import NotFound
from catalog_bot.monitoring.metrics import track_cache_lookup

logger = logging.getLogger(__name__)

HandleLookup = Callable[[str], Awaitable[Optional[str]]]


class IdentifierCache:
    """
    Кэш соответствия короткого id записи и file_id в Telegram.

    Заполняется лениво при первом успешном разрешении и живёт всё время
    процесса: записи каталога не меняются после создания, поэтому
    закэшированный file_id всегда совпадает с тем, что лежит в БД.
    Промахи не кэшируются.

    Если задан max_size, кэш вытесняет давно не используемые записи (LRU).
    """

    def __init__(self, max_size: Optional[int] = None) -> None:
        if max_size is not None and max_size <= 0:
            raise ValueError("max_size must be positive")
        self._entries: MutableMapping[str, str] = (
            LRUCache(maxsize=max_size) if max_size is not None else {}
        )
        self.max_size = max_size

    def get(self, short_id: str) -> Optional[str]:
        return self._entries.get(short_id)

    def _store(self, short_id: str, handle: str) -> None:
        self._entries[short_id] = handle

    async def resolve(self, short_id: str, lookup: HandleLookup) -> str:
        """
        Вернуть file_id по короткому id.

        Args:
            short_id: Идентификатор записи из ссылки (без префикса)
            lookup: Поиск file_id в каталоге, None если записи нет

        Raises:
            NotFound: записи с таким id нет
        """
        handle = self.get(short_id)
        if handle is not None:
            track_cache_lookup("identifier", True)
            return handle

        track_cache_lookup("identifier", False)
        handle = await lookup(short_id)
        if handle is None:
            raise NotFound(short_id)

        self._store(short_id, handle)
        logger.debug("Cached file handle for %s", short_id)
        return handle

    def __contains__(self, short_id: object) -> bool:
        return short_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
