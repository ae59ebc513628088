"""
Time-boxed cache of paginated catalog snapshots
"""
import logging
import time
from typing import Awaitable, Callable, Dict, NamedTuple, Optional

from catalog_bot.monitoring.metrics import track_cache_invalidation, track_cache_lookup
from catalog_bot.schemas.media import ListingSnapshot
from catalog_bot.utils.keyed_lock import KeyedLock

logger = logging.getLogger(__name__)

SnapshotLoader = Callable[[], Awaitable[ListingSnapshot]]
SnapshotFilter = Callable[[ListingSnapshot], bool]


class _Entry(NamedTuple):
    snapshot: ListingSnapshot
    stored_at: float


class ListingCache:
    """
    Кэш страниц каталога с фиксированным TTL и полной инвалидацией.

    Гарантии:
      * не отдаётся снимок старше ttl (время жизни считается от put,
        обращения его не продлевают);
      * не отдаётся снимок, созданный до последнего invalidate_all(),
        в том числе если его загрузка началась до инвалидации, а
        закончилась после неё (см. generation).
    """

    def __init__(
        self,
        ttl: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[int, _Entry] = {}
        self._loads = KeyedLock()
        self._generation = 0

    @property
    def generation(self) -> int:
        """Номер поколения; увеличивается при каждой инвалидации."""
        return self._generation

    def _expired(self, entry: _Entry, now: float) -> bool:
        return now - entry.stored_at >= self.ttl

    def get(self, page: int) -> Optional[ListingSnapshot]:
        entry = self._entries.get(page)
        if entry is not None and self._expired(entry, self._clock()):
            del self._entries[page]
            entry = None
        track_cache_lookup("listing", entry is not None)
        return entry.snapshot if entry is not None else None

    def put(
        self,
        page: int,
        snapshot: ListingSnapshot,
        generation: Optional[int] = None,
    ) -> bool:
        """
        Сохранить снимок страницы.

        Если передан generation и с тех пор была инвалидация, снимок
        устарел и не сохраняется. Возвращает True, если снимок сохранён.
        """
        if generation is not None and generation != self._generation:
            logger.debug("Discarding page %s snapshot from generation %s", page, generation)
            return False
        now = self._clock()
        self._prune(now)
        self._entries[page] = _Entry(snapshot, now)
        return True

    def invalidate_all(self) -> None:
        self._generation += 1
        dropped = len(self._entries)
        self._entries.clear()
        track_cache_invalidation("listing")
        logger.info("Listing cache invalidated (%d pages dropped)", dropped)

    async def get_or_load(
        self,
        page: int,
        loader: SnapshotLoader,
        cacheable: Optional[SnapshotFilter] = None,
    ) -> ListingSnapshot:
        """
        Снимок из кэша, либо загрузка через loader.

        Одновременные промахи по одной странице выполняют одну загрузку:
        остальные ждут на блокировке страницы и затем читают кэш.
        Если cacheable вернул False, снимок отдаётся без сохранения.
        """
        cached = self.get(page)
        if cached is not None:
            return cached

        async with self._loads.acquire(page):
            cached = self.get(page)
            if cached is not None:
                return cached
            generation = self._generation
            snapshot = await loader()
            if cacheable is None or cacheable(snapshot):
                self.put(page, snapshot, generation=generation)
            return snapshot

    def _prune(self, now: float) -> None:
        expired = [page for page, entry in self._entries.items() if self._expired(entry, now)]
        for page in expired:
            del self._entries[page]

    def __len__(self) -> int:
        return len(self._entries)
