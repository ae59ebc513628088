"""
Paginated catalog listing for the HTTP API
"""
import logging
import math
import re
from typing import Any

from catalog_bot.cache.listing_cache import ListingCache
from catalog_bot.database.store import CatalogStore
from catalog_bot.schemas.media import ListingSnapshot

logger = logging.getLogger(__name__)

_PAGE_RE = re.compile(r"[0-9]+")


def normalize_page(raw: Any) -> int:
    """Номер страницы >= 1; всё, что не является целым числом >= 1, становится 1."""
    if raw is None or isinstance(raw, bool):
        return 1
    if isinstance(raw, int):
        return raw if raw >= 1 else 1
    text = str(raw).strip()
    if not _PAGE_RE.fullmatch(text):
        return 1
    page = int(text)
    return page if page >= 1 else 1


class ListingService:
    """
    Страницы каталога через ListingCache.

    Страницы за последней не запрашиваются из БД и не кэшируются: ответ
    содержит пустой список и актуальные total/total_pages.
    """

    def __init__(self, store: CatalogStore, cache: ListingCache, per_page: int = 30):
        self._store = store
        self._cache = cache
        self.per_page = per_page

    async def get_page(self, raw_page: Any = None) -> ListingSnapshot:
        page = normalize_page(raw_page)
        return await self._cache.get_or_load(
            page,
            lambda: self._load(page),
            cacheable=self._in_range,
        )

    @staticmethod
    def _in_range(snapshot: ListingSnapshot) -> bool:
        return snapshot.page <= max(snapshot.total_pages, 1)

    async def _load(self, page: int) -> ListingSnapshot:
        total = await self._store.count()
        total_pages = math.ceil(total / self.per_page)
        offset = (page - 1) * self.per_page
        if offset < total:
            items = await self._store.find_page(offset=offset, limit=self.per_page)
        else:
            logger.debug("Page %s is past the end (%s pages)", page, total_pages)
            items = []
        return ListingSnapshot(
            page=page,
            per_page=self.per_page,
            total=total,
            total_pages=total_pages,
            items=tuple(items),
        )
