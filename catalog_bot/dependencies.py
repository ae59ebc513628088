"""
Service container: caches, clients and workflows built once per process
"""
from dataclasses import dataclass, field
from typing import Optional

import httpx
from fastapi import Request

from catalog_bot.bot.dispatcher import UpdateDispatcher
from catalog_bot.bot.events import EventKind
from catalog_bot.bot.transport import BotTransport, TelegramTransport
from catalog_bot.cache.identifier_cache import IdentifierCache
from catalog_bot.cache.listing_cache import ListingCache
from catalog_bot.config import Settings
from catalog_bot.database.connection import get_session_maker
from catalog_bot.database.store import CatalogStore
from catalog_bot.services.keepalive import KeepAlive
from catalog_bot.services.listing_service import ListingService
from catalog_bot.services.media_relay import MediaRelay
from catalog_bot.services.resolution_service import ResolutionService
from catalog_bot.services.upload_service import UploadService
from catalog_bot.storage.github_client import GitHubClient
from catalog_bot.storage.telegram_client import TelegramFileClient


@dataclass
class ServiceContainer:
    """Всё разделяемое состояние процесса (кэши живут только здесь)."""

    settings: Settings
    store: CatalogStore
    transport: BotTransport
    relay: MediaRelay
    identifier_cache: IdentifierCache
    listing_cache: ListingCache
    listing: ListingService
    uploads: UploadService
    resolutions: ResolutionService
    dispatcher: UpdateDispatcher
    http: Optional[httpx.AsyncClient] = None
    keepalive: Optional[KeepAlive] = field(default=None)

    async def aclose(self) -> None:
        if self.keepalive is not None:
            await self.keepalive.stop()
        await self.dispatcher.drain()
        if self.http is not None:
            await self.http.aclose()


def build_container(
    settings: Settings,
    store: Optional[CatalogStore] = None,
    transport: Optional[BotTransport] = None,
    relay: Optional[MediaRelay] = None,
    http: Optional[httpx.AsyncClient] = None,
) -> ServiceContainer:
    """
    Сборка сервисов.

    Аргументы позволяют подменить внешние зависимости (БД, Telegram,
    HTTP-клиент), поэтому тесты получают изолированные экземпляры кэшей.
    """
    if http is None:
        http = httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
    if store is None:
        store = CatalogStore(get_session_maker())
    if transport is None:
        transport = TelegramTransport(
            settings.BOT_TOKEN,
            max_retries=settings.TELEGRAM_MAX_RETRIES,
            base_url=settings.TELEGRAM_API_URL,
        )
    if relay is None:
        relay = MediaRelay(
            source=TelegramFileClient(http, settings.BOT_TOKEN, api_url=settings.TELEGRAM_API_URL),
            host=GitHubClient(
                http,
                token=settings.GITHUB_TOKEN,
                owner=settings.GITHUB_USERNAME,
                repo=settings.GITHUB_REPO,
                branch=settings.GITHUB_BRANCH,
                api_url=settings.GITHUB_API_URL,
                raw_url=settings.GITHUB_RAW_URL,
            ),
            directory=settings.THUMBNAIL_DIR,
            extension=settings.THUMBNAIL_EXTENSION,
        )

    identifier_cache = IdentifierCache(max_size=settings.IDENTIFIER_CACHE_MAX_SIZE)
    listing_cache = ListingCache(ttl=settings.LISTING_CACHE_TTL_SECONDS)

    uploads = UploadService(
        store=store,
        relay=relay,
        listing_cache=listing_cache,
        transport=transport,
        admin_id=settings.ADMIN_ID,
        default_title=settings.DEFAULT_TITLE,
    )
    resolutions = ResolutionService(
        store=store,
        identifier_cache=identifier_cache,
        transport=transport,
        prefix=settings.SHORT_LINK_PREFIX,
        welcome_url=settings.WELCOME_URL,
    )
    dispatcher = UpdateDispatcher()
    dispatcher.register(EventKind.VIDEO, uploads.handle)
    dispatcher.register(EventKind.START, resolutions.handle)

    keepalive = None
    if settings.EXTERNAL_URL:
        keepalive = KeepAlive(http, settings.EXTERNAL_URL, interval=settings.KEEPALIVE_INTERVAL_SECONDS)

    return ServiceContainer(
        settings=settings,
        store=store,
        transport=transport,
        relay=relay,
        identifier_cache=identifier_cache,
        listing_cache=listing_cache,
        listing=ListingService(store, listing_cache, per_page=settings.LISTING_PAGE_SIZE),
        uploads=uploads,
        resolutions=resolutions,
        dispatcher=dispatcher,
        http=http,
        keepalive=keepalive,
    )


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_listing_service(request: Request) -> ListingService:
    return get_container(request).listing


def get_dispatcher(request: Request) -> UpdateDispatcher:
    return get_container(request).dispatcher
