"""
Short link resolution workflow (/start video_<id>)
"""
import logging
from enum import Enum

from catalog_bot.bot.events import InboundEvent
from catalog_bot.bot.transport import BotTransport
from catalog_bot.cache.identifier_cache import IdentifierCache
from catalog_bot.database.store import CatalogStore
from catalog_bot.exceptions import MalformedId, NotFound
from catalog_bot.monitoring.metrics import track_resolution

logger = logging.getLogger(__name__)

MALFORMED_TEXT = "❌ Invalid video link."
NOT_FOUND_TEXT = "⚠️ Video no longer available."
READY_TEXT = "🎬 <b>Your video is ready!</b>"
RETRY_LATER_TEXT = "🚫 Something went wrong. Try again later."


class ResolutionOutcome(str, Enum):
    NO_PAYLOAD = "no_payload"
    MALFORMED_ID = "malformed_id"
    NOT_FOUND = "not_found"
    DELIVERED = "delivered"
    DELIVERY_FAILED = "delivery_failed"


class ResolutionService:
    """Выдача видео по короткой ссылке."""

    def __init__(
        self,
        store: CatalogStore,
        identifier_cache: IdentifierCache,
        transport: BotTransport,
        prefix: str = "video_",
        welcome_url: str = "https://my-web.com",
    ):
        self._store = store
        self._cache = identifier_cache
        self._transport = transport
        self._prefix = prefix
        self._welcome_url = welcome_url

    def welcome_text(self) -> str:
        return (
            "👋 <b>Welcome to Video Downloader</b>\n\n"
            f'Visit 👉 <a href="{self._welcome_url}">Video Downloader</a>'
        )

    def parse_short_id(self, payload: str) -> str:
        """
        Короткий id из аргумента /start.

        Raises:
            MalformedId: после удаления префикса ничего не осталось
        """
        short_id = payload.strip()
        if self._prefix and short_id.startswith(self._prefix):
            short_id = short_id[len(self._prefix):]
        short_id = short_id.strip()
        if not short_id:
            raise MalformedId(payload)
        return short_id

    async def handle(self, event: InboundEvent) -> ResolutionOutcome:
        outcome = await self._process(event)
        track_resolution(outcome.value)
        return outcome

    async def _process(self, event: InboundEvent) -> ResolutionOutcome:
        chat_id = event.chat_id
        try:
            if not event.payload.strip():
                await self._transport.reply(chat_id, self.welcome_text(), parse_mode="HTML")
                return ResolutionOutcome.NO_PAYLOAD

            try:
                short_id = self.parse_short_id(event.payload)
            except MalformedId:
                await self._transport.reply(chat_id, MALFORMED_TEXT)
                return ResolutionOutcome.MALFORMED_ID

            try:
                handle = await self._cache.resolve(short_id, self._store.find_file_id)
            except NotFound:
                logger.info("Link for missing record", extra={"media_id": short_id, "chat_id": chat_id})
                await self._transport.reply(chat_id, NOT_FOUND_TEXT)
                return ResolutionOutcome.NOT_FOUND

            await self._transport.reply(chat_id, READY_TEXT, parse_mode="HTML")
            await self._transport.send_media(chat_id, handle)
            return ResolutionOutcome.DELIVERED
        except Exception:
            logger.exception("Video delivery failed", extra={"chat_id": chat_id})
            try:
                await self._transport.reply(chat_id, RETRY_LATER_TEXT)
            except Exception as e:
                logger.error("Failed to send reply to %s: %s", chat_id, e)
            return ResolutionOutcome.DELIVERY_FAILED
