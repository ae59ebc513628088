"""
Admin upload workflow
"""
import html
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from catalog_bot.bot.events import InboundEvent
from catalog_bot.bot.transport import BotTransport
from catalog_bot.cache.listing_cache import ListingCache
from catalog_bot.database.store import CatalogStore
from catalog_bot.exceptions import RelayError, Unauthorized
from catalog_bot.monitoring.metrics import track_upload
from catalog_bot.schemas.media import MediaItem
from catalog_bot.services.media_relay import MediaRelay

logger = logging.getLogger(__name__)

UNAUTHORIZED_TEXT = "❌ Only admin can upload videos."
FAILED_TEXT = "🚫 Upload failed."


class UploadState(str, Enum):
    """Состояния загрузки"""

    RECEIVED = "received"
    AUTHORIZED = "authorized"
    THUMBNAIL_RELAYED = "thumbnail_relayed"
    PERSISTED = "persisted"
    CACHE_INVALIDATED = "cache_invalidated"
    ACKNOWLEDGED = "acknowledged"
    UNAUTHORIZED = "unauthorized"
    IGNORED = "ignored"
    FAILED = "failed"


@dataclass
class UploadResult:
    state: UploadState
    record: Optional[MediaItem] = None
    thumbnail_failed: bool = False


class UploadService:
    """
    Сценарий загрузки видео администратором.

    Received -> Authorized -> ThumbnailRelayed (если есть миниатюра) ->
    Persisted -> CacheInvalidated -> Acknowledged.

    Ошибка переноса миниатюры не прерывает загрузку: запись создаётся с
    пустой ссылкой, а администратор получает подтверждение с пометкой.
    Кэш страниц сбрасывается до отправки подтверждения.
    """

    def __init__(
        self,
        store: CatalogStore,
        relay: MediaRelay,
        listing_cache: ListingCache,
        transport: BotTransport,
        admin_id: str,
        default_title: str = "Untitled Video",
    ):
        self._store = store
        self._relay = relay
        self._listing_cache = listing_cache
        self._transport = transport
        self._admin_id = str(admin_id).strip()
        self._default_title = default_title

    def is_admin(self, sender_id: Optional[int]) -> bool:
        return bool(self._admin_id) and sender_id is not None and str(sender_id) == self._admin_id

    async def handle(self, event: InboundEvent) -> UploadResult:
        log_extra = {"chat_id": event.chat_id, "sender_id": event.sender_id}
        try:
            result = await self._process(event)
        except Unauthorized:
            await self._reject(event)
            result = UploadResult(UploadState.UNAUTHORIZED)
        except Exception:
            logger.exception("Upload failed", extra=log_extra)
            await self._safe_reply(event.chat_id, FAILED_TEXT)
            result = UploadResult(UploadState.FAILED)
        track_upload(result.state.value)
        return result

    async def _process(self, event: InboundEvent) -> UploadResult:
        if not self.is_admin(event.sender_id):
            raise Unauthorized(f"Sender {event.sender_id} is not the admin")

        if not event.video_file_id:
            return UploadResult(UploadState.IGNORED)

        title = (event.caption or "").strip() or self._default_title

        thumbnail_url = ""
        thumbnail_failed = False
        if event.thumbnail_file_id:
            try:
                thumbnail_url = await self._relay.relay(event.thumbnail_file_id)
            except RelayError as e:
                thumbnail_failed = True
                logger.warning(
                    "Thumbnail relay failed, saving video without thumbnail: %s", e,
                    extra={"chat_id": event.chat_id},
                )

        record = await self._store.create(
            title=title,
            file_id=event.video_file_id,
            thumbnail=thumbnail_url,
        )
        logger.info("Media record created", extra={"media_id": record.id, "chat_id": event.chat_id})

        self._listing_cache.invalidate_all()

        await self._transport.reply(
            event.chat_id,
            self._acknowledgement(record, thumbnail_failed),
            parse_mode="HTML",
        )
        return UploadResult(UploadState.ACKNOWLEDGED, record=record, thumbnail_failed=thumbnail_failed)

    async def _reject(self, event: InboundEvent) -> None:
        logger.warning("Upload attempt from non-admin", extra={"sender_id": event.sender_id})
        if event.message_id is not None:
            try:
                await self._transport.delete_message(event.chat_id, event.message_id)
            except Exception as e:
                logger.warning("Could not delete message %s: %s", event.message_id, e)
        await self._safe_reply(event.chat_id, UNAUTHORIZED_TEXT)

    @staticmethod
    def _acknowledgement(record: MediaItem, thumbnail_failed: bool) -> str:
        lines = [
            "✅ <b>Uploaded Successfully</b>",
            "",
            f"📌 <b>Title:</b> {html.escape(record.title)}",
            f"🆔 <b>ID:</b> <code>{record.id}</code>",
        ]
        if record.thumbnail:
            lines.append(f'🖼️ <a href="{html.escape(record.thumbnail)}">View Thumbnail</a>')
        elif thumbnail_failed:
            lines.append("⚠️ Thumbnail could not be saved, the video was stored without it.")
        return "\n".join(lines)

    async def _safe_reply(self, chat_id: int, text: str) -> None:
        try:
            await self._transport.reply(chat_id, text)
        except Exception as e:
            logger.error("Failed to send reply to %s: %s", chat_id, e)
