"""
Inbound Telegram updates reduced to the events the bot acts on
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from telegram import Bot, Update

START_COMMAND = "/start"


class EventKind(str, Enum):
    """Виды входящих событий"""

    START = "start"
    VIDEO = "video"


@dataclass(frozen=True)
class InboundEvent:
    """Входящее событие от Telegram, привязанное к отправителю."""

    kind: EventKind
    chat_id: int
    sender_id: Optional[int]
    message_id: Optional[int] = None
    payload: str = ""
    video_file_id: Optional[str] = None
    thumbnail_file_id: Optional[str] = None
    caption: Optional[str] = None

    @property
    def sender_key(self) -> str:
        """Ключ последовательной обработки (отправитель, иначе чат)."""
        if self.sender_id is not None:
            return str(self.sender_id)
        return f"chat:{self.chat_id}"


def _command_payload(text: str) -> Optional[str]:
    """Аргумент команды /start (или /start@BotName), None если это не /start."""
    parts = text.strip().split(maxsplit=1)
    if not parts or parts[0].split("@", 1)[0] != START_COMMAND:
        return None
    return parts[1].strip() if len(parts) > 1 else ""


def event_from_update(update: Update) -> Optional[InboundEvent]:
    """
    Преобразование Update в InboundEvent.

    Учитываются только новые сообщения и посты каналов (не правки).
    Возвращает None для всего, что бот не обрабатывает.
    """
    message = update.message or update.channel_post
    if message is None:
        return None

    sender_id = message.from_user.id if message.from_user else None
    common = dict(
        chat_id=message.chat.id,
        sender_id=sender_id,
        message_id=message.message_id,
    )

    if message.video is not None:
        thumbnail = message.video.thumbnail
        return InboundEvent(
            kind=EventKind.VIDEO,
            video_file_id=message.video.file_id,
            thumbnail_file_id=thumbnail.file_id if thumbnail else None,
            caption=message.caption,
            **common,
        )

    if message.text:
        payload = _command_payload(message.text)
        if payload is not None:
            return InboundEvent(kind=EventKind.START, payload=payload, **common)

    return None


def parse_update(data: Dict[str, Any], bot: Optional[Bot] = None) -> Optional[InboundEvent]:
    """Разбор JSON тела webhook."""
    update = Update.de_json(data, bot)
    if update is None:
        return None
    return event_from_update(update)
