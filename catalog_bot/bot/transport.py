"""
Outbound Telegram transport
"""
import logging
from typing import Optional, Protocol

from telegram.ext import AIORateLimiter, ExtBot

logger = logging.getLogger(__name__)


class BotTransport(Protocol):
    """Исходящие вызовы бота, нужные сценариям."""

    async def reply(self, chat_id: int, text: str, parse_mode: Optional[str] = None) -> None:
        ...

    async def send_media(self, chat_id: int, handle: str) -> None:
        ...

    async def delete_message(self, chat_id: int, message_id: int) -> None:
        ...


class TelegramTransport:
    """
    Транспорт на python-telegram-bot.

    Ограничение частоты и повтор после flood wait (RetryAfter) выполняет
    AIORateLimiter; сервисы свои повторы не делают.
    """

    def __init__(
        self,
        token: str,
        max_retries: int = 3,
        base_url: str = "https://api.telegram.org",
    ):
        self.bot = ExtBot(
            token=token,
            base_url=f"{base_url.rstrip('/')}/bot",
            rate_limiter=AIORateLimiter(max_retries=max_retries),
        )

    async def initialize(self) -> None:
        await self.bot.initialize()

    async def shutdown(self) -> None:
        await self.bot.shutdown()

    async def set_webhook(self, url: str) -> None:
        await self.bot.set_webhook(url=url)
        logger.info("Webhook registered")

    async def reply(self, chat_id: int, text: str, parse_mode: Optional[str] = None) -> None:
        await self.bot.send_message(chat_id=chat_id, text=text, parse_mode=parse_mode)

    async def send_media(self, chat_id: int, handle: str) -> None:
        await self.bot.send_video(chat_id=chat_id, video=handle)

    async def delete_message(self, chat_id: int, message_id: int) -> None:
        await self.bot.delete_message(chat_id=chat_id, message_id=message_id)
