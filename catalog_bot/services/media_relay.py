"""
Media relay: Telegram file storage -> GitHub
"""
import logging
import time
import uuid
from typing import Optional

from catalog_bot.monitoring.metrics import track_relay_stage
from catalog_bot.storage.github_client import GitHubClient
from catalog_bot.storage.telegram_client import TelegramFileClient

logger = logging.getLogger(__name__)


class MediaRelay:
    """
    Перенос медиа из Telegram в GitHub.

    Состояния не хранит: одно чтение из источника и одна запись в
    хостинг на каждый вызов. Повторов нет, ошибки (SourceUnavailable,
    PublishFailed) поднимаются вызывающему.
    """

    def __init__(
        self,
        source: TelegramFileClient,
        host: GitHubClient,
        directory: str = "thumbnails",
        extension: str = "jpg",
    ):
        self._source = source
        self._host = host
        self.directory = directory.strip("/")
        self.extension = extension.lstrip(".")

    def generate_path(self) -> str:
        """Новый путь на каждый вызов: thumbnails/<uuid4>.jpg"""
        return f"{self.directory}/{uuid.uuid4()}.{self.extension}"

    async def fetch_binary(self, media_handle: str) -> bytes:
        start = time.perf_counter()
        data = await self._source.download(media_handle)
        track_relay_stage("fetch", time.perf_counter() - start)
        return data

    async def publish(self, data: bytes, destination_path: Optional[str] = None) -> str:
        path = destination_path or self.generate_path()
        start = time.perf_counter()
        url = await self._host.put_file(data, path)
        track_relay_stage("publish", time.perf_counter() - start)
        return url

    async def relay(self, media_handle: str) -> str:
        """Скачать файл по file_id и опубликовать по новому пути."""
        data = await self.fetch_binary(media_handle)
        return await self.publish(data)
