"""
Telegram Bot API file download client
"""
import logging

import httpx

from catalog_bot.exceptions import SourceUnavailable

logger = logging.getLogger(__name__)


class TelegramFileClient:
    """Скачивание файлов из Telegram по file_id (getFile + file endpoint)."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        bot_token: str,
        api_url: str = "https://api.telegram.org",
    ):
        self._http = http
        self._token = bot_token
        self._api_url = api_url.rstrip("/")

    async def get_file_path(self, file_id: str) -> str:
        """
        Разрешение file_id в путь файла на серверах Telegram.

        Raises:
            SourceUnavailable: ошибка HTTP, таймаут или ответ без file_path
        """
        url = f"{self._api_url}/bot{self._token}/getFile"
        try:
            resp = await self._http.get(url, params={"file_id": file_id})
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPStatusError as e:
            raise SourceUnavailable(f"getFile failed: {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            raise SourceUnavailable("getFile timeout") from e
        except (httpx.HTTPError, ValueError) as e:
            raise SourceUnavailable(f"getFile failed: {e}") from e

        file_path = (body.get("result") or {}).get("file_path") if body.get("ok") else None
        if not file_path:
            raise SourceUnavailable(f"getFile returned no file_path: {body.get('description')}")
        return file_path

    async def download(self, file_id: str) -> bytes:
        """Содержимое файла по file_id."""
        file_path = await self.get_file_path(file_id)
        url = f"{self._api_url}/file/bot{self._token}/{file_path}"
        try:
            resp = await self._http.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SourceUnavailable(f"File download failed: {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            raise SourceUnavailable("File download timeout") from e
        except httpx.HTTPError as e:
            raise SourceUnavailable(f"File download failed: {e}") from e
        logger.debug("Downloaded %s (%d bytes)", file_path, len(resp.content))
        return resp.content
