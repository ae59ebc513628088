"""
GitHub contents API client (durable public hosting for thumbnails)
"""
import base64
import logging

import httpx

from catalog_bot.exceptions import PublishFailed

logger = logging.getLogger(__name__)


class GitHubClient:
    """Загрузка файлов в репозиторий GitHub и формирование raw URL."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        token: str,
        owner: str,
        repo: str,
        branch: str = "main",
        api_url: str = "https://api.github.com",
        raw_url: str = "https://raw.githubusercontent.com",
    ):
        self._http = http
        self._token = token
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self._api_url = api_url.rstrip("/")
        self._raw_url = raw_url.rstrip("/")

    def public_url(self, path: str) -> str:
        return f"{self._raw_url}/{self.owner}/{self.repo}/{self.branch}/{path}"

    async def put_file(self, data: bytes, path: str) -> str:
        """
        Создание файла в репозитории.

        Args:
            data: Содержимое файла
            path: Путь в репозитории (должен быть новым)

        Returns:
            Публичный raw URL файла

        Raises:
            PublishFailed: ответ не 2xx, таймаут или сетевая ошибка
        """
        url = f"{self._api_url}/repos/{self.owner}/{self.repo}/contents/{path}"
        payload = {
            "message": f"Upload thumbnail {path}",
            "content": base64.b64encode(data).decode("ascii"),
            "branch": self.branch,
        }
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
        }
        try:
            resp = await self._http.put(url, json=payload, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PublishFailed(f"GitHub upload failed: {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            raise PublishFailed("GitHub upload timeout") from e
        except httpx.HTTPError as e:
            raise PublishFailed(f"GitHub upload failed: {e}") from e
        logger.info("Published %s to %s/%s@%s", path, self.owner, self.repo, self.branch)
        return self.public_url(path)
