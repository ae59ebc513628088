"""
Periodic self-ping keeping the hosted instance awake
"""
import asyncio
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class KeepAlive:
    """Фоновая задача: GET на внешний URL раз в interval секунд."""

    def __init__(self, http: httpx.AsyncClient, url: str, interval: float = 600):
        self._http = http
        self.url = url
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    async def ping(self) -> bool:
        try:
            resp = await self._http.get(self.url)
            resp.raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.warning("Keep-alive ping to %s failed: %s", self.url, e)
            return False

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            await self.ping()

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())
            logger.info("Keep-alive started (every %ss)", self.interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
