"""
Logging middleware
"""
import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware для логирования всех запросов"""

    def __init__(self, app, hidden_paths=()):
        super().__init__(app)
        # Пути с секретом (webhook) в лог не пишем как есть
        self.hidden_paths = set(hidden_paths)

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        path = "<webhook>" if request.url.path in self.hidden_paths else request.url.path

        response = await call_next(request)

        process_time = (time.perf_counter() - start_time) * 1000
        response.headers["X-Process-Time"] = f"{process_time:.2f}"
        response.headers["X-Request-ID"] = request_id

        logger.info(
            "%s %s - Status: %s - Time: %.2fms",
            request.method,
            path,
            response.status_code,
            process_time,
            extra={"request_id": request_id},
        )
        return response
