"""
Prometheus metrics
"""
import time

from fastapi import FastAPI
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# HTTP запросы
http_requests_total = Counter(
    'catalog_http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code']
)

# Время обработки запросов
http_request_duration_seconds = Histogram(
    'catalog_http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

# Обращения к кэшам
cache_lookups_total = Counter(
    'catalog_cache_lookups_total',
    'Cache lookups',
    ['cache', 'result']  # result: 'hit' или 'miss'
)

cache_invalidations_total = Counter(
    'catalog_cache_invalidations_total',
    'Wholesale cache invalidations',
    ['cache']
)

# Загрузки от администратора
uploads_total = Counter(
    'catalog_uploads_total',
    'Admin uploads by final state',
    ['status']
)

# Переносы миниатюр Telegram -> GitHub
relay_duration_seconds = Histogram(
    'catalog_relay_duration_seconds',
    'Media relay duration in seconds',
    ['stage']  # 'fetch' или 'publish'
)

# Обработка коротких ссылок
resolutions_total = Counter(
    'catalog_resolutions_total',
    'Short link resolutions by outcome',
    ['outcome']
)


def setup_metrics(app: FastAPI):
    """Настройка метрик для FastAPI приложения"""

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        """Endpoint для Prometheus метрик"""
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    @app.middleware("http")
    async def metrics_middleware(request, call_next):
        """Middleware для сбора метрик HTTP запросов"""
        method = request.method
        path = request.url.path

        # Webhook путь содержит секрет, в метки он попадать не должен
        webhook_path = getattr(app.state, "webhook_path", None)
        if path in ["/health", "/metrics", "/favicon.ico"]:
            return await call_next(request)
        if webhook_path and path == webhook_path:
            path = "/webhook"

        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        http_requests_total.labels(
            method=method,
            endpoint=path,
            status_code=response.status_code
        ).inc()

        http_request_duration_seconds.labels(
            method=method,
            endpoint=path
        ).observe(duration)

        return response


def track_cache_lookup(cache: str, hit: bool):
    """Отслеживание попадания/промаха кэша"""
    cache_lookups_total.labels(cache=cache, result="hit" if hit else "miss").inc()


def track_cache_invalidation(cache: str):
    cache_invalidations_total.labels(cache=cache).inc()


def track_upload(status: str):
    """Отслеживание результата загрузки"""
    uploads_total.labels(status=status).inc()


def track_relay_stage(stage: str, duration: float):
    relay_duration_seconds.labels(stage=stage).observe(duration)


def track_resolution(outcome: str):
    """Отслеживание результата обработки ссылки"""
    resolutions_total.labels(outcome=outcome).inc()
