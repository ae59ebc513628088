"""
Главное приложение FastAPI
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_bot.api.files import router as files_router
from catalog_bot.api.webhook import create_webhook_router
from catalog_bot.config import Settings, get_settings
from catalog_bot.database.connection import close_db, init_db
from catalog_bot.dependencies import ServiceContainer, build_container
from catalog_bot.logging_config import setup_logging
from catalog_bot.middleware.logging_middleware import LoggingMiddleware
from catalog_bot.monitoring.metrics import setup_metrics

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan события приложения"""
    container: ServiceContainer = app.state.container
    settings = container.settings

    logger.info("Starting %s...", settings.PROJECT_NAME)
    await init_db()

    transport = container.transport
    if hasattr(transport, "initialize"):
        await transport.initialize()
        if settings.EXTERNAL_URL and app.state.webhook_path:
            await transport.set_webhook(settings.webhook_url)

    if container.keepalive is not None:
        container.keepalive.start()
    logger.info("Server running on port %s", settings.PORT)

    yield

    logger.info("Shutting down %s...", settings.PROJECT_NAME)
    await container.aclose()
    if hasattr(transport, "shutdown"):
        await transport.shutdown()
    await close_db()


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """Создание приложения; container подменяется в тестах."""
    settings = settings or (container.settings if container else get_settings())
    container = container or build_container(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Каталог видео, загружаемых администратором через Telegram-бота",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.container = container

    # Без токена/секрета webhook не регистрируется (иначе путь был бы "/")
    webhook_path = settings.webhook_path if settings.webhook_path != "/" else None
    app.state.webhook_path = webhook_path

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware, hidden_paths=[webhook_path] if webhook_path else [])

    if settings.ENABLE_METRICS:
        setup_metrics(app)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Глобальный обработчик исключений"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"success": False})

    @app.get("/")
    async def root():
        """Проверка живости (keep-alive)"""
        return {"status": "ok"}

    @app.get("/health")
    async def health_check():
        """Проверка здоровья приложения"""
        return {
            "status": "healthy",
            "service": settings.PROJECT_NAME,
            "version": settings.VERSION,
        }

    app.include_router(files_router, prefix=settings.API_PREFIX, tags=["Files"])
    if webhook_path:
        app.include_router(create_webhook_router(webhook_path))

    return app


def get_app() -> FastAPI:
    """Фабрика для uvicorn --factory"""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, use_json=settings.LOG_JSON)
    return create_app(settings)


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "catalog_bot.main:get_app",
        factory=True,
        host="0.0.0.0",
        port=_settings.PORT,
        reload=_settings.DEBUG,
    )
