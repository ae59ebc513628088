from pydantic_settings import BaseSettings
from typing import List, Optional
from functools import lru_cache


class Settings(BaseSettings):
    """Настройки приложения"""

    # Telegram
    BOT_TOKEN: str = ""
    ADMIN_ID: str = ""
    WEBHOOK_SECRET: str = ""
    TELEGRAM_API_URL: str = "https://api.telegram.org"
    TELEGRAM_MAX_RETRIES: int = 3

    # Public URL (webhook registration, keep-alive)
    EXTERNAL_URL: str = ""
    PORT: int = 8000

    # Database
    POSTGRES_DB: str = "video_catalog"
    POSTGRES_USER: str = "postgres_user"
    POSTGRES_PASSWORD: str = "postgres_password"
    POSTGRES_HOST: str = "localhost"
    DATABASE_URL: str = ""

    # GitHub (thumbnail hosting)
    GITHUB_TOKEN: str = ""
    GITHUB_USERNAME: str = ""
    GITHUB_REPO: str = ""
    GITHUB_BRANCH: str = "main"
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_RAW_URL: str = "https://raw.githubusercontent.com"
    THUMBNAIL_DIR: str = "thumbnails"
    THUMBNAIL_EXTENSION: str = "jpg"

    # Outbound HTTP
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Caches
    LISTING_CACHE_TTL_SECONDS: int = 300  # 5 minutes
    LISTING_PAGE_SIZE: int = 30
    IDENTIFIER_CACHE_MAX_SIZE: Optional[int] = None

    # Bot texts
    SHORT_LINK_PREFIX: str = "video_"
    DEFAULT_TITLE: str = "Untitled Video"
    WELCOME_URL: str = "https://my-web.com"

    # Keep-alive
    KEEPALIVE_INTERVAL_SECONDS: int = 600

    # Application
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Video Catalog Bot"
    VERSION: str = "1.0.0"

    # Monitoring
    ENABLE_METRICS: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def database_url(self) -> str:
        """Формирование URL для базы данных"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:5432/{self.POSTGRES_DB}"
        )

    @property
    def webhook_path(self) -> str:
        """Секретный путь webhook (по умолчанию токен бота)"""
        return f"/{self.WEBHOOK_SECRET or self.BOT_TOKEN}"

    @property
    def webhook_url(self) -> str:
        return f"{self.EXTERNAL_URL.rstrip('/')}{self.webhook_path}"


@lru_cache()
def get_settings() -> Settings:
    """Получить настройки (кэшированные)"""
    return Settings()


settings = get_settings()
