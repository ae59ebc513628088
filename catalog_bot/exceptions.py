"""
Catalog bot exceptions
"""


class CatalogBotError(Exception):
    """Базовое исключение сервиса."""

    pass


class Unauthorized(CatalogBotError):
    """Загрузка от пользователя, который не является администратором."""

    pass


class MalformedId(CatalogBotError):
    """Пустой или некорректный идентификатор в короткой ссылке."""

    pass


class NotFound(CatalogBotError):
    """Запись с таким идентификатором отсутствует в каталоге."""

    def __init__(self, short_id: str):
        super().__init__(f"Media record not found: {short_id}")
        self.short_id = short_id


class RelayError(CatalogBotError):
    """Ошибка при переносе медиа между внешними сервисами."""

    pass


class SourceUnavailable(RelayError):
    """Источник (Telegram) не отдал файл."""

    pass


class PublishFailed(RelayError):
    """Хостинг (GitHub) не принял файл."""

    pass


class StoreFailure(CatalogBotError):
    """Ошибка чтения или записи каталога в БД."""

    pass
