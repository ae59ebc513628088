"""
Database package
"""
from catalog_bot.database.connection import (
    close_db,
    create_engine,
    create_session_maker,
    get_engine,
    get_session_maker,
    init_db,
)
from catalog_bot.database.models import Base, BaseModel, MediaFile
from catalog_bot.database.repositories import BaseRepository, MediaRepository
from catalog_bot.database.store import CatalogStore

__all__ = [
    # Connection
    "create_engine",
    "create_session_maker",
    "get_engine",
    "get_session_maker",
    "init_db",
    "close_db",
    # Models
    "Base",
    "BaseModel",
    "MediaFile",
    # Repositories
    "BaseRepository",
    "MediaRepository",
    "CatalogStore",
]
