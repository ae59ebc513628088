"""
Database repositories
"""
from catalog_bot.database.repositories.base import BaseRepository
from catalog_bot.database.repositories.media_repository import MediaRepository

__all__ = [
    "BaseRepository",
    "MediaRepository",
]
