"""
Database models
"""
from catalog_bot.database.models.base import BaseModel
from catalog_bot.database.models.media import MediaFile

Base = BaseModel

__all__ = [
    "Base",
    "BaseModel",
    "MediaFile",
]
