"""
Pydantic schemas
"""
from catalog_bot.schemas.media import FileListResponse, ListingSnapshot, MediaItem

__all__ = ["MediaItem", "ListingSnapshot", "FileListResponse"]
