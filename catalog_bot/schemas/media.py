"""
Media catalog Pydantic schemas
"""
from datetime import datetime
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class MediaItem(BaseModel):
    """Запись каталога в виде неизменяемого значения."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    title: str
    file_id: str = Field(serialization_alias="fileId")
    thumbnail: str = ""
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


class ListingSnapshot(BaseModel):
    """Снимок одной страницы каталога (то, что хранит ListingCache)."""

    model_config = ConfigDict(frozen=True)

    page: int
    per_page: int
    total: int
    total_pages: int
    items: Tuple[MediaItem, ...] = ()


class FileListResponse(BaseModel):
    """Ответ GET /api/files."""

    success: bool = True
    page: int
    per_page: int = Field(serialization_alias="perPage")
    total: int
    total_pages: int = Field(serialization_alias="totalPages")
    data: Tuple[MediaItem, ...] = ()

    @classmethod
    def from_snapshot(cls, snapshot: ListingSnapshot) -> "FileListResponse":
        return cls(
            page=snapshot.page,
            per_page=snapshot.per_page,
            total=snapshot.total,
            total_pages=snapshot.total_pages,
            data=snapshot.items,
        )
