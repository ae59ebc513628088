"""
Media file model
"""
from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog_bot.database.models.base import BaseModel


class MediaFile(BaseModel):
    """
    Uploaded video in the catalog

    Rows are append-only: a record is created once per admin upload and
    never edited afterwards.

    Attributes:
        id: Opaque public id (embedded in video_<id> deep links)
        title: Caption given by the admin
        file_id: Telegram file_id used to re-send the video
        thumbnail: Public URL of the relayed thumbnail, empty if none
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    __tablename__ = "media_files"

    title: Mapped[str] = mapped_column(
        String(1024),
        nullable=False
    )
    file_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )
    thumbnail: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        default=""
    )

    __table_args__ = (
        Index("ix_media_files_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<MediaFile(id={self.id!r}, title={self.title!r})>"
