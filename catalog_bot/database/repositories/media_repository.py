"""
Media repository for catalog database operations
"""
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_bot.database.models.media import MediaFile
from catalog_bot.database.repositories.base import BaseRepository


class MediaRepository(BaseRepository[MediaFile]):
    """
    Repository for MediaFile model operations
    """

    def __init__(self, session: AsyncSession):
        super().__init__(MediaFile, session)

    async def create(self, title: str, file_id: str, thumbnail: str = "") -> MediaFile:
        """
        Create a new catalog record

        Args:
            title: Video title
            file_id: Telegram file_id of the video
            thumbnail: Public thumbnail URL (empty if none)

        Returns:
            Created media file instance
        """
        return await super().create(title=title, file_id=file_id, thumbnail=thumbnail)
