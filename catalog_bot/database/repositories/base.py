"""
Base repository for common database operations
"""
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_bot.database.models.base import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Base repository with the read/create operations the catalog needs

    The catalog is append-only, so there are no update/delete helpers.
    """

    def __init__(self, model: Type[T], session: AsyncSession):
        """
        Initialize repository with model and session

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    async def create(self, **kwargs: Any) -> T:
        """
        Create a new record

        Args:
            **kwargs: Model field values

        Returns:
            Created model instance
        """
        obj = self.model(**kwargs)
        self.session.add(obj)
        await self.session.flush()
        await self.session.refresh(obj)
        return obj

    async def get_by_id(self, id: str) -> Optional[T]:
        """
        Get record by ID

        Args:
            id: Record ID

        Returns:
            Model instance or None if not found
        """
        stmt = select(self.model).where(self.model.id == id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(self, offset: int = 0, limit: int = 100) -> List[T]:
        """
        Get records newest first

        Args:
            offset: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of model instances
        """
        stmt = (
            select(self.model)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self) -> int:
        """
        Count all records

        Returns:
            Number of records
        """
        stmt = select(func.count(self.model.id))
        result = await self.session.execute(stmt)
        return result.scalar() or 0
