"""Base repository with common database operations."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.models.orm.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Base repository with common CRUD operations."""

    model: type[T]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def get_by_id(self, id: UUID) -> T | None:
        """Get a record by ID.

        Args:
            id: Record UUID

        Returns:
            Record or None if not found
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.unique().scalar_one_or_none()

    async def get_all(self) -> list[T]:
        """Get all records, unpaged.

        Returns:
            List of records
        """
        result = await self.session.execute(select(self.model))
        return list(result.unique().scalars().all())

    async def create(self, **kwargs: Any) -> T:
        """Create a new record.

        Args:
            **kwargs: Field values

        Returns:
            Created record

        Raises:
            IntegrityError: If a database constraint rejects the row
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, instance: T, **kwargs: Any) -> T:
        """Overwrite fields on a loaded record.

        Args:
            instance: Record to update
            **kwargs: Fields to update

        Returns:
            Updated record
        """
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, instance: T) -> None:
        """Delete a loaded record.

        Args:
            instance: Record to delete

        Raises:
            IntegrityError: If a foreign key still references the record
        """
        await self.session.delete(instance)
        await self.session.flush()
