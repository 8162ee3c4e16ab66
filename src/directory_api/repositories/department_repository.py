"""Department repository."""

from sqlalchemy import exists, select

from directory_api.models.orm.department import DepartmentORM
from directory_api.repositories.base import BaseRepository


class DepartmentRepository(BaseRepository[DepartmentORM]):
    """Repository for department operations."""

    model = DepartmentORM

    async def get_by_name(self, name: str) -> DepartmentORM | None:
        """Get department by exact name.

        Args:
            name: Department name (case-sensitive)

        Returns:
            DepartmentORM or None if not found
        """
        result = await self.session.execute(
            select(DepartmentORM).where(DepartmentORM.name == name)
        )
        return result.scalar_one_or_none()

    async def exists_by_name(self, name: str) -> bool:
        """Check if a department with this exact name exists.

        Args:
            name: Department name (case-sensitive)

        Returns:
            True if the name is taken
        """
        result = await self.session.execute(
            select(exists().where(DepartmentORM.name == name))
        )
        return bool(result.scalar())
