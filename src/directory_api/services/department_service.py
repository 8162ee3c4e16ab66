"""Department service for managing the department registry."""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.exceptions import (
    DepartmentAlreadyExistsError,
    DepartmentInUseError,
    DepartmentNotFoundError,
)
from directory_api.models.dto.department import DepartmentRequest, DepartmentResponse
from directory_api.models.orm.department import DepartmentORM
from directory_api.repositories.department_repository import DepartmentRepository

logger = logging.getLogger(__name__)


class DepartmentService:
    """Service for department CRUD operations."""

    def __init__(
        self,
        session: AsyncSession,
        department_repo: DepartmentRepository | None = None,
    ) -> None:
        """Initialize service with database session."""
        self.session = session
        self.department_repo = department_repo or DepartmentRepository(session)

    @staticmethod
    def _to_response(department: DepartmentORM) -> DepartmentResponse:
        return DepartmentResponse(
            id=department.id,
            name=department.name,
            created_at=department.created_at,
            updated_at=department.updated_at,
        )

    async def create_department(self, data: DepartmentRequest) -> DepartmentResponse:
        """Create a department.

        Args:
            data: Department creation data

        Returns:
            Created DepartmentResponse

        Raises:
            DepartmentAlreadyExistsError: If the name is already taken
        """
        if await self.department_repo.exists_by_name(data.name):
            raise DepartmentAlreadyExistsError(data.name)

        try:
            department = await self.department_repo.create(name=data.name)
        except IntegrityError as e:
            # Lost a race with a concurrent create of the same name
            await self.session.rollback()
            raise DepartmentAlreadyExistsError(data.name) from e

        logger.info("Created department %s", department.id)
        return self._to_response(department)

    async def update_department(
        self, department_id: UUID, data: DepartmentRequest
    ) -> DepartmentResponse:
        """Rename a department.

        The new name is not checked against other departments here; the
        unique constraint still applies when the change is flushed.

        Args:
            department_id: Department UUID
            data: New department data

        Returns:
            Updated DepartmentResponse

        Raises:
            DepartmentNotFoundError: If the department does not exist
        """
        department = await self.department_repo.get_by_id(department_id)
        if department is None:
            raise DepartmentNotFoundError(department_id)

        department = await self.department_repo.update(
            department,
            name=data.name,
            updated_at=datetime.now(timezone.utc),
        )
        logger.info("Renamed department %s", department_id)
        return self._to_response(department)

    async def delete_department(self, department_id: UUID) -> None:
        """Delete a department.

        Employees are not checked first. The foreign key from employees
        rejects the delete while the department is referenced.

        Args:
            department_id: Department UUID

        Raises:
            DepartmentNotFoundError: If the department does not exist
            DepartmentInUseError: If employees still reference the department
        """
        department = await self.department_repo.get_by_id(department_id)
        if department is None:
            raise DepartmentNotFoundError(department_id)

        try:
            await self.department_repo.delete(department)
        except IntegrityError as e:
            await self.session.rollback()
            raise DepartmentInUseError(department_id) from e

        logger.info("Deleted department %s", department_id)

    async def get_department(self, department_id: UUID) -> DepartmentResponse:
        """Get a department by ID.

        Args:
            department_id: Department UUID

        Returns:
            DepartmentResponse

        Raises:
            DepartmentNotFoundError: If the department does not exist
        """
        department = await self.department_repo.get_by_id(department_id)
        if department is None:
            raise DepartmentNotFoundError(department_id)
        return self._to_response(department)

    async def list_departments(self) -> list[DepartmentResponse]:
        """List all departments, unordered and unpaged."""
        departments = await self.department_repo.get_all()
        return [self._to_response(d) for d in departments]
