"""Employee repository."""

from uuid import UUID

from sqlalchemy import exists, select

from directory_api.models.orm.employee import EmployeeORM
from directory_api.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee operations."""

    model = EmployeeORM

    async def get_by_email(self, email: str) -> EmployeeORM | None:
        """Get employee by email.

        Args:
            email: Employee email address

        Returns:
            EmployeeORM or None if not found
        """
        result = await self.session.execute(
            select(EmployeeORM).where(EmployeeORM.email == email)
        )
        return result.unique().scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if an employee with this email exists.

        Args:
            email: Email address to check

        Returns:
            True if the email is taken
        """
        result = await self.session.execute(
            select(exists().where(EmployeeORM.email == email))
        )
        return bool(result.scalar())

    async def get_by_id_and_department(
        self, employee_id: UUID, department_id: UUID
    ) -> EmployeeORM | None:
        """Get an employee only if they belong to the given department.

        Args:
            employee_id: Employee UUID
            department_id: Department UUID the employee must belong to

        Returns:
            EmployeeORM or None if absent or in another department
        """
        result = await self.session.execute(
            select(EmployeeORM).where(
                EmployeeORM.id == employee_id,
                EmployeeORM.department_id == department_id,
            )
        )
        return result.unique().scalar_one_or_none()

    async def get_all_except(self, excluded_id: UUID) -> list[EmployeeORM]:
        """Get every employee except one.

        Args:
            excluded_id: Employee UUID to leave out (usually the caller)

        Returns:
            List of employees
        """
        result = await self.session.execute(
            select(EmployeeORM).where(EmployeeORM.id != excluded_id)
        )
        return list(result.unique().scalars().all())

    async def get_by_department_except(
        self, department_id: UUID, excluded_id: UUID
    ) -> list[EmployeeORM]:
        """Get every employee in a department except one.

        Args:
            department_id: Department UUID
            excluded_id: Employee UUID to leave out (usually the caller)

        Returns:
            List of employees
        """
        result = await self.session.execute(
            select(EmployeeORM).where(
                EmployeeORM.department_id == department_id,
                EmployeeORM.id != excluded_id,
            )
        )
        return list(result.unique().scalars().all())
