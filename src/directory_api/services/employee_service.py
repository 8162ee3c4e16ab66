"""Employee directory service with role-scoped reads and creation events."""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.events.publisher import EventPublisher, EventPublishError
from directory_api.events.schemas import EmployeeCreatedEvent
from directory_api.exceptions import (
    DepartmentNotFoundError,
    EmployeeAlreadyExistsError,
    EmployeeNotFoundError,
    ManagerNotFoundError,
)
from directory_api.models.domain.employee import EmployeeRole, EmployeeStatus
from directory_api.models.dto.employee import (
    AuthServiceEmployeeResponse,
    DepartmentSummary,
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
    normalize_email,
)
from directory_api.models.orm.employee import EmployeeORM
from directory_api.repositories.department_repository import DepartmentRepository
from directory_api.repositories.employee_repository import EmployeeRepository
from directory_api.security.password import PasswordService, get_password_service
from directory_api.services.scope import ScopeKind, resolve_scope

logger = logging.getLogger(__name__)


class EmployeeService:
    """Service for employee CRUD and scoped lookups."""

    def __init__(
        self,
        session: AsyncSession,
        event_publisher: EventPublisher,
        employee_repo: EmployeeRepository | None = None,
        department_repo: DepartmentRepository | None = None,
        password_service: PasswordService | None = None,
    ) -> None:
        """Initialize service with database session and collaborators."""
        self.session = session
        self.event_publisher = event_publisher
        self.employee_repo = employee_repo or EmployeeRepository(session)
        self.department_repo = department_repo or DepartmentRepository(session)
        self.password_service = password_service or get_password_service()

    @staticmethod
    def _to_response(employee: EmployeeORM) -> EmployeeResponse:
        department = None
        if employee.department is not None:
            department = DepartmentSummary(id=employee.department.id, name=employee.department.name)
        return EmployeeResponse(
            id=employee.id,
            first_name=employee.first_name,
            last_name=employee.last_name,
            email=employee.email,
            role=employee.role,
            status=employee.status,
            department=department,
            created_at=employee.created_at,
            updated_at=employee.updated_at,
        )

    async def create_employee(self, data: EmployeeCreate) -> EmployeeResponse:
        """Create an employee and announce it to the identity service.

        The employee is committed before the event is published. If the
        publish fails the employee still exists and the event is lost; the
        failure is logged, not raised.

        Args:
            data: Employee creation data

        Returns:
            Created EmployeeResponse

        Raises:
            EmployeeAlreadyExistsError: If the email is already in use
            DepartmentNotFoundError: If the department does not exist
        """
        if await self.employee_repo.email_exists(data.email):
            raise EmployeeAlreadyExistsError(data.email)

        department = await self.department_repo.get_by_id(data.department_id)
        if department is None:
            raise DepartmentNotFoundError(data.department_id)

        password_hash = self.password_service.hash_password(data.password)

        try:
            employee = await self.employee_repo.create(
                first_name=data.first_name,
                last_name=data.last_name,
                email=data.email,
                password_hash=password_hash,
                role=data.role,
                status=EmployeeStatus.ACTIVE,
                department_id=department.id,
            )
            await self.session.commit()
        except IntegrityError as e:
            # Email constraint caught a concurrent create the pre-check missed
            await self.session.rollback()
            raise EmployeeAlreadyExistsError(data.email) from e

        logger.info("Created employee %s in department %s", employee.id, department.id)

        await self._publish_created(employee)
        return self._to_response(employee)

    async def _publish_created(self, employee: EmployeeORM) -> None:
        event = EmployeeCreatedEvent(
            employee_id=employee.id,
            email=employee.email,
            first_name=employee.first_name,
            last_name=employee.last_name,
        )
        try:
            await self.event_publisher.publish_employee_created(event)
        except EventPublishError:
            # The write is already committed; the identity service will not
            # learn about this employee until it is re-announced.
            logger.error(
                "employee.created event for %s was not handed off; employee is stored without it",
                employee.id,
            )

    async def update_employee(self, employee_id: UUID, data: EmployeeUpdate) -> EmployeeResponse:
        """Update an employee.

        Names, email and role are overwritten. The department is only looked
        up and replaced when data.department_id is set. Email uniqueness is
        not re-checked here.

        Args:
            employee_id: Employee UUID
            data: Employee update data

        Returns:
            Updated EmployeeResponse

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            DepartmentNotFoundError: If a new department was given and does not exist
        """
        employee = await self.employee_repo.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)

        update_data = {
            "first_name": data.first_name,
            "last_name": data.last_name,
            "email": data.email,
            "role": data.role,
            "updated_at": datetime.now(timezone.utc),
        }

        if data.department_id is not None:
            department = await self.department_repo.get_by_id(data.department_id)
            if department is None:
                raise DepartmentNotFoundError(data.department_id)
            update_data["department_id"] = department.id

        employee = await self.employee_repo.update(employee, **update_data)
        logger.info("Updated employee %s", employee_id)
        return self._to_response(employee)

    async def delete_employee(self, employee_id: UUID) -> None:
        """Delete an employee.

        Args:
            employee_id: Employee UUID

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        employee = await self.employee_repo.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)

        await self.employee_repo.delete(employee)
        logger.info("Deleted employee %s", employee_id)

    async def get_employee(
        self, employee_id: UUID, caller_manager_id: UUID | None = None
    ) -> EmployeeResponse:
        """Get an employee, optionally restricted to a manager's department.

        Args:
            employee_id: Employee UUID
            caller_manager_id: When set, the employee must share this
                manager's department

        Returns:
            EmployeeResponse

        Raises:
            ManagerNotFoundError: If caller_manager_id does not resolve
            EmployeeNotFoundError: If the employee does not exist, or exists
                outside the manager's department
        """
        if caller_manager_id is None:
            employee = await self.employee_repo.get_by_id(employee_id)
            if employee is None:
                raise EmployeeNotFoundError(employee_id)
            return self._to_response(employee)

        manager = await self.employee_repo.get_by_id(caller_manager_id)
        if manager is None:
            raise ManagerNotFoundError(caller_manager_id)

        employee = None
        if manager.department_id is not None:
            employee = await self.employee_repo.get_by_id_and_department(
                employee_id, manager.department_id
            )
        if employee is None:
            # Same answer whether the id is unknown or in another department
            raise EmployeeNotFoundError()
        return self._to_response(employee)

    async def list_employees(self, caller_id: UUID) -> list[EmployeeResponse]:
        """List the employees visible to a caller, excluding the caller.

        Args:
            caller_id: UUID of the employee making the request

        Returns:
            List of EmployeeResponse

        Raises:
            EmployeeNotFoundError: If the caller does not exist
        """
        caller = await self.employee_repo.get_by_id(caller_id)
        if caller is None:
            raise EmployeeNotFoundError(caller_id)

        scope = resolve_scope(EmployeeRole(caller.role), caller.department_id)
        if scope.kind == ScopeKind.ALL:
            employees = await self.employee_repo.get_all_except(caller.id)
        elif scope.kind == ScopeKind.DEPARTMENT:
            employees = await self.employee_repo.get_by_department_except(
                scope.department_id, caller.id
            )
        else:
            employees = []

        return [self._to_response(e) for e in employees]

    async def get_employee_by_email(self, email: str) -> AuthServiceEmployeeResponse:
        """Get the sign-in projection of an employee for the identity service.

        The address is normalized the way stored emails are before matching.
        An address that is not a valid email cannot match and is reported
        as not found.

        Args:
            email: Employee email address

        Returns:
            AuthServiceEmployeeResponse with id, email, hash, role and status

        Raises:
            EmployeeNotFoundError: If no employee has this email
        """
        try:
            normalized = normalize_email(email)
        except ValueError as e:
            raise EmployeeNotFoundError(email=email) from e

        employee = await self.employee_repo.get_by_email(normalized)
        if employee is None:
            raise EmployeeNotFoundError(email=email)

        return AuthServiceEmployeeResponse(
            id=employee.id,
            email=employee.email,
            password=employee.password_hash,
            role=employee.role,
            status=employee.status,
        )
