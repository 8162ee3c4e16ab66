"""Centralized dependency injection factories for FastAPI.

Routers depend on these instead of building services themselves, so tests can
swap a whole service through app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.database import get_db
from directory_api.events.publisher import EventPublisher, get_event_publisher
from directory_api.services.department_service import DepartmentService
from directory_api.services.employee_service import EmployeeService


def get_department_service(db: AsyncSession = Depends(get_db)) -> DepartmentService:
    """Get DepartmentService instance."""
    return DepartmentService(db)


def get_employee_service(
    db: AsyncSession = Depends(get_db),
    event_publisher: EventPublisher = Depends(get_event_publisher),
) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(db, event_publisher)


__all__ = [
    "get_department_service",
    "get_employee_service",
]
