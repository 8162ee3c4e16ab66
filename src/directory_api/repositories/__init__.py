"""Repository layer for database operations."""

from directory_api.repositories.base import BaseRepository
from directory_api.repositories.department_repository import DepartmentRepository
from directory_api.repositories.employee_repository import EmployeeRepository

__all__ = [
    "BaseRepository",
    "DepartmentRepository",
    "EmployeeRepository",
]
