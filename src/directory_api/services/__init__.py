"""Services package."""

from directory_api.services.department_service import DepartmentService
from directory_api.services.employee_service import EmployeeService

__all__ = [
    "DepartmentService",
    "EmployeeService",
]
