"""Data Transfer Objects package."""

from directory_api.models.dto.department import DepartmentRequest, DepartmentResponse
from directory_api.models.dto.employee import (
    AuthServiceEmployeeResponse,
    DepartmentSummary,
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
)

__all__ = [
    "DepartmentRequest",
    "DepartmentResponse",
    "AuthServiceEmployeeResponse",
    "DepartmentSummary",
    "EmployeeCreate",
    "EmployeeResponse",
    "EmployeeUpdate",
]
