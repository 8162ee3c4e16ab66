"""Domain-specific exceptions for the directory API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses. The error handler maps each base class to a status code;
services raise the most specific subclass at the point of violation.
"""

from typing import Any
from uuid import UUID


class DirectoryAPIError(Exception):
    """Base exception for all directory API errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(DirectoryAPIError):
    """Base class for resource not found errors."""

    pass


class DepartmentNotFoundError(NotFoundError):
    """Raised when a department cannot be found."""

    def __init__(self, department_id: UUID | str | None = None) -> None:
        if department_id is None:
            super().__init__("Department not found")
        else:
            super().__init__(
                f"Department not found with id: {department_id}",
                {"department_id": str(department_id)},
            )


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee cannot be found.

    Without arguments the message is deliberately bare, which is what a
    department-scoped caller sees for an employee outside their department.
    """

    def __init__(self, employee_id: UUID | str | None = None, email: str | None = None) -> None:
        if employee_id is not None:
            super().__init__(
                f"Employee not found with id: {employee_id}",
                {"employee_id": str(employee_id)},
            )
        elif email is not None:
            super().__init__(f"Employee not found with email: {email}", {"email": email})
        else:
            super().__init__("Employee not found")


class ManagerNotFoundError(NotFoundError):
    """Raised when the calling manager cannot be resolved."""

    def __init__(self, manager_id: UUID | str | None = None) -> None:
        message = f"Manager not found with id: {manager_id}" if manager_id else "Manager not found"
        details = {"manager_id": str(manager_id)} if manager_id else {}
        super().__init__(message, details)


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(DirectoryAPIError):
    """Base class for resource conflict errors."""

    pass


class DepartmentAlreadyExistsError(ConflictError):
    """Raised when trying to create a department whose name is taken."""

    def __init__(self, name: str | None = None) -> None:
        details = {"name": name} if name else {}
        super().__init__("Department with name already exists", details)


class EmployeeAlreadyExistsError(ConflictError):
    """Raised when trying to create an employee whose email is taken."""

    def __init__(self, email: str | None = None) -> None:
        details = {"email": email} if email else {}
        super().__init__("Employee with email already exists", details)


class DepartmentInUseError(ConflictError):
    """Raised when the database refuses to delete a department still referenced by employees."""

    def __init__(self, department_id: UUID | str | None = None) -> None:
        details = {"department_id": str(department_id)} if department_id else {}
        super().__init__("Department is still referenced by employees", details)


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(DirectoryAPIError):
    """Raised for malformed input, with a field name to message map in details."""

    def __init__(self, field_errors: dict[str, str], message: str = "Invalid input") -> None:
        self.field_errors = field_errors
        super().__init__(message, {"validation_errors": field_errors})


# =============================================================================
# Permission Errors (403)
# =============================================================================


class UnauthorizedError(DirectoryAPIError):
    """Raised by the access-control front door when a caller's role is not allowed.

    The directory services never raise this; role gating happens before they run.
    """

    def __init__(self, message: str = "You do not have permission to perform this action.") -> None:
        super().__init__(message)
