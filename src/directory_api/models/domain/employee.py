"""Employee domain enums."""

from enum import StrEnum


class EmployeeRole(StrEnum):
    """Employee role enum.

    A flat set of roles. Scoping only distinguishes ADMIN from everyone else.
    """

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class EmployeeStatus(StrEnum):
    """Employee status enum."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
