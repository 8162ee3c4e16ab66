"""Domain models package."""

from directory_api.models.domain.caller import Caller
from directory_api.models.domain.employee import EmployeeRole, EmployeeStatus

__all__ = [
    "Caller",
    "EmployeeRole",
    "EmployeeStatus",
]
