"""Role-based visibility rules for employee records.

Pure functions of the caller's role and department. Admins see everyone;
every other role sees only its own department. Coarser gating (which roles
may call an endpoint at all) happens in the router, not here.
"""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from directory_api.models.domain.employee import EmployeeRole


class ScopeKind(StrEnum):
    """Which slice of the directory a caller may read."""

    ALL = "all"
    DEPARTMENT = "department"
    NONE = "none"


@dataclass(frozen=True)
class EmployeeScope:
    """Resolved visibility for one caller."""

    kind: ScopeKind
    department_id: UUID | None = None


def requires_department_scope(role: EmployeeRole) -> bool:
    """Check whether a role is limited to its own department.

    Args:
        role: Caller role

    Returns:
        False for ADMIN, True for every other role
    """
    return role != EmployeeRole.ADMIN


def resolve_scope(role: EmployeeRole, department_id: UUID | None) -> EmployeeScope:
    """Compute what a caller may enumerate or fetch.

    Args:
        role: Caller role
        department_id: Caller's department, if any

    Returns:
        EmployeeScope for the caller
    """
    if not requires_department_scope(role):
        return EmployeeScope(kind=ScopeKind.ALL)
    if department_id is None:
        # No department means no peers to see
        return EmployeeScope(kind=ScopeKind.NONE)
    return EmployeeScope(kind=ScopeKind.DEPARTMENT, department_id=department_id)
