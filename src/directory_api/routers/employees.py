"""Employees router - directory CRUD with role-scoped reads."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from directory_api.dependencies import get_employee_service
from directory_api.models.domain.caller import Caller
from directory_api.models.dto.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from directory_api.security.auth import require_admin, require_admin_or_manager
from directory_api.security.rate_limit import SENSITIVE_OPERATION_LIMIT, limiter
from directory_api.services.employee_service import EmployeeService
from directory_api.services.scope import requires_department_scope

router = APIRouter()


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def create_employee(
    request: Request,
    body: EmployeeCreate,
    current_user: Annotated[Caller, Depends(require_admin)],
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Create an employee and announce it to the identity service."""
    return await service.create_employee(body)


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    current_user: Annotated[Caller, Depends(require_admin_or_manager)],
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> list[EmployeeResponse]:
    """List employees visible to the caller.

    Admins see everyone, managers see their own department. The caller is
    never included.
    """
    return await service.list_employees(current_user.id)


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: UUID,
    current_user: Annotated[Caller, Depends(require_admin_or_manager)],
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Get an employee. Managers only see employees in their department."""
    caller_manager_id = current_user.id if requires_department_scope(current_user.role) else None
    return await service.get_employee(employee_id, caller_manager_id=caller_manager_id)


@router.put("/{employee_id}", response_model=EmployeeResponse)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def update_employee(
    request: Request,
    employee_id: UUID,
    body: EmployeeUpdate,
    current_user: Annotated[Caller, Depends(require_admin)],
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Update an employee. Omitting department_id keeps the current department."""
    return await service.update_employee(employee_id, body)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def delete_employee(
    request: Request,
    employee_id: UUID,
    current_user: Annotated[Caller, Depends(require_admin)],
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> None:
    """Delete an employee."""
    await service.delete_employee(employee_id)
