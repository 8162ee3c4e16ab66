"""Departments router - department registry, admin only."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from directory_api.dependencies import get_department_service
from directory_api.models.domain.caller import Caller
from directory_api.models.dto.department import DepartmentRequest, DepartmentResponse
from directory_api.security.auth import require_admin
from directory_api.security.rate_limit import SENSITIVE_OPERATION_LIMIT, limiter
from directory_api.services.department_service import DepartmentService

router = APIRouter()


@router.post("", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def create_department(
    request: Request,
    body: DepartmentRequest,
    current_user: Annotated[Caller, Depends(require_admin)],
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentResponse:
    """Create a department. Names are unique."""
    return await service.create_department(body)


@router.get("", response_model=list[DepartmentResponse])
async def list_departments(
    current_user: Annotated[Caller, Depends(require_admin)],
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> list[DepartmentResponse]:
    """List all departments."""
    return await service.list_departments()


@router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(
    department_id: UUID,
    current_user: Annotated[Caller, Depends(require_admin)],
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentResponse:
    """Get a department by ID."""
    return await service.get_department(department_id)


@router.put("/{department_id}", response_model=DepartmentResponse)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def update_department(
    request: Request,
    department_id: UUID,
    body: DepartmentRequest,
    current_user: Annotated[Caller, Depends(require_admin)],
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentResponse:
    """Rename a department."""
    return await service.update_department(department_id, body)


@router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def delete_department(
    request: Request,
    department_id: UUID,
    current_user: Annotated[Caller, Depends(require_admin)],
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> None:
    """Delete a department. Fails with 409 while employees reference it."""
    await service.delete_department(department_id)
