"""Internal router - lookups for the identity service."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from directory_api.dependencies import get_employee_service
from directory_api.models.dto.employee import AuthServiceEmployeeResponse
from directory_api.security.auth import require_internal_api_key
from directory_api.services.employee_service import EmployeeService

router = APIRouter(dependencies=[Depends(require_internal_api_key)])


@router.get("/employees/by-email", response_model=AuthServiceEmployeeResponse)
async def get_employee_by_email(
    service: Annotated[EmployeeService, Depends(get_employee_service)],
    email: str = Query(min_length=3, max_length=255),
) -> AuthServiceEmployeeResponse:
    """Get the sign-in projection of an employee, including the stored hash."""
    return await service.get_employee_by_email(email)
