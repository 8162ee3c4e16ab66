"""Authenticated caller established by the access-control front door."""

from uuid import UUID

from pydantic import BaseModel

from directory_api.models.domain.employee import EmployeeRole


class Caller(BaseModel):
    """Identity and coarse role of the employee making a request."""

    id: UUID
    email: str
    role: EmployeeRole
