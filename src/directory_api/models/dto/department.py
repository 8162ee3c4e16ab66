"""Department DTOs."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class DepartmentRequest(BaseModel):
    """DTO for creating or renaming a department."""

    name: str = Field(min_length=1, max_length=255, description="Department name")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        """Reject names made only of whitespace."""
        if not value.strip():
            raise ValueError("Department name is required")
        return value


class DepartmentResponse(BaseModel):
    """Department response DTO."""

    id: UUID
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        """Pydantic config."""

        from_attributes = True
