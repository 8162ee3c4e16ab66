"""Employee DTOs."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic.networks import validate_email

from directory_api.models.domain.employee import EmployeeRole, EmployeeStatus


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


BCRYPT_MAX_PASSWORD_BYTES = 72


def normalize_email(value: str) -> str:
    """Normalize an email address the way EmailStr fields store it.

    The domain is lowercased and the local part is kept as given, so a
    lookup by a raw address matches what was written on create or update.

    Args:
        value: Email address as supplied by a caller

    Returns:
        Normalized email address

    Raises:
        ValueError: If the value is not a valid email address
    """
    return validate_email(value)[1]


class DepartmentSummary(BaseModel):
    """Department info embedded in employee responses."""

    id: UUID
    name: str

    class Config:
        """Pydantic config."""

        from_attributes = True


class EmployeeCreate(BaseModel):
    """DTO for creating an employee."""

    first_name: str = Field(min_length=1, max_length=255, description="First name")
    last_name: str = Field(min_length=1, max_length=255, description="Last name")
    email: EmailStr = Field(description="Sign-in email, unique across employees")
    password: str = Field(min_length=8, description="Initial plaintext password")
    role: EmployeeRole = Field(description="Employee role")
    department_id: UUID = Field(description="Department the employee belongs to")

    @field_validator("first_name", "last_name")
    @classmethod
    def names_not_blank(cls, value: str) -> str:
        """Reject names made only of whitespace."""
        return _not_blank(value)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        """Reject passwords bcrypt cannot hash; its limit is in bytes, not characters."""
        if len(value.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return value


class EmployeeUpdate(BaseModel):
    """DTO for updating an employee.

    Names, email and role are always overwritten. The department only
    changes when department_id is supplied.
    """

    first_name: str = Field(min_length=1, max_length=255, description="First name")
    last_name: str = Field(min_length=1, max_length=255, description="Last name")
    email: EmailStr = Field(description="Sign-in email")
    role: EmployeeRole = Field(description="Employee role")
    department_id: UUID | None = Field(default=None, description="New department, if changing")

    @field_validator("first_name", "last_name")
    @classmethod
    def names_not_blank(cls, value: str) -> str:
        """Reject names made only of whitespace."""
        return _not_blank(value)


class EmployeeResponse(BaseModel):
    """Employee response DTO. Never carries the password hash."""

    id: UUID
    first_name: str
    last_name: str
    email: EmailStr
    role: EmployeeRole
    status: EmployeeStatus
    department: DepartmentSummary | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        """Pydantic config."""

        from_attributes = True


class AuthServiceEmployeeResponse(BaseModel):
    """Projection served to the identity service for sign-in checks."""

    id: UUID
    email: EmailStr
    password: str
    role: EmployeeRole
    status: EmployeeStatus
