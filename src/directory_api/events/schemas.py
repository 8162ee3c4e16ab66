"""Outbound event schemas consumed by the identity service."""

from typing import ClassVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EmployeeCreatedEvent(BaseModel):
    """Emitted once an employee row has been committed.

    Delivered at least once; consumers must be idempotent on employee_id.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    event_type: ClassVar[str] = "employee.created"

    employee_id: UUID
    email: str
    first_name: str
    last_name: str

    def to_payload(self) -> str:
        """Serialize to the JSON wire format with camelCase keys."""
        return self.model_dump_json(by_alias=True)
