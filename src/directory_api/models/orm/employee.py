"""Employee ORM model."""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from directory_api.models.orm.base import Base, TimestampMixin, UUIDMixin
from directory_api.models.orm.department import DepartmentORM


class EmployeeORM(Base, UUIDMixin, TimestampMixin):
    """Employee database model."""

    __tablename__ = "employees"

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)

    # Weak reference: no ON DELETE action, so the database refuses to drop a
    # department while employees still point at it.
    department_id: Mapped[UUID | None] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("departments.id"),
        nullable=True,
    )

    # Read-only view of the department; joined so responses never lazy-load
    # under an async session.
    department: Mapped[DepartmentORM | None] = relationship(
        DepartmentORM,
        lazy="joined",
        viewonly=True,
    )

    __table_args__ = (
        Index("idx_employees_department_id", "department_id"),
        Index("idx_employees_role", "role"),
    )
