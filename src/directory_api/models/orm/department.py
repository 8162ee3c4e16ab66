"""Department ORM model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from directory_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class DepartmentORM(Base, UUIDMixin, TimestampMixin):
    """Department database model."""

    __tablename__ = "departments"

    # The unique constraint is the source of truth for name uniqueness;
    # the service-level check only exits early.
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
