"""SQLAlchemy ORM models package."""

from directory_api.models.orm.base import Base
from directory_api.models.orm.department import DepartmentORM
from directory_api.models.orm.employee import EmployeeORM

__all__ = [
    "Base",
    "DepartmentORM",
    "EmployeeORM",
]
