"""API routers package."""

from directory_api.routers import departments, employees, internal

__all__ = [
    "departments",
    "employees",
    "internal",
]
