"""Security package."""

from directory_api.security.auth import (
    get_current_caller,
    require_admin,
    require_admin_or_manager,
    require_internal_api_key,
    require_roles,
)
from directory_api.security.password import PasswordService, get_password_service

__all__ = [
    "PasswordService",
    "get_current_caller",
    "get_password_service",
    "require_admin",
    "require_admin_or_manager",
    "require_internal_api_key",
    "require_roles",
]
