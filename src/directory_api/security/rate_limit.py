"""Rate limiting configuration for mutating endpoints."""

from ipaddress import ip_address

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from directory_api.config import get_settings


def get_real_client_ip(request: Request) -> str:
    """Extract the client IP, honouring X-Real-IP only when it is a valid address.

    Args:
        request: The incoming request object.

    Returns:
        The client IP address.
    """
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        try:
            ip_address(real_ip)
            return real_ip
        except ValueError:
            pass

    return get_remote_address(request)


def _get_storage_uri() -> str:
    """Get rate limiter storage URI.

    Counters live in the configured Redis when rate limiting is enabled, so
    limits hold across workers.

    Returns:
        Storage URI understood by the limits package.
    """
    settings = get_settings()
    if not settings.rate_limit_enabled:
        return "memory://"

    return str(settings.redis_url)


_settings = get_settings()

limiter = Limiter(
    key_func=get_real_client_ip,
    default_limits=[f"{_settings.rate_limit_default}/minute"],
    storage_uri=_get_storage_uri(),
    enabled=_settings.rate_limit_enabled,
)

SENSITIVE_OPERATION_LIMIT = f"{_settings.rate_limit_sensitive}/minute"
