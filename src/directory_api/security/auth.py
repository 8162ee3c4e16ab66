"""Authentication and authorization utilities.

Bearer tokens are issued by the identity service; this service only verifies
them. The internal lookup used by the identity service is protected by a
shared API key instead.
"""

import hmac
from collections.abc import Callable, Coroutine
from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from directory_api.config import get_settings
from directory_api.exceptions import UnauthorizedError
from directory_api.models.domain.caller import Caller
from directory_api.models.domain.employee import EmployeeRole

INTERNAL_API_KEY_HEADER = "X-Internal-Api-Key"

bearer_scheme = HTTPBearer(auto_error=False)
internal_api_key_scheme = APIKeyHeader(name=INTERNAL_API_KEY_HEADER, auto_error=False)


def decode_token(token: str) -> dict:
    """Decode and verify a JWT token.

    Args:
        token: JWT token string

    Returns:
        Token payload

    Raises:
        HTTPException: If token is invalid or expired
    """
    settings = get_settings()

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
        return payload
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        ) from e


async def get_current_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> Caller:
    """Get the authenticated caller from the bearer token.

    Args:
        credentials: HTTP Bearer credentials

    Returns:
        Caller domain model

    Raises:
        HTTPException: If authentication fails
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    payload = decode_token(credentials.credentials)

    try:
        return Caller(
            id=UUID(payload["sub"]),
            email=payload.get("email", ""),
            role=EmployeeRole(payload["role"]),
        )
    except (KeyError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        ) from e


def require_roles(*roles: EmployeeRole) -> Callable[..., Coroutine[Any, Any, Caller]]:
    """Create a dependency that admits only callers with one of the given roles.

    Args:
        roles: Roles allowed through

    Returns:
        Dependency function returning the Caller
    """

    async def dependency(
        caller: Annotated[Caller, Depends(get_current_caller)],
    ) -> Caller:
        if caller.role not in roles:
            raise UnauthorizedError()
        return caller

    return dependency


require_admin = require_roles(EmployeeRole.ADMIN)
require_admin_or_manager = require_roles(EmployeeRole.ADMIN, EmployeeRole.MANAGER)


async def require_internal_api_key(
    api_key: Annotated[str | None, Depends(internal_api_key_scheme)] = None,
) -> None:
    """Require the shared service key on internal endpoints.

    Raises:
        HTTPException: If the key is missing or wrong
    """
    expected = get_settings().internal_api_key
    if api_key is None or not hmac.compare_digest(api_key.encode(), expected.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid service credentials",
        )
