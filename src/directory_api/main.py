"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from directory_api.config import get_settings
from directory_api.database import engine
from directory_api.events.publisher import RedisEventPublisher
from directory_api.exceptions import DirectoryAPIError
from directory_api.middleware.error_handler import (
    directory_api_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    rate_limit_exceeded_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from directory_api.middleware.security_headers import SecurityHeadersMiddleware
from directory_api.routers import departments, employees, internal
from directory_api.security.rate_limit import limiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    config = get_settings()
    logger.info(
        "Starting %s (environment=%s, events_enabled=%s)",
        config.app_name,
        config.environment,
        config.events_enabled,
    )
    yield
    # Shutdown
    await RedisEventPublisher.close_instance()
    await engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_settings()

    app = FastAPI(
        title=config.app_name,
        version="0.1.0",
        description="Employee and department directory API",
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Error handlers all answer with the same payload shape
    app.add_exception_handler(DirectoryAPIError, directory_api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    allowed_origins = config.cors_origins_list
    if "*" in allowed_origins:
        raise ValueError(
            "CORS_ORIGINS cannot contain '*' wildcard when allow_credentials=True. "
            "Specify explicit origins."
        )

    # Middleware runs in reverse order of addition; CORS must see preflights first
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    app.include_router(departments.router, prefix="/api/departments", tags=["Departments"])
    app.include_router(employees.router, prefix="/api/employees", tags=["Employees"])
    app.include_router(internal.router, prefix="/api/internal", tags=["Internal"])

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
