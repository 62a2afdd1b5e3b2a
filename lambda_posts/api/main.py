"""FastAPI application initialization and configuration module.

This module builds the lambda-posts API. It handles:
- Application lifecycle management (database check, table creation, shutdown)
- Exception handler registration
- Middleware registration in the correct order
- The users and posts routers under the configured API prefix
- Landing page and health check endpoints
- OpenTelemetry instrumentation

Middleware are executed in reverse order of registration, so the last one
added is the first to see a request.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from loguru import logger

from lambda_posts.api.constants import LANDING_PAGE_HTML, POSTS_PREFIX, USERS_PREFIX
from lambda_posts.api.middleware.error_handler import register_exception_handlers
from lambda_posts.api.middleware.request_context import RequestContextMiddleware
from lambda_posts.api.middleware.request_logging import RequestLoggingMiddleware
from lambda_posts.api.routers import posts, users
from lambda_posts.api.utils.responses import ORJSONResponse
from lambda_posts.core.config import Settings, get_settings
from lambda_posts.core.logging import setup_logging
from lambda_posts.core.observability import instrument_app, setup_tracing
from lambda_posts.infrastructure.database.session import (
    check_database_connection,
    close_database,
    create_tables,
    get_engine,
)

API_DESCRIPTION = """
**lambda-posts** is a practice API that lets you store, access, and update
information about posts and the users that created them.

Every response is a JSON envelope. Successful responses carry
`"success": true` and a `user`, `users`, `post` or `posts` payload; failed
responses carry `"success": false` and a `message`.
"""

OPENAPI_TAGS = [
    {"name": "users", "description": "Create, read, update and delete **users**."},
    {"name": "posts", "description": "Read, update and delete **posts**."},
]

LICENSE_INFO = {
    "name": "MIT",
    "url": "https://github.com/dave-vazquez/webapi-iii-challenge/blob/master/LICENSE",
}


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app_instance: The FastAPI application instance.

    Yields:
        None: Nothing is yielded, this is just a lifespan context.

    Raises:
        RuntimeError: If database connection fails during startup.
    """
    is_healthy, error_msg = await check_database_connection()

    if is_healthy:
        logger.info("Database connection successful")
    else:
        logger.error("Database connection failed during startup: {}", error_msg)
        msg = f"Database connection failed: {error_msg}"
        raise RuntimeError(msg)

    await create_tables()

    logger.info(
        "Application startup complete - {} v{}",
        app_instance.title,
        app_instance.version,
    )

    yield

    logger.info("Application shutdown initiated")
    await close_database()
    logger.info("Application shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings instance. If not provided, will use get_settings().

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)
    setup_tracing(settings)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=API_DESCRIPTION,
        license_info=LICENSE_INFO,
        openapi_tags=OPENAPI_TAGS,
        debug=settings.debug,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    # Register exception handlers BEFORE middleware
    register_exception_handlers(application)

    # 3. Request logging middleware (logs requests/responses)
    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)

    # 2. Request context middleware (creates correlation ID)
    application.add_middleware(RequestContextMiddleware)

    # 1. CORS middleware (answers preflight requests before anything else)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(
        users.router, prefix=f"{settings.api_prefix}{USERS_PREFIX}"
    )
    application.include_router(
        posts.router, prefix=f"{settings.api_prefix}{POSTS_PREFIX}"
    )

    @application.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def root() -> str:
        """Landing page."""
        return LANDING_PAGE_HTML

    @application.get("/health")
    async def health() -> dict[str, object]:
        """Health check endpoint for monitoring and load balancers.

        Returns:
            dict[str, object]: Service status and database connectivity.
        """
        health_status: dict[str, object] = {"status": "healthy", "database": False}

        is_healthy, error_msg = await check_database_connection()

        health_status["database"] = is_healthy

        if is_healthy:
            pool = get_engine().pool
            logger.bind(
                metric_type="db.pool.health",
                checked_out=cast("Any", pool).checkedout(),
                size=cast("Any", pool).size(),
                overflow=cast("Any", pool).overflow(),
            ).info("Database pool health check")
        else:
            # Report "degraded" rather than failing the check outright
            logger.warning("Database health check failed: {}", error_msg)
            health_status["status"] = "degraded"

        return health_status

    instrument_app(application, settings)

    return application


app = create_app()
