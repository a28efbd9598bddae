"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All auth endpoints are versioned under the /api/v1/ prefix.
    The /health, /ready and /metrics endpoints remain unversioned.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from auth_config.settings import Settings, get_settings
from auth_service.presentation.api.config import get_api_settings
from auth_service.presentation.api.dependencies import (
    build_engine,
    create_tables,
    get_engine,
    get_session_maker,
)
from auth_service.presentation.api.exception_handlers import (
    setup_exception_handlers,
)
from auth_service.presentation.api.middleware import RequestLoggingMiddleware
from auth_service.presentation.api.observability import TraceIdFilter
from auth_service.presentation.api.routers import (
    auth_router,
    health_router,
    metrics_router,
)


@lru_cache(maxsize=1)
def _configure_logging(level_name: str) -> None:
    """Configure application logging.

    Sets up logging for the auth service with:
    - Console output with timestamps, module names and the request trace id
    - Configurable log level for our packages (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, level_name.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=(
            "%(asctime)s | %(levelname)-8s | %(trace_id)s | %(name)s | %(message)s"
        ),
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(TraceIdFilter())

    logging.getLogger("auth_core").setLevel(log_level)
    logging.getLogger("auth_service").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Username/password login and opaque session tokens.

**Endpoints:**
- Register a new account (also logs it in)
- Login to obtain a session token
- Resolve the current user from `Authorization: Bearer <token>`

**Security:**
- Passwords are hashed with bcrypt
- Sessions expire 24 hours after issue
- Unknown usernames and wrong passwords are indistinguishable
""",
    },
    {
        "name": "Health",
        "description": "Liveness and readiness checks.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    engine: AsyncEngine = app.state.engine

    logger.info("Starting auth API v%s...", API_VERSION)
    try:
        await create_tables(engine)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None
    app.state.shutting_down = False
    yield

    # Shutdown - stop advertising readiness, then release the pool
    logger.info("Shutting down auth API...")
    app.state.shutting_down = True
    await engine.dispose()
    logger.info("Database connections closed")


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints."""
    v1_router = APIRouter()
    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    return v1_router


def create_app(
    settings: Settings | None = None,
    engine: AsyncEngine | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.
    engine
        Optional database engine override for testing. When omitted the
        process-wide engine is used, or a new one built from ``settings``.

    Returns
    -------
    Configured FastAPI application instance.
    """
    overridden = settings is not None or engine is not None
    if settings is None:
        settings = get_settings()

    # Configure logging on first app creation (not on module import)
    _configure_logging(settings.log_level)

    if engine is None:
        engine = build_engine(settings) if overridden else get_engine()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Username/password authentication with opaque session tokens.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )
    app.state.engine = engine
    app.state.shutting_down = False

    if overridden:
        session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        app.dependency_overrides[get_api_settings] = lambda: settings
        app.dependency_overrides[get_session_maker] = lambda: session_maker

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # Register auth exception handlers for consistent error responses
    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)
    app.include_router(health_router, tags=["Health"])
    app.include_router(metrics_router)

    return app
