"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spendwise.infrastructure.persistence.sqlalchemy.init_db import create_tables
from spendwise.presentation.api.dependencies import (
    create_engine,
    create_session_maker,
    create_session_registry,
)
from spendwise.presentation.api.exception_handlers import (
    setup_exception_handlers,
)
from spendwise.presentation.api.routers import records_router, trash_router
from spendwise.presentation.api.schemas import HealthResponse
from spendwise_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging(log_level_str: str) -> None:
    """Configure application logging.

    Console output with timestamps and module names, the spendwise level
    from settings, WARNING for noisy third-party libraries.
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("spendwise").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

# API version info
API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

# OpenAPI tags metadata for documentation
OPENAPI_TAGS = [
    {
        "name": "Trash",
        "description": """Recently deleted records.

**Entries:**
- Expenses, loan records, split bills (with participants) and groups
- Keyed as `<kind>:<original id>`
- Kept for the retention period, then purgeable

**Restore:**
- Recreates the record in the ledger under a new id
- A split bill is written in two steps; if the second fails the response
  is `409 PARTIAL_RESTORE` with the new bill id in `details`
""",
    },
    {
        "name": "Records",
        "description": "Delete live ledger records into the trash.",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Spendwise trash API v%s...", API_VERSION)
    engine = app.state.engine
    try:
        await create_tables(engine)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None
    yield

    # Shutdown - dispose the engine and its connection pool
    logger.info("Shutting down Spendwise trash API...")
    await engine.dispose()
    logger.info("Database connections closed")


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints.

    Returns
    -------
    APIRouter with all v1 endpoints mounted.
    """
    v1_router = APIRouter()
    v1_router.include_router(trash_router, prefix="/trash", tags=["Trash"])
    v1_router.include_router(records_router, prefix="/records", tags=["Records"])
    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    # Configure logging on first app creation (not on module import)
    _configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.app_name} Trash API",
        description="Recently-deleted trash with purge and restore.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    # One engine, session maker and trash session registry per app
    engine = create_engine(settings)
    session_maker = create_session_maker(engine)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = session_maker
    app.state.trash_sessions = create_session_registry(settings, session_maker)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register domain exception handlers for consistent error responses
    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    # Health check endpoint (unversioned - always accessible)
    @app.get("/health", tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers and monitoring."""
        return HealthResponse(status="healthy", version=API_VERSION)

    return app
