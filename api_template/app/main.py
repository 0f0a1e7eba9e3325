"""
Main entrypoint for the API template.

This module assembles the FastAPI application, sets up logging,
CORS, request logging and error handlers, and includes the versioned
and health routers.  The ``create_app`` function builds and configures
the app, which is then instantiated at module import time as ``app``.
Importing the app here makes it easy to run with uvicorn or another
ASGI server, e.g.::

    uvicorn api_template.app.main:app --reload

The application title, version, description and contact are provided
via ``Settings`` from ``core.config``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.health import router as health_router
from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db, seed_sample_data
from .core.errors import ServiceUnavailableError, UnsupportedApiVersionError
from .core.logging_config import setup_logging
from .core.middleware import log_requests
from .core.versioning import SUPPORTED_VERSIONS_HEADER

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    # Apply migrations at startup.  This creates the database file if it
    # does not exist and ensures all tables are up to date.
    try:
        init_db()
        if settings.seed_sample_data:
            seed_sample_data()
    except Exception:
        logger.exception("Error occurred while ensuring database is created and migrated")
        if settings.is_production:
            raise
        logger.warning("Continuing with potential database issues in %s environment", settings.environment)
    logger.info("%s %s started (%s)", settings.project_name, settings.api_version, settings.environment)
    yield
    logger.info("%s shutting down", settings.project_name)


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceUnavailableError)
    async def service_unavailable_handler(request: Request, exc: ServiceUnavailableError) -> JSONResponse:
        logger.error("%s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": "Service temporarily unavailable"})

    @app.exception_handler(UnsupportedApiVersionError)
    async def unsupported_version_handler(request: Request, exc: UnsupportedApiVersionError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "supported_versions": exc.supported},
            headers={SUPPORTED_VERSIONS_HEADER: ", ".join(exc.supported)},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    This function performs one‑time setup tasks such as configuring
    logging and including routers.  It returns a fully configured
    FastAPI instance ready to be served.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that imports below can
    # safely log messages.
    setup_logging(settings.log_level, settings.log_dir or None)

    contact = {
        key: value
        for key, value in (
            ("name", settings.contact_name),
            ("email", settings.contact_email),
            ("url", settings.contact_url),
        )
        if value
    }
    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        description=settings.description,
        contact=contact or None,
        docs_url="/swagger",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Credentials are only allowed together with an explicit origin list.
    origins = settings.cors_allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=settings.cors_allow_credentials and bool(settings.cors_allowed_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    _register_exception_handlers(app)

    # Mount versioned routes under /api/v1.  Additional versions can be
    # added later by including their respective routers with a
    # different prefix.
    app.include_router(v1_router, prefix="/api/v1")
    app.include_router(health_router, prefix="/health", tags=["health"])
    app.include_router(health_router, prefix="/api/health", tags=["health"])

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
