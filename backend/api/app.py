"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from shared.logging_config import configure_logging
from modules.auth.routes import router as auth_router
from modules.tasks.routes import router as tasks_router

from .dependencies import container_for
from .errors import register_exception_handlers
from .routes import health, pages

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "Starting %s on %s:%s (%s, session store: %s)",
        settings.app_name,
        settings.host,
        settings.port,
        settings.environment,
        settings.session_store,
    )
    if not settings.google_configured:
        logger.warning("GOOGLE_CLIENT_ID/GOOGLE_CLIENT_SECRET not set; logins will fail")
    try:
        await container_for(app).sessions.purge_expired()
    except Exception:
        logger.exception("Could not purge expired sessions at startup")
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Task manager API with Google OAuth sessions",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api-docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(pages.router, tags=["pages"])
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/auth", tags=["authentication"])
    app.include_router(tasks_router, prefix="/api/tasks", tags=["tasks"])

    return app


# Application instance for uvicorn
app = create_app()
