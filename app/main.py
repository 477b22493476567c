"""FastAPI application factory and configuration."""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from app.api.v1 import api_router
from app.core.config import get_settings
from app.core.logging import setup_logging
from app.core.middleware import setup_middleware
from app.services.session import session_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    logger.info("Application startup: %s %s", settings.app_name, settings.app_version)

    if not settings.google_api_key:
        logger.warning("GOOGLE_API_KEY not set - transcription requests will fail")

    yield

    logger.info("Application shutdown: discarding %d sessions", len(session_store))
    session_store.clear()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.enable_log_redaction)

    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Setup middleware (CORS, auth, etc.)
    setup_middleware(app)

    # Include API routes with versioning
    app.include_router(api_router, prefix="/api/v1")

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app", host=settings.host, port=settings.port, proxy_headers=True, reload=False
    )
