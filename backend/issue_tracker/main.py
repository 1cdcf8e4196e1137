"""
Issue Tracker - Main Application Entry Point
"""

import secrets
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from issue_tracker.api import auth, issues
from issue_tracker.api.errors import register_exception_handlers
from issue_tracker.core.config import Settings, get_settings
from issue_tracker.core.logger import configure_logging, setup_logger
from issue_tracker.infrastructure.local.database import Database
from issue_tracker.utils.datetime_utils import now_utc

API_VERSION = "1.0.0"

logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    settings: Settings = app.state.settings
    logger.info("Starting Issue Tracker API in %s mode...", settings.ENVIRONMENT)
    await app.state.database.init()

    yield

    logger.info("Shutting down Issue Tracker API...")
    await app.state.database.dispose()


def _resolve_secret(settings: Settings) -> Settings:
    if settings.JWT_SECRET:
        return settings
    if settings.is_production:
        raise ValueError("JWT_SECRET must be set in production")
    logger.warning("JWT_SECRET is not set; using a random secret for this process")
    return settings.model_copy(update={"JWT_SECRET": secrets.token_urlsafe(32)})


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = _resolve_secret(settings or get_settings())
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Issue Tracker API",
        description="Issues, comments and per-user statistics",
        version=API_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.is_development:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            logger.info(
                "%s %s %s %.1fms",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - started) * 1000,
            )
            return response

    register_exception_handlers(app, settings)

    # Include routers
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(issues.router, prefix="/api/issues", tags=["issues"])

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "OK",
            "message": "Server is running",
            "timestamp": now_utc().isoformat(),
            "version": API_VERSION,
        }

    @app.get("/")
    async def root():
        return {
            "message": "Issue Tracker API",
            "version": API_VERSION,
            "endpoints": {
                "health": "/api/health",
                "auth": "/api/auth",
                "issues": "/api/issues",
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=app.state.settings.HOST, port=app.state.settings.PORT)
