"""
FastAPI Application Entry Point.

This is the main entry point for the notebook backend application.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from modules.notebook.api import health
from modules.notebook.api.v1 import router as api_v1_router
from modules.notebook.core.config import get_app_config, get_settings
from modules.notebook.core.database import Database
from modules.notebook.core.exception_handlers import register_exception_handlers
from modules.notebook.core.logging import get_logger, setup_logging
from modules.notebook.core.middleware import RequestContextMiddleware
from modules.notebook.core.text_generation import TextGenerationClient

logger = get_logger(__name__)

_app: FastAPI | None = None


def _build_text_client() -> TextGenerationClient | None:
    """Text-generation client, or None when AI is disabled or no key is set."""
    app_config = get_app_config()
    api_key = get_settings().gemini_api_key

    if not app_config.features.ai_enabled:
        logger.info("AI features disabled")
        return None
    if not api_key:
        logger.warning("GEMINI_API_KEY not set, AI features unavailable")
        return None
    return TextGenerationClient(api_key, app_config.ai)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Builds the database handle and the text-generation client, stores
    them on app.state and releases them on shutdown.
    """
    app_config = get_app_config()
    setup_logging(level=app_config.logging.level)

    app.state.database = Database.from_config()
    app.state.text_client = _build_text_client()

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
            "ai_enabled": app.state.text_client is not None,
        },
    )
    try:
        yield
    finally:
        logger.info("Application shutting down")
        if app.state.text_client is not None:
            await app.state.text_client.close()
        await app.state.database.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app_config = get_app_config()
    app_settings = app_config.application

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.docs_enabled else None,
        redoc_url="/redoc" if app_settings.docs_enabled else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        RequestContextMiddleware,
        log_requests=app_config.features.api_request_logging,
    )

    cors_origins = app_settings.cors.origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=app_settings.api_prefix)

    return app


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    This function creates the app on first call and caches it.
    Use this instead of importing `app` directly to avoid
    import-time configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn modules.notebook.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
