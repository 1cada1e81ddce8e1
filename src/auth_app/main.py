"""Scalekit Auth App

Main FastAPI application entry point.
Serves the /auth API backed by Scalekit SSO and the bundled frontend.

Running the Service:
    uvicorn auth_app.main:create_app --factory --host 0.0.0.0 --port 8080
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from auth_app.api.routes import auth
from auth_app.config.settings import Settings, load_settings
from auth_app.core.auth import IdentityProvider, create_identity_provider
from auth_app.infrastructure.auth.user_store import UserRecordStore
from auth_app.infrastructure.web.static import DEFAULT_WEB_BUILD_DIR, SPAStaticFiles

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    settings: Settings = app.state.settings

    logger.info(f"Starting {settings.service_name} v{settings.service_version}")
    logger.info(f"Public host: {settings.public_base_url}")
    logger.info(f"OAuth redirect URI: {settings.auth_redirect_uri}")

    yield

    logger.info(f"Shutting down {settings.service_name}")


def create_app(
    settings: Optional[Settings] = None,
    identity_provider: Optional[IdentityProvider] = None,
    user_store: Optional[UserRecordStore] = None,
) -> FastAPI:
    """Application factory function.

    Args:
        settings: Settings to use (loaded from the environment if omitted;
            the process exits if they cannot be loaded)
        identity_provider: Provider to use (Scalekit if omitted)
        user_store: Store to use (a fresh store with the configured policy if omitted)

    Returns:
        FastAPI: Configured application instance
    """
    if settings is None:
        settings = load_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Scalekit Auth App",
        version=settings.service_version,
        description="SSO login backend delegating authentication to Scalekit",
        lifespan=lifespan,
    )

    app.state.settings = settings
    if identity_provider is None:
        identity_provider = create_identity_provider(settings)
    if user_store is None:
        user_store = UserRecordStore(
            ttl_seconds=settings.user_store_ttl_seconds,
            max_entries=settings.user_store_max_entries,
        )

    app.state.identity_provider = identity_provider
    app.state.user_store = user_store

    @app.get("/health", tags=["system"])
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": settings.service_name,
            "version": settings.service_version,
        }

    app.include_router(auth.router)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler for unhandled errors"""
        logger.error(
            f"Unhandled exception: {exc}",
            extra={"path": request.url.path, "method": request.method},
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
            },
        )

    # Frontend last so API routes take precedence
    web_build_dir = Path(settings.web_build_dir) if settings.web_build_dir else DEFAULT_WEB_BUILD_DIR
    app.mount("/", SPAStaticFiles(directory=web_build_dir), name="web")

    return app


if __name__ == "__main__":
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "auth_app.main:create_app",
        factory=True,
        host=settings.server_host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
