"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.config import Config
from src.errors import INTERNAL_ERROR_MESSAGE, LeaderboardError
from src.services import LeaderboardService
from src.stores import LeaderboardStore, create_store
from src.api import router, static_router
from src.api.dependencies import set_config, set_service

logger = logging.getLogger(__name__)


def create_app(
    config: Config | None = None,
    store: LeaderboardStore | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.
    
    Args:
        config: Application configuration. If None, loads from environment.
        store: Leaderboard store. If None, chosen from config once, here.
        
    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = Config.from_env()

    if store is None:
        store = create_store(config)

    service = LeaderboardService(store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown."""
        # Startup
        logger.info("Starting leaderboard server")
        logger.info(f"Serving static files from: {config.static_dir}")

        set_config(config)
        set_service(service)

        yield

        # Shutdown
        logger.info("Shutting down...")
        await store.close()

    app = FastAPI(
        title="Dust Farm Leaderboard API",
        description="Top-5 score submission backend and static web client",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.exception_handler(LeaderboardError)
    async def leaderboard_error_handler(request: Request, exc: LeaderboardError):
        logger.info(f"{request.method} {request.url.path} rejected: {exc}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.middleware("http")
    async def catch_unhandled_errors(request: Request, call_next):
        # Last line of defense: never let a fault reach the server uncaught
        try:
            return await call_next(request)
        except Exception:
            logger.exception(f"Unhandled error for {request.method} {request.url.path}")
            return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})

    # Include API routes
    app.include_router(router)

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    # Static catch-all goes last so it never shadows the API
    app.include_router(static_router)

    return app
