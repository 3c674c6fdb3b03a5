"""Main FastAPI application entry point.

This module initializes the FastAPI application with all routers, middleware,
and lifecycle events for the Suzhou Government News Feed service.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from govfeed.api.dependencies import get_http_fetcher
from govfeed.api.routers import health, suzhou
from govfeed.core.config import settings
from govfeed.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle events.

    Configures logging on startup and closes the shared HTTP client on
    shutdown.

    Args:
        app: FastAPI application instance
    """
    setup_logging()
    logger.info("=" * 80)
    logger.info(f"Starting {settings.api_title}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Portal: {settings.suzhou_root_url}")
    logger.info("=" * 80)

    yield

    logger.info(f"Shutting down {settings.api_title}")
    if get_http_fetcher.cache_info().currsize:
        await get_http_fetcher().close()
        # A later startup in this process must get a fresh client
        get_http_fetcher.cache_clear()
    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.api_title,
    description=(
        "Feed adapter for the Suzhou municipal government portal. Fetches news and "
        "topic listings by category and returns normalized, feed-ready documents."
    ),
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(
    GZipMiddleware,
    minimum_size=1000,  # Only compress responses larger than 1KB
)

app.include_router(suzhou.router, prefix="/gov", tags=["suzhou"])
app.include_router(health.router, tags=["health"])


@app.get("/")
async def root():
    """Root endpoint providing API information.

    Returns:
        Basic API information and links to documentation
    """
    return {
        "name": settings.api_title,
        "version": settings.api_version,
        "status": "operational",
        "docs": "/docs",
        "redoc": "/redoc",
        "openapi": "/openapi.json",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "govfeed.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level="info",
    )
