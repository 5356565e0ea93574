"""FastAPI application factory and main entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.logging import level_for, setup_logging
from app.price_alerts.infrastructure.db.session import dispose_engine
from app.price_alerts.presentation.api import alerts, health, jobs, unsubscribe

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    setup_logging(level=level_for(settings.debug))
    logger.info("Stock alert service starting up...")
    logger.info(f"Environment: {settings.app_env}")
    if not settings.finnhub_api_key:
        logger.warning("FINNHUB_API_KEY is not set; alert passes will skip every symbol")
    if not settings.postmark_api_token:
        logger.warning("POSTMARK_API_TOKEN is not set; alert emails are only logged")

    yield

    # Shutdown
    logger.info("Stock alert service shutting down...")
    await dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Stock Price Alerts",
        description="Price-movement alerts for stock watchlists with email notification",
        version=health.VERSION,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.is_development else None,
        redoc_url="/api/redoc" if settings.is_development else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [settings.public_base_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API routes
    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(alerts.router, prefix="/api", tags=["Alerts"])
    app.include_router(unsubscribe.router, prefix="/api", tags=["Email"])
    app.include_router(jobs.router, prefix="/api", tags=["Jobs"])

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )
