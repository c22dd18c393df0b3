"""
RemarkDeck - Main Application Entry Point

Generates remark.js slide decks from free-text topics behind a rate-limited API.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from remarkdeck import __version__
from remarkdeck.api.routes import pages, slides
from remarkdeck.core import get_settings, setup_logging
from remarkdeck.services import get_slide_request_service

setup_logging(logging.DEBUG if get_settings().debug else logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    settings = get_settings()

    logger.info(f"Starting {settings.app_name}...")
    settings.ensure_directories()

    logger.info(f"LLM Provider: {settings.llm_provider}")
    logger.info(f"Moderation enabled: {settings.has_moderation}")
    logger.info(
        f"Rate limit: {settings.rate_limit_max_requests} requests "
        f"per {settings.rate_limit_window_seconds:g}s"
    )
    if not settings.has_azure_openai:
        logger.warning("Azure OpenAI is not configured - deck generation will be unavailable")

    yield

    logger.info(f"Shutting down {settings.app_name}...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="AI-generated remark.js slide decks",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(slides.router, tags=["slides"])
    app.include_router(pages.router, tags=["pages"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "app_name": settings.app_name,
            "llm_provider": settings.llm_provider,
            "generation_available": get_slide_request_service().is_available,
        }

    @app.get("/api/config")
    async def get_public_config():
        """Get public configuration."""
        return {
            "app_name": settings.app_name,
            "llm_enabled": settings.llm_provider != "none",
            "max_input_length": settings.max_input_length,
            "rate_limit_max_requests": settings.rate_limit_max_requests,
            "rate_limit_window_seconds": settings.rate_limit_window_seconds,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "remarkdeck.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
