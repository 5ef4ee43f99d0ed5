"""Application entry point: FastAPI app factory and uvicorn runner."""

import logging

import uvicorn
from fastapi import FastAPI

from songlib import __version__
from songlib.api.exception_handlers import register_exception_handlers
from songlib.api.routers import api_router, health
from songlib.config import Settings, get_settings
from songlib.infrastructure.lifecycle import lifespan
from songlib.infrastructure.observability import RequestLoggingMiddleware

logger = logging.getLogger(__name__)


# Hey future me, tests call create_app(settings) with their own Settings (tmp SQLite file etc).
# Everything that needs settings at startup reads them from app.state.settings, never from the
# cached get_settings() - otherwise the test settings would be silently ignored.
def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Song catalog: filtered listing, paginated lyrics and CRUD for songs",
        version=settings.app_version or __version__,
        debug=settings.debug,
        docs_url=settings.api.docs_url,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        RequestLoggingMiddleware,
        log_request_body=settings.observability.log_request_body,
    )
    register_exception_handlers(app)

    app.include_router(api_router, prefix=settings.api.prefix)
    app.include_router(health.router, prefix="/health", tags=["Health"])

    return app


app = create_app()


def run() -> None:
    """Run the API server with uvicorn (the `songlib` console script)."""
    settings = get_settings()
    uvicorn.run(
        "songlib.main:app",
        host=settings.api.host,
        port=settings.api.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
