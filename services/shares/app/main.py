"""
Main FastAPI application for share service.

Stores shared diagrams at a code-host (GitHub Gists or a GitLab repository)
and serves their content and revision history.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from services.shares.app.api.errors import register_exception_handlers
from services.shares.app.api.health import router as health_router
from services.shares.app.api.v1.gists import router as gists_router
from services.shares.app.core.config import get_settings
from services.shares.app.providers import create_share_provider
from shared.config.logging import get_logger, setup_logging
from shared.observability.metrics import get_metrics
from shared.observability.middleware import MetricsMiddleware
from shared.observability.tracing import instrument_fastapi, setup_tracing

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifespan.

    Opens the storage provider on startup and closes its connection pool on
    shutdown.
    """
    settings = get_settings()
    app.state.settings = settings

    setup_tracing(
        service_name=settings.service_name,
        service_version=settings.service_version,
        otlp_endpoint=settings.otlp_endpoint,
        console_export=settings.debug,
    )

    if getattr(app.state, "share_provider", None) is None:
        app.state.share_provider = create_share_provider(settings)
    provider = app.state.share_provider

    if provider.is_configured():
        logger.info("share_provider_ready", provider=provider.name)
    else:
        logger.warning("share_provider_not_configured", provider=provider.name)

    yield

    await provider.close()
    app.state.share_provider = None
    logger.info("share_provider_closed", provider=provider.name)


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()
    setup_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
        service_name=settings.service_name,
    )

    app = FastAPI(
        title="Diagram Share Service",
        description="Diagram sharing backed by GitHub Gists or a GitLab repository",
        version=settings.service_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(MetricsMiddleware, service_name=settings.service_name)

    instrument_fastapi(app)
    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(gists_router, tags=["gists"])

    @app.get("/metrics")
    async def metrics() -> Response:
        """Prometheus metrics endpoint."""
        return Response(content=get_metrics(), media_type="text/plain")

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "services.shares.app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
