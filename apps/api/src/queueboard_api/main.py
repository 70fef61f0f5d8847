"""queueboard API - FastAPI application entry point."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request

from queueboard_api import __version__
from queueboard_api.config import Settings, settings
from queueboard_api.dependencies import build_bulk_reset_executor, build_discovery_service
from queueboard_api.error_handling import install_error_handling
from queueboard_api.observability import (
    MetricsMiddleware,
    bind_queue_context,
    configure_logging,
)
from queueboard_api.routes import dashboard_router, prometheus_router, queues_router
from queueboard_api.services.queue_registry import QueueRegistry
from queueboard_api.web.inject import install_button_injection

logger = logging.getLogger(__name__)


async def _discover_in_background(app: FastAPI) -> None:
    try:
        app.state.startup_discovery = await app.state.discovery.run()
    except Exception:
        # DiscoveryFailed is returned, not raised; anything here is unexpected
        logger.exception("Discovery pass crashed")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan manager."""
    app_settings: Settings = app.state.settings
    configure_logging(app_settings)
    bind_queue_context(prefix=app_settings.bull_prefix, engine=app_settings.engine_version())

    # Startup: discover queues without delaying readiness; requests served
    # before it finishes see an empty registry.
    app.state.startup_discovery = None
    app.state.discovery_task = asyncio.create_task(_discover_in_background(app))
    logger.info(
        "queueboard started on http://%s:%s%s, fetching queue list",
        app_settings.host,
        app_settings.port,
        app_settings.home_page,
    )

    yield

    # Shutdown: stop discovery if still running, then release every client
    task: asyncio.Task[None] = app.state.discovery_task
    if not task.done():
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task
    await app.state.discovery.close()


def create_app(app_settings: Settings = settings) -> FastAPI:
    """Build the FastAPI application for ``app_settings``."""
    app = FastAPI(
        title="queueboard API",
        description="Live control surface over Redis-backed job queues",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.queue_registry = QueueRegistry()
    app.state.discovery = build_discovery_service(app_settings, app.state.queue_registry)
    app.state.bulk_reset_executor = build_bulk_reset_executor(
        app_settings, app.state.queue_registry
    )
    base_path = app_settings.base_path

    install_button_injection(
        app,
        root_path=base_path,
        api_url=f"{base_path}/api/clean-all-queues",
    )

    @app.middleware("http")
    async def proxy_path_middleware(request: Request, call_next):  # type: ignore[no-untyped-def]
        if app_settings.proxy_path:
            request.state.proxy_url = app_settings.proxy_path
        return await call_next(request)

    # Global error handling + request correlation
    install_error_handling(app)
    app.add_middleware(MetricsMiddleware)

    app.include_router(prometheus_router)
    app.include_router(queues_router, prefix=base_path)
    app.include_router(dashboard_router, prefix=base_path)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "queueboard_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
