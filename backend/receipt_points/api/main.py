"""Entry point for the FastAPI application.

:func:`create_app` constructs the FastAPI app with its own in-memory
receipt store, includes the routers and registers the exception
handlers. The module-level ``app`` is what uvicorn serves; :func:`main`
is the ``receipt-points`` console script.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from urllib.parse import urlparse

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from receipt_points.api.endpoints.health import router as health_router
from receipt_points.api.error_handlers import register_exception_handlers
from receipt_points.api.routes.receipts import router as receipts_router
from receipt_points.core.config import Settings, settings as default_settings
from receipt_points.core.observability import configure_logging, init_sentry
from receipt_points.services.receipt_store import ReceiptStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    # Startup
    logger.info("Starting up...")
    if init_sentry("api", app.state.settings):
        logger.info("Sentry SDK initialized (api)")
    yield
    # Shutdown
    logger.info("Shutting down... receipts_stored=%d", len(app.state.receipt_store))


def _cors_origins(settings: Settings) -> list[str]:
    """CORS configuration.

    Development allows all origins. Otherwise start from
    BACKEND_CORS_ORIGINS, drop entries that are not ``scheme://host``
    origins and deduplicate while preserving order.
    """
    if settings.is_development:
        return ["*"]
    origins: list[str] = []
    for origin in settings.BACKEND_CORS_ORIGINS or []:
        parsed = urlparse(origin)
        if not (parsed.scheme and parsed.netloc):
            logger.warning("[cors] ignoring invalid origin %r", origin)
            continue
        normalized = f"{parsed.scheme}://{parsed.netloc}"
        if normalized not in origins:
            origins.append(normalized)
    return origins


def create_app(settings: Settings | None = None, store: ReceiptStore | None = None) -> FastAPI:
    """Build an application instance with an isolated receipt store."""
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.receipt_store = store if store is not None else ReceiptStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(settings),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(receipts_router)
    app.include_router(health_router, tags=["health"])
    return app


app = create_app()


def main() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(
        "receipt_points.api.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":  # pragma: no cover
    main()
