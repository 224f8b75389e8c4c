"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.application.services import ChangeCapture, ChangeHub
from storefront.config import get_settings
from storefront.infrastructure.database import Base, engine
from storefront.infrastructure.database.bootstrap import ensure_catalog_database
from storefront.infrastructure.database.session import async_session_factory
from storefront.infrastructure.database.repositories import SQLAlchemyChangeLog
from storefront.infrastructure.logging.log_config import setup_logging
from storefront.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


def _build_change_capture(hub: ChangeHub) -> ChangeCapture:
    settings = get_settings()
    return ChangeCapture(
        SQLAlchemyChangeLog(async_session_factory),
        hub,
        poll_interval=settings.change_capture_poll_interval,
        batch_size=settings.change_capture_batch_size,
        max_retries=settings.change_capture_max_retries,
        retry_backoff=settings.change_capture_retry_backoff,
        max_backoff=settings.change_capture_max_backoff,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables, then start change capture for the app lifetime."""
    settings = get_settings()
    setup_logging()

    # 1. Ensure the database and tables exist
    await ensure_catalog_database(settings.database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. Follow the change log and feed the hub
    hub: ChangeHub = app.state.change_hub
    capture = None
    if settings.change_capture_enabled:
        capture = _build_change_capture(hub)
        app.state.change_capture = capture
        await capture.start()
    else:
        logger.warning("Change capture disabled by configuration; live updates are off")

    yield

    # Shutdown
    if capture is not None:
        await capture.stop()
    await hub.shutdown()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # One hub per process, shared by every realtime transport
    app.state.change_hub = ChangeHub(queue_size=settings.realtime_queue_size)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
