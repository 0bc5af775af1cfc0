"""SnapTrade Relay API — FastAPI application factory.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RelayError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The upstream client is built once per app and closed on shutdown,
      unless one was injected (tests), which the app never closes

Design Decisions:
    - Factory over module-level app: settings and upstream client are explicit
      arguments, so tests substitute a stub without touching the environment
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from relay.api.error_handlers import register_error_handlers
from relay.api.middleware import RequestIdMiddleware
from relay.api.routes import brokerage, health
from relay.config import APP_VERSION, Settings, get_settings
from relay.core.upstream_protocol import UpstreamClient
from relay.infrastructure.snaptrade_client import SnapTradeClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    owned_client = None
    if app.state.upstream is None:
        owned_client = SnapTradeClient.from_settings(app.state.settings)
        app.state.upstream = owned_client
    if app.state.settings.admin_token is None:
        logger.warning("ADMIN_TOKEN not set: list-users and delete-user are disabled")
    logger.info("SnapTrade relay started")
    yield
    if owned_client is not None:
        await owned_client.aclose()
        app.state.upstream = None
    logger.info("SnapTrade relay shutting down")


def create_app(
    settings: Settings | None = None, upstream: UpstreamClient | None = None,
) -> FastAPI:
    """Build the relay app. Loads settings from the environment when not given."""
    settings = settings or get_settings()

    app = FastAPI(
        title="SnapTrade Relay", version=APP_VERSION, lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.upstream = upstream

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(brokerage.router, prefix=settings.relay_api_prefix)

    register_error_handlers(app)
    return app
