"""
Brokerage API Application.

============================================================
PURPOSE
============================================================
Builds the FastAPI application.

- create_app(config): connects the database on startup, wires
  the services and disposes the engine on shutdown
- create_app(container=...): serves a prebuilt container
  (no database lifecycle)

============================================================
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from api.dependencies import ServiceContainer, build_container
from api.errors import register_exception_handlers
from api.routers import health, instruments, orders, portfolio
from core.config import AppConfig
from storage.database import Database


logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    Create the API application.

    Args:
        config: Application configuration (defaults to AppConfig())
        container: Prebuilt services; skips database setup when given
    """
    config = config or AppConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if container is not None:
            app.state.container = container
            yield
            return

        database = Database(config.database)
        await database.connect()
        if config.database.is_sqlite:
            await database.create_all()
        app.state.container = build_container(config, database)
        logger.info(f"Brokerage API started (database={config.database.safe_url})")
        try:
            yield
        finally:
            await database.disconnect()
            logger.info("Brokerage API stopped")

    app = FastAPI(
        title="Brokerage API",
        description="Instrument search, order placement and portfolio valuation.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Serve a prebuilt container even when the lifespan is not run
    if container is not None:
        app.state.container = container

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(instruments.router)
    app.include_router(orders.router)
    app.include_router(portfolio.router)

    return app
