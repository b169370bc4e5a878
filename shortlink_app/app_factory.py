"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from shortlink_app.api.v1 import links
from shortlink_app.config import Settings
from shortlink_app.database.connection import (
    create_db_engine,
    create_session_factory,
    init_database,
)
from shortlink_app.middleware import LoggingMiddleware
from shortlink_app.web import routes as web_routes

logger = logging.getLogger(__name__)


def create_app(settings: Settings, engine: Optional[Engine] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration, stored on app.state for the dependencies
        engine: Prebuilt engine (tests); built from settings.database_url if omitted

    Returns:
        Configured FastAPI app
    """
    if engine is None:
        engine = create_db_engine(settings.database_url, settings.db_timeout_seconds)

    if settings.create_tables:
        init_database(engine)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="A personal link shortener built with FastAPI",
        debug=settings.debug,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    app.add_middleware(LoggingMiddleware)

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "environment": settings.environment}

    ######## Include routers
    # Order matters: the web router ends with a catch-all /{code} route
    app.include_router(links.router, prefix="/api/v1")
    app.include_router(web_routes.router)

    logger.info(f"{settings.app_name} {settings.app_version} ready ({settings.environment})")
    return app
