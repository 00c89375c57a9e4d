"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from nachagen.api.routes import health, nacha
from nachagen.core.config import AppSettings
from nachagen.core.logging import setup_logging
from nachagen.services.generator import create_generator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    settings = AppSettings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.settings = settings
    app.state.generator = create_generator(settings)
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="nachagen NACHA File Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(health.router)
    app.include_router(nacha.router, prefix="/nacha")
    return app
