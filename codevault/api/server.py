"""FastAPI application factory for the CodeVault service."""

from __future__ import annotations

from fastapi import FastAPI

from ..logging_setup import setup_logging
from ..storage import KeyValueBackend
from .route import router
from .service import ApiSettings
from ..mcpserver import mcp


def create_app(
    settings: ApiSettings | None = None,
    *,
    backend: KeyValueBackend | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    # setup mcp
    mcp_app = mcp.http_app("/")

    settings = settings or ApiSettings.from_env()
    setup_logging(settings.log_level)
    app = FastAPI(
        title="CodeVault API",
        version="0.1.0",
        lifespan=mcp_app.lifespan,
    )
    app.state.settings = settings
    if backend is not None:
        app.state.backend = backend
    app.include_router(router)

    # mount mcp
    app.mount("/mcp", mcp_app)

    return app


app = create_app()


__all__ = ["app", "create_app"]
