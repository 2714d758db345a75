from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from desguace_catalog.container import AppContainer
from desguace_catalog.entrypoints.http.exception_handlers import register_exception_handlers
from desguace_catalog.entrypoints.http.routes.catalog import router as catalog_router
from desguace_catalog.entrypoints.http.routes.health import router as health_router
from desguace_catalog.entrypoints.http.routes.parts import router as parts_router
from desguace_catalog.entrypoints.http.routes.photos import router as photos_router
from desguace_catalog.entrypoints.http.routes.vehicles import router as vehicles_router
from desguace_catalog.infra.logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_app(container: AppContainer | None = None) -> FastAPI:
    """
    Build the API application.

    Without ``container`` one is built from the environment at startup and
    closed at shutdown. A given container is used as is and left open.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if container is not None:
            app.state.container = container
            yield
            return

        configure_logging()
        app.state.container = AppContainer.from_env()
        logger.info("Application started")
        try:
            yield
        finally:
            await app.state.container.aclose()
            logger.info("Application stopped")

    app = FastAPI(
        title="Desguace Catalog API",
        description="""
        Aggregation API over the vehicle dismantling backend.

        ## Features
        - Storefront parts catalog with filters and cascading options
        - Vehicles of origin with part counts and latest photos
        - Part deletion guarded by open orders
        - Part photo upload and principal photo selection

        ## Error Handling
        All errors return structured JSON responses with error codes.
        See the error response schemas in the API documentation.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    if container is not None:
        app.state.container = container

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(catalog_router, prefix="/v1")
    app.include_router(vehicles_router, prefix="/v1")
    app.include_router(parts_router, prefix="/v1")
    app.include_router(photos_router, prefix="/v1")

    return app


app = build_app()
