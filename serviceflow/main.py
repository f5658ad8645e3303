"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from serviceflow import __version__
from serviceflow.api.v1.router import api_router
from serviceflow.catalog.factory import create_catalog
from serviceflow.catalog.loader import CatalogLoader
from serviceflow.core.config import settings
from serviceflow.core.logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(f"Starting ServiceFlow API (env={settings.env}, catalog={settings.catalog_backend})")

    if settings.init_db_on_startup and settings.catalog_backend == "sql":
        from serviceflow.db.init_db import init_db
        from serviceflow.db.session import AsyncSessionLocal, engine

        logger.info("Initializing database...")
        seed = CatalogLoader().load(settings.catalog_file)
        async with AsyncSessionLocal() as session:
            await init_db(engine, session, seed)

    app.state.catalog = create_catalog(settings)

    yield

    logger.info("Shutting down ServiceFlow API")
    await app.state.catalog.close()


app = FastAPI(
    title="ServiceFlow API",
    description="Guided questionnaire recommending services for a goal",
    version=__version__,
    docs_url="/docs" if settings.is_dev else None,
    redoc_url="/redoc" if settings.is_dev else None,
    openapi_url="/openapi.json" if settings.is_dev else None,
    lifespan=lifespan,
)

# CORS middleware (configure appropriately for production)
if settings.is_dev:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:3001"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")

    # Don't expose internal errors in production
    if settings.is_prod:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


app.include_router(api_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def root() -> dict:
    """Root endpoint with service info."""
    return {
        "service": "ServiceFlow API",
        "version": __version__,
        "docs": "/docs" if settings.is_dev else "Disabled in production",
    }
