"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from src.api.middleware.error_handler import setup_exception_handlers
from src.api.routes import (
    health_router,
    materials_router,
    pictures_router,
    warehouse_router,
)
from src.application.services import build_services
from src.config import configure_logging, get_logger, get_settings
from src.core.exceptions import StorageError
from src.infrastructure.storage.sqlite import create_pool
from src.infrastructure.storage.sqlite.migrations import initialize_database

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database, opens the connection pool and wires the
    services on startup; closes the pool on shutdown.
    """
    settings = get_settings()
    configure_logging()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    results = await initialize_database(settings.storage.db_path)
    failed = [r for r in results if not r.success]
    if failed:
        logger.error(
            "database_init_failed",
            version=failed[0].version,
            error=failed[0].error,
        )
        raise StorageError(f"Migration {failed[0].version} failed: {failed[0].error}")
    logger.info("database_initialized", applied=len(results))

    pool = create_pool(settings.storage)
    await pool.initialize()
    logger.info("connection_pool_ready", size=settings.storage.pool_size)

    app.state.pool = pool
    app.state.services = build_services(pool, settings)

    logger.info("application_started")

    try:
        yield
    finally:
        logger.info("application_stopping")
        await pool.close()
        logger.info("connection_pool_closed")
        logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Controlata Warehouse API",
        description="Stock ledger, movements, bills of materials and picture costing",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(materials_router)
    app.include_router(warehouse_router)
    app.include_router(pictures_router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "src.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
