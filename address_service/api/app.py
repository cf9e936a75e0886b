"""FastAPI application factory and configuration."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from address_service import __version__
from address_service.config.logging import setup_logging, LoggingService
from address_service.api.middleware import CorrelationIdMiddleware, LoggingMiddleware, ErrorHandlingMiddleware
from address_service.api.routes import router as address_router
from address_service.models.schemas import HealthCheckResponse
from address_service.repositories.connection import database_manager

logger = logging.getLogger(__name__)
logging_service = LoggingService(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    setup_logging()
    logging_service.log_operation(
        "info",
        "Address Service starting up...",
        operation="service_startup"
    )

    try:
        await database_manager.initialize()
        logging_service.log_operation(
            "info",
            "Database connection established successfully",
            operation="database_startup"
        )
    except Exception as e:
        logging_service.log_error(
            "Failed to establish database connection during startup",
            e,
            operation="database_startup"
        )
        # Don't fail startup - the health check reports availability

    yield

    logging_service.log_operation(
        "info",
        "Address Service shutting down...",
        operation="service_shutdown"
    )

    await database_manager.close()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""

    app = FastAPI(
        title="Address Service",
        description="CRUD procedures over stored postal addresses",
        version=__version__,
        lifespan=lifespan,
    )

    # The last middleware added runs outermost: correlation ID wraps logging,
    # which wraps error handling, so every log line carries the ID
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthCheckResponse)
    async def health_check():
        """Health check endpoint with database connectivity check."""
        database_connected = await database_manager.health_check()

        if database_connected:
            status = "healthy"
            logging_service.log_operation(
                "info",
                "Health check passed - all systems operational",
                operation="health_check",
                database_connected=database_connected
            )
        else:
            status = "degraded"
            logging_service.log_operation(
                "warning",
                "Health check shows degraded status - database unavailable",
                operation="health_check",
                database_connected=database_connected
            )

        return HealthCheckResponse(
            status=status,
            database_connected=database_connected
        )

    app.include_router(address_router)

    return app


# Create the application instance
app = create_app()
