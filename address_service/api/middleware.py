"""Middleware for FastAPI application."""

import logging
import time
from typing import Callable
from fastapi import Request, Response, HTTPException
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError

from address_service.config.logging import (
    generate_correlation_id,
    set_correlation_id,
    LoggingService
)

logger = logging.getLogger(__name__)
logging_service = LoggingService(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to handle correlation IDs for request tracing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request with correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID")
        if not correlation_id:
            correlation_id = generate_correlation_id()

        set_correlation_id(correlation_id)

        logging_service.log_operation(
            "info",
            f"Request started: {request.method} {request.url.path}",
            operation="request_start",
            method=request.method,
            path=str(request.url.path),
            query_params=str(request.query_params) if request.query_params else None
        )

        try:
            response = await call_next(request)

            response.headers["X-Correlation-ID"] = correlation_id

            logging_service.log_operation(
                "info",
                f"Request completed: {request.method} {request.url.path}",
                operation="request_complete",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code
            )

            return response

        except Exception as e:
            logging_service.log_error(
                f"Request failed: {request.method} {request.url.path}",
                e,
                operation="request_error",
                method=request.method,
                path=str(request.url.path)
            )

            error_response = JSONResponse(
                status_code=500,
                content={
                    "error": "Internal Server Error",
                    "message": "An unexpected error occurred",
                    "correlation_id": correlation_id
                }
            )
            error_response.headers["X-Correlation-ID"] = correlation_id
            return error_response


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Log request and response details."""
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time

        logging_service.log_operation(
            "info",
            "Request processed",
            operation="request_metrics",
            method=request.method,
            path=str(request.url.path),
            status_code=response.status_code,
            process_time_ms=round(process_time * 1000, 2),
            content_length=response.headers.get("content-length")
        )

        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware for centralized error handling."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Handle errors that escaped the routes and return HTTP responses."""
        try:
            return await call_next(request)

        except HTTPException:
            raise

        except DBAPIError as e:
            # OperationalError covers refused or dropped connections
            if isinstance(e, OperationalError) or e.connection_invalidated:
                logging_service.log_error(
                    "Database connection error",
                    e,
                    operation="error_handling",
                    path=str(request.url.path),
                    method=request.method
                )

                return JSONResponse(
                    status_code=503,
                    content={
                        "error": "Service Unavailable",
                        "message": "Database service unavailable"
                    }
                )

            return self._database_error_response(request, e)

        except SQLAlchemyError as e:
            return self._database_error_response(request, e)

        except Exception as e:
            logging_service.log_error(
                "Unexpected error",
                e,
                operation="error_handling",
                path=str(request.url.path),
                method=request.method
            )

            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal Server Error",
                    "message": "An unexpected error occurred"
                }
            )

    @staticmethod
    def _database_error_response(request: Request, error: SQLAlchemyError) -> JSONResponse:
        logging_service.log_error(
            "Database error",
            error,
            operation="error_handling",
            path=str(request.url.path),
            method=request.method
        )

        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "message": "Database error occurred"
            }
        )
