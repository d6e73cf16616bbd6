"""
Error handling middleware.
"""

import traceback

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from src.config.logging import get_logger
from src.domain.exceptions.authorization_error import UnauthorizedError
from src.domain.exceptions.base import RepairDomainError
from src.domain.exceptions.conflict_error import ConflictError
from src.domain.exceptions.not_found_error import NotFoundError
from src.domain.exceptions.state_error import InvalidStateError
from src.domain.exceptions.validation_error import ValidationError
from src.infrastructure.monitoring.metrics import record_error

logger = get_logger(__name__)

# Most specific first; subclasses inherit their family's status.
DOMAIN_ERROR_STATUS = (
    (NotFoundError, 404, "Not Found"),
    (UnauthorizedError, 403, "Forbidden"),
    (ValidationError, 400, "Validation Error"),
    (ConflictError, 409, "Conflict"),
    (InvalidStateError, 409, "Invalid State"),
)


def status_for(exc: RepairDomainError) -> tuple[int, str]:
    """Map a domain error to an HTTP status and title."""
    for error_cls, status_code, title in DOMAIN_ERROR_STATUS:
        if isinstance(exc, error_cls):
            return status_code, title
    return 400, "Domain Error"


class ErrorHandlerMiddleware:
    """Error handling middleware for FastAPI."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_error_handlers()

    def add_error_handlers(self) -> None:
        """Add custom error handlers to FastAPI app."""
        add_error_handlers(self.app)


def add_error_handlers(app: FastAPI) -> None:
    """Add custom error handlers to FastAPI app."""

    @app.exception_handler(RepairDomainError)
    async def domain_error_handler(request: Request, exc: RepairDomainError):
        status_code, title = status_for(exc)
        logger.warning(
            "Request rejected",
            error_type=exc.error_type,
            error=exc.message,
            status_code=status_code,
            path=request.url.path,
        )
        record_error(exc.error_type, "api")
        return JSONResponse(
            status_code=status_code,
            content={"error": title, "message": exc.message, "type": exc.error_type},
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        logger.warning("Invalid input", error=str(exc), path=request.url.path)
        record_error("validation_error", "api")
        return JSONResponse(
            status_code=400,
            content={
                "error": "Validation Error",
                "message": str(exc),
                "type": "validation_error",
            },
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error", error=str(exc), path=request.url.path)
        record_error("database_error", "api")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Database Error",
                "message": "A database error occurred",
                "type": "database_error",
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "HTTP Error",
                "message": exc.detail,
                "type": "http_error",
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            traceback=traceback.format_exc(),
        )
        record_error(type(exc).__name__, "api")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "message": "An unexpected error occurred",
                "type": "internal_error",
            },
        )
