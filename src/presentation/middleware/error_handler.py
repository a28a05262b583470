"""Exception handlers mapping domain errors to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from src.domain.exceptions import (
    AccountInUseException,
    AccountNotFoundException,
    ConcurrentModificationException,
    DomainException,
    EntryNotFoundException,
    InsufficientStockException,
    InvalidTransitionException,
    ResourceNotFoundException,
    SettlementConflictException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)

NOT_FOUND = (
    AccountNotFoundException,
    EntryNotFoundException,
    ResourceNotFoundException,
)

CONFLICT = (
    InvalidTransitionException,
    SettlementConflictException,
    ConcurrentModificationException,
    AccountInUseException,
    InsufficientStockException,
)


def _error_response(status_code: int, exc: DomainException) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": exc.message,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Not-found errors map to 404, state conflicts to 409, any other domain
    error to 400 and everything else to 500.
    """

    async def not_found_handler(request: Request, exc: DomainException) -> JSONResponse:
        """Handle missing accounts, entries and catalog resources."""
        return _error_response(404, exc)

    async def conflict_handler(request: Request, exc: DomainException) -> JSONResponse:
        """Handle transitions the current state does not allow."""
        logger.warning(
            "domain_conflict",
            path=request.url.path,
            code=exc.code,
            message=exc.message,
        )
        return _error_response(409, exc)

    for exc_class in NOT_FOUND:
        app.add_exception_handler(exc_class, not_found_handler)
    for exc_class in CONFLICT:
        app.add_exception_handler(exc_class, conflict_handler)

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle invalid input and any other domain exception."""
        logger.warning(
            "domain_exception",
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
                "request_id": get_request_id(),
            },
        )
