"""Global exception handlers producing a consistent JSON error envelope.

Every failure is rendered as::

    {"success": false, "message": "...", "errors": [...]}

``errors`` is only present for request validation failures.
"""

from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException

from libs.common.logging import get_logger

logger = get_logger(__name__)


class DomainValidationError(ValueError):
    """A business rule rejected the input (rendered as 400)."""


def error_response(
    status_code: int, message: str, errors: Optional[list[Any]] = None
) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=body)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg"),
        }
        for err in exc.errors()
    ]
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", errors)


async def domain_validation_handler(
    request: Request, exc: DomainValidationError
) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True for duplicate-key errors on PostgreSQL (sqlstate) and SQLite (message)."""
    if getattr(exc.orig, "sqlstate", None) == UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(exc.orig)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    if is_unique_violation(exc):
        logger.warning("Uniqueness violation: %s", exc.orig)
        return error_response(status.HTTP_409_CONFLICT, "Resource already exists")
    logger.warning("Integrity violation: %s", exc.orig)
    return error_response(
        status.HTTP_400_BAD_REQUEST, "Request conflicts with related records"
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


def add_exception_handlers(app: FastAPI) -> None:
    """Register the envelope handlers on ``app``."""
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DomainValidationError, domain_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
