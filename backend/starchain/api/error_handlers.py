"""Error Handlers — every failure leaves the API as the StarChainError envelope.

Invariants:
    - Body is always {"error": {code, message, category, severity, timestamp, context}}
    - context always carries height, address, record_hash (null when unknown)
    - Request validation failures add details: [{location, field, message, type}]
    - Unhandled exceptions become INTERNAL_ERROR with no exception text in the body

Design Decisions:
    - Validation and catch-all failures are wrapped in a StarChainError first, so one
      renderer (_respond) serves all three handlers
    - Log level follows what the failure means for the registry: 5xx at ERROR,
      chain findings at WARNING, ordinary client errors at INFO
    - Log records carry the error's context fields so a rejected submission or a
      tampered block can be traced by address, height or hash
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from starchain.core.errors import (
    ChainValidationError, ErrorCategory, ErrorContext, ErrorSeverity, StarChainError,
)

logger = logging.getLogger(__name__)

_LOCATIONS = ("body", "path", "query", "header", "cookie")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarChainError, _handle_starchain_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected)


async def _handle_starchain_error(request: Request, exc: StarChainError) -> JSONResponse:
    return _respond(request, exc)


async def _handle_request_validation(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    error = StarChainError(
        "Invalid request data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
        ErrorSeverity.ERROR, ErrorContext(address=_submitted_address(exc.body)),
        status.HTTP_400_BAD_REQUEST,
    )
    return _respond(request, error, details=[_detail(e) for e in exc.errors()])


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc, extra={"path": request.url.path},
    )
    error = StarChainError(
        "An unexpected error occurred", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
        ErrorSeverity.CRITICAL, http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    return _respond(request, error, log=False)


def _respond(
    request: Request, error: StarChainError,
    details: list[dict] | None = None, log: bool = True,
) -> JSONResponse:
    if log:
        logger.log(
            _log_level(error),
            f"{request.method} {request.url.path} -> {error.http_status}: {error.message}",
            extra={
                "error_code": error.code,
                "path": request.url.path,
                "height": error.context.height,
                "address": error.context.address,
                "record_hash": error.context.record_hash,
            },
        )
    content = error.to_response()
    if details is not None:
        content["error"]["details"] = details
    return JSONResponse(status_code=error.http_status, content=content)


def _log_level(error: StarChainError) -> int:
    if error.http_status >= 500:
        return logging.ERROR
    if isinstance(error, ChainValidationError):
        return logging.WARNING
    return logging.INFO


def _detail(error: dict) -> dict:
    """One pydantic error as {location, field, message, type}."""
    loc = [str(part) for part in error["loc"]]
    location = loc.pop(0) if loc and loc[0] in _LOCATIONS else "body"
    return {
        "location": location,
        "field": ".".join(loc),
        "message": error["msg"],
        "type": error["type"],
    }


def _submitted_address(body: Any) -> str | None:
    """Wallet address from a rejected ownership body, when one was sent."""
    if isinstance(body, dict) and isinstance(body.get("address"), str):
        return body["address"]
    return None
