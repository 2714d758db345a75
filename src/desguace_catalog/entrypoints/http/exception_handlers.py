"""FastAPI exception handlers for domain errors.

Translates domain errors to HTTP responses with the structured error format.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from desguace_catalog.domain.errors import DomainError

logger = logging.getLogger(__name__)

# Error code → HTTP status. Subclasses inherit their parent's code unless
# they override it, so every code used by the domain is listed.
STATUS_CODE_MAP: dict[str, int] = {
    "VALIDATION_ERROR": 422,  # HTTP_422_UNPROCESSABLE_CONTENT
    "BACKEND_REJECTED": 422,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "PART_LOCKED": status.HTTP_409_CONFLICT,
    "INVALID_BACKEND_RESPONSE": status.HTTP_502_BAD_GATEWAY,
    "BACKEND_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Handle all domain errors with automatic HTTP status code mapping.

    Maps domain errors to HTTP status codes:
    - VALIDATION_ERROR, BACKEND_REJECTED → 422 Unprocessable Entity
    - NOT_FOUND → 404 Not Found
    - CONFLICT, PART_LOCKED → 409 Conflict
    - INVALID_BACKEND_RESPONSE → 502 Bad Gateway
    - BACKEND_UNAVAILABLE → 503 Service Unavailable
    - INTERNAL_ERROR → 500 Internal Server Error
    - Other → 400 Bad Request
    """
    error_dict = exc.to_dict()
    status_code = STATUS_CODE_MAP.get(exc.error_code, status.HTTP_400_BAD_REQUEST)

    if status_code >= 500:
        logger.error(
            "Domain error occurred",
            extra={
                "error_code": exc.error_code,
                "error_message": exc.message,
                "context": exc.context,
                "path": request.url.path,
                "method": request.method,
            },
        )
    else:
        logger.info(
            "Client error",
            extra={
                "error_code": exc.error_code,
                "error_message": exc.message,
                "path": request.url.path,
                "method": request.method,
            },
        )

    response_content: dict[str, Any] = {
        "detail": error_dict.get("message", str(exc)),
        "code": error_dict.get("code", exc.error_code),
    }
    if "errors" in error_dict:
        response_content["errors"] = error_dict["errors"]

    return JSONResponse(status_code=status_code, content=response_content)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI/Pydantic validation errors.

    Examples:
        - page=0 (violates ge=1)
        - precio_min=abc (not a valid decimal)
        - Missing multipart file
    """
    errors = []

    for error in exc.errors():
        # Drop the 'body' / 'query' / 'path' prefixes from the location
        field_path = ".".join(
            str(loc) for loc in error["loc"] if loc not in ("body", "query", "path")
        )
        errors.append(
            {
                "field": field_path,
                "message": error["msg"],
                "code": error["type"],
            }
        )

    logger.info(
        "Request validation error",
        extra={
            "errors": errors,
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=422,  # HTTP_422_UNPROCESSABLE_CONTENT
        content={
            "detail": "Invalid request parameters",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        },
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    """Handle ValueError raised while building query DTOs or converting values.

    Pydantic errors raised inside a dependency arrive here instead of the
    request validation handler.
    """
    logger.info(
        "Value error",
        extra={
            "error_message": str(exc),
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=422,  # HTTP_422_UNPROCESSABLE_CONTENT
        content={
            "detail": str(exc),
            "code": "INVALID_VALUE",
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors, logged with full traceback."""
    logger.error(
        "Unexpected error occurred",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "error_message": str(exc),
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(ValueError, handle_value_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    logger.info("Exception handlers registered successfully")
