"""
Exception handlers - consistent {error, message} bodies for client and backend failures.
Backend detail is logged, never returned to the caller.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from coursesearch.exceptions import InvalidSearchParameter, SearchBackendError

logger = logging.getLogger(__name__)

DATE_PARAMETERS = {"startDate"}
ISO_DATE_HINT = "Please use ISO-8601 format: yyyy-MM-ddTHH:mm:ss"


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


async def invalid_parameter_handler(request: Request, exc: InvalidSearchParameter) -> JSONResponse:
    logger.warning("Rejected %s: %s", request.url.path, exc)
    if exc.name in DATE_PARAMETERS:
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid date format", ISO_DATE_HINT)
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid parameter type",
        f"Parameter '{exc.name}' has invalid value: {exc.value}",
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = first.get("loc") or ()
    name = str(loc[-1]) if loc else "request"
    logger.warning("Rejected %s: %s", request.url.path, errors)
    if first.get("type") == "missing":
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Missing parameter",
            f"Required parameter '{name}' is not present",
        )
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid parameter type",
        f"Parameter '{name}' has invalid value: {first.get('input')}",
    )


async def backend_error_handler(request: Request, exc: SearchBackendError) -> JSONResponse:
    logger.error("Search backend failure on %s: %s", request.url.path, exc, exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        "The search service is temporarily unavailable",
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unexpected error occurred on %s", request.url.path, exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        "An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidSearchParameter, invalid_parameter_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SearchBackendError, backend_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
