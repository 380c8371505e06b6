"""Exception handlers rendering every error as ``{error, message}``."""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build the standard error body for a status code."""
    return JSONResponse(
        status_code=status_code,
        content={"error": HTTPStatus(status_code).phrase, "message": message},
        headers=headers,
    )


def validation_message(exc: RequestValidationError) -> str:
    """Human readable message for the first validation error."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    error = errors[0]
    cause = error.get("ctx", {}).get("error")
    if isinstance(cause, ValueError):
        return str(cause)

    location = [str(part) for part in error.get("loc", ()) if part != "body"]
    if error.get("type") == "json_invalid":
        return "Invalid JSON body"
    if not location:
        return "Invalid request body"
    return f"Missing or invalid {location[-1]}"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors raised by routes and dependencies."""
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return error_response(exc.status_code, "Endpoint not found")
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report request validation failures as 400 Bad Request."""
    message = validation_message(exc)
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors and hide their details from the client."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on an app."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
