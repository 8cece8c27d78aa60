"""
Exception handlers for share API.

Maps domain errors to the ``{success: false, message}`` envelope. Upstream
error bodies never reach the client.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.config.logging import get_logger
from shared.exceptions import ShareNotFoundError, ValidationError

logger = get_logger(__name__)

NOT_FOUND_MESSAGE = "Gist not found"
GENERIC_ERROR_MESSAGE = "Something went wrong"


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build an error envelope."""
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


async def share_not_found_handler(request: Request, exc: ShareNotFoundError) -> JSONResponse:
    logger.info("share_not_found", path=request.url.path, **exc.details)
    return error_response(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("invalid_request", path=request.url.path, reason=exc.message, **exc.details)
    return error_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"Invalid {location}: {errors[0].get('msg')}" if location else message
    logger.info("invalid_request", path=request.url.path, reason=message)
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("share_request_failed", path=request.url.path, error=str(exc))
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the share API exception handlers on an application."""
    app.add_exception_handler(ShareNotFoundError, share_not_found_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
