"""
Exception handlers for consistent error responses.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shortlink.errors import ShortlinkError, ValidationError

logger = logging.getLogger("shortlink.web")


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Render field errors as {"errors": {field: "joined, messages"}}."""
    logger.info(f"Validation failed in {request.url.path}: {exc.errors.to_dict()}")
    return JSONResponse({"errors": exc.errors.to_dict()}, status_code=exc.status_code)


async def shortlink_error_handler(request: Request, exc: ShortlinkError) -> JSONResponse:
    """Render any other service error with its status code."""
    logger.error(f"Service error in {request.url.path}: {exc.message}")
    return JSONResponse(
        {"error": exc.message, "details": exc.details},
        status_code=exc.status_code,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the shortlink exception handlers to an app."""
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ShortlinkError, shortlink_error_handler)
