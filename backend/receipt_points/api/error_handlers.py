"""
Custom exception handlers for FastAPI.
Every error response has the shape ``{"error": "<message>"}``.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from receipt_points.core.exceptions import MalformedRequest, ReceiptError
from receipt_points.core.observability import capture_exception

logger = logging.getLogger(__name__)


def receipt_error_handler(request: Request, exc: ReceiptError):
    logger.info(
        "[errors] %s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Unparseable JSON and wrongly typed fields are both reported as malformed.
    logger.info("[errors] %s %s -> malformed body (%d errors)", request.method, request.url.path, len(exc.errors()))
    return receipt_error_handler(request, MalformedRequest())


def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("[errors] unhandled error on %s %s", request.method, request.url.path)
    capture_exception(exc, getattr(request.app.state, "settings", None))
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(ReceiptError, receipt_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
