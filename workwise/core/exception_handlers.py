"""
Global exception handling and request correlation for the FastAPI app.

Unhandled exceptions are logged with an error id and request context and
answered with a generic 500 body clients can quote when reporting issues.
"""

import traceback
import uuid
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from workwise.core.logging_config import get_logger, request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Attach a request id to every request, expose it to logging through
    `request_id_var` and echo it in the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Log an unhandled exception with full context and return a 500.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())

    logger.error(
        f'Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}',
        exc_info=True,
        extra={
            'request_id': error_id,
            'method': request.method,
            'path': request.url.path,
            'query_params': dict(request.query_params),
            'client': request.client.host if request.client else 'unknown',
            'error_type': type(exc).__name__,
            'traceback': traceback.format_exc(),
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            'detail': 'Internal server error',
            'error_id': error_id,
            'error_type': type(exc).__name__,
        }
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
