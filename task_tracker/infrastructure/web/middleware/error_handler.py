"""
Global error handling for the FastAPI application.
Domain exceptions are mapped to HTTP responses by an exception handler;
anything else is caught by the middleware and returned as a 500.
"""

import logging
import traceback
from typing import Any, Dict
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from fastapi import status

from task_tracker.config import settings
from task_tracker.domain.models.base import (
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    ForbiddenError,
)

logger = logging.getLogger(__name__)

# Starlette renamed its 422 constant between releases
HTTP_422_UNPROCESSABLE = 422


ERROR_TITLES = {
    status.HTTP_400_BAD_REQUEST: "Bad Request",
    status.HTTP_403_FORBIDDEN: "Forbidden",
    status.HTTP_404_NOT_FOUND: "Not Found",
    HTTP_422_UNPROCESSABLE: "Unprocessable Entity",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "Internal Server Error",
}


def status_code_for(exc: DomainException) -> int:
    """HTTP status for a domain exception."""
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, BusinessRuleViolation):
        return HTTP_422_UNPROCESSABLE
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ForbiddenError):
        return status.HTTP_403_FORBIDDEN
    return status.HTTP_400_BAD_REQUEST


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Translate a domain exception into a JSON error response."""
    status_code = status_code_for(exc)
    logger.info(
        f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
    )

    content: Dict[str, Any] = {
        "error": ERROR_TITLES.get(status_code, "Error"),
        "message": exc.message,
        "code": exc.code,
        "status_code": status_code,
    }
    field = getattr(exc, "field", None)
    if field:
        content["details"] = {"field": field}

    return JSONResponse(status_code=status_code, content=content)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    async def dispatch(self, request: Request, call_next):
        """
        Process the request and handle any exceptions.
        """
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            return await self.handle_exception(request, exc)

    async def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """
        Log the exception with its traceback and return a 500 response.
        """
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        error_response: Dict[str, Any] = {
            "error": ERROR_TITLES[status.HTTP_500_INTERNAL_SERVER_ERROR],
            "message": "An unexpected error occurred",
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
        }

        # In development, add more debug information
        if settings.debug:
            error_response["debug"] = {
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exc().split("\n")
            }

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response
        )
