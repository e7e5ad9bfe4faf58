"""
Web middleware and exception handlers.
"""

from .error_handler import ErrorHandlerMiddleware, domain_exception_handler, status_code_for

__all__ = ["ErrorHandlerMiddleware", "domain_exception_handler", "status_code_for"]
