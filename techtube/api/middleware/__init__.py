"""API middleware components."""

from techtube.api.middleware.error_handler import APIError, error_handler_middleware
from techtube.api.middleware.logging import LoggingMiddleware

__all__ = [
    "APIError",
    "LoggingMiddleware",
    "error_handler_middleware",
]
