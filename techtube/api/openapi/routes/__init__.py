"""API route handlers."""

from techtube.api.openapi.routes import health, uploads, videos

__all__ = [
    "health",
    "uploads",
    "videos",
]
