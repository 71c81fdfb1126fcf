"""Error handling middleware and exception handlers."""

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from techtube.commons.telemetry.logger import get_logger
from techtube.domain.exceptions import (
    AuthorizationException,
    ConfigurationException,
    DomainException,
    PersistenceException,
    TransportException,
    UploadCancelledException,
    UploadStateException,
    ValidationException,
    VideoNotFoundException,
)

logger = get_logger(__name__)

HTTP_499_CLIENT_CLOSED_REQUEST = 499


class APIError(Exception):
    """Base API error with code and details."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize API error.

        Args:
            code: Error code for clients.
            message: Human-readable error message.
            status_code: HTTP status code.
            details: Additional error details.
        """
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


def _build_error_response(
    request: Request,
    code: str,
    message: str,
    status_code: int,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build standardized error response.

    Args:
        request: HTTP request.
        code: Error code.
        message: Error message.
        status_code: HTTP status code.
        details: Additional details.

    Returns:
        JSON error response.
    """
    request_id = getattr(request.state, "request_id", "unknown")

    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
                "request_id": request_id,
            }
        },
    )


def _handle_exception(  # noqa: PLR0911
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle exception and return appropriate error response.

    Args:
        request: HTTP request.
        exc: Exception to handle.

    Returns:
        JSON error response.
    """
    if isinstance(exc, APIError):
        logger.warning(
            f"API error: {exc.code}",
            extra={
                "error_code": exc.code,
                "error_message": exc.message,
                "details": exc.details,
            },
        )
        return _build_error_response(
            request=request,
            code=exc.code,
            message=exc.message,
            status_code=exc.status_code,
            details=exc.details,
        )

    if isinstance(exc, ConfigurationException):
        # Names of missing settings only, never their values
        logger.error(f"Configuration error: {exc}")
        return _build_error_response(
            request=request,
            code="CONFIGURATION_ERROR",
            message=str(exc),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"component": exc.component, "missing": exc.missing},
        )

    if isinstance(exc, ValidationException):
        logger.warning(f"Validation error: {exc}")
        return _build_error_response(
            request=request,
            code="VALIDATION_ERROR",
            message=str(exc),
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"field": exc.field},
        )

    if isinstance(exc, AuthorizationException):
        logger.info(f"Unauthorized: {exc}")
        return _build_error_response(
            request=request,
            code="UNAUTHORIZED",
            message=str(exc),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if isinstance(exc, TransportException):
        logger.error(f"Upload transport error: {exc}")
        return _build_error_response(
            request=request,
            code="UPLOAD_TRANSPORT_ERROR",
            message=str(exc),
            status_code=status.HTTP_502_BAD_GATEWAY,
            details={
                "status_code": exc.status_code,
                "chunk_index": exc.chunk_index,
            },
        )

    if isinstance(exc, UploadCancelledException):
        logger.info(f"Upload cancelled: {exc}")
        return _build_error_response(
            request=request,
            code="UPLOAD_CANCELLED",
            message=str(exc),
            status_code=HTTP_499_CLIENT_CLOSED_REQUEST,
            details={"upload_id": exc.upload_id, "chunk_index": exc.chunk_index},
        )

    if isinstance(exc, UploadStateException):
        logger.warning(f"Invalid upload state: {exc}")
        return _build_error_response(
            request=request,
            code="UPLOAD_STATE_CONFLICT",
            message=str(exc),
            status_code=status.HTTP_409_CONFLICT,
            details={"upload_id": exc.upload_id, "state": exc.state},
        )

    if isinstance(exc, VideoNotFoundException):
        logger.warning(f"Video not found: {exc}")
        return _build_error_response(
            request=request,
            code="VIDEO_NOT_FOUND",
            message=str(exc),
            status_code=status.HTTP_404_NOT_FOUND,
            details={"video_id": exc.video_id},
        )

    if isinstance(exc, PersistenceException):
        logger.error(f"Persistence error during {exc.operation}: {exc.reason}")
        return _build_error_response(
            request=request,
            code="PERSISTENCE_ERROR",
            message="Failed to store or read the video record",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"operation": exc.operation},
        )

    if isinstance(exc, DomainException):
        logger.warning(f"Domain error: {exc}")
        return _build_error_response(
            request=request,
            code="DOMAIN_ERROR",
            message=str(exc),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    # Catch-all for unexpected errors
    logger.exception(f"Unexpected error: {exc}")
    return _build_error_response(
        request=request,
        code="INTERNAL_ERROR",
        message="An unexpected error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def error_handler_middleware(
    request: Request,
    call_next: RequestResponseEndpoint,
) -> Response:
    """Middleware to catch and format all exceptions.

    Args:
        request: HTTP request.
        call_next: Next handler in chain.

    Returns:
        HTTP response.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return _handle_exception(request, exc)
