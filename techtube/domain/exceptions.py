"""Domain exceptions for the TechTube upload pipeline."""

from __future__ import annotations


class DomainException(Exception):
    """Base exception for domain errors."""


class ConfigurationException(DomainException):
    """Raised when a required credential or identifier is not configured."""

    def __init__(self, component: str, missing: list[str]) -> None:
        self.component = component
        self.missing = missing
        super().__init__(
            f"{component} configuration is incomplete: missing {', '.join(missing)}"
        )


class ValidationException(DomainException):
    """Raised when input has the wrong shape or is out of bounds."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class AuthorizationException(DomainException):
    """Raised when an authenticated endpoint is called without a session."""

    def __init__(self, reason: str = "Authentication required") -> None:
        self.reason = reason
        super().__init__(reason)


class TransportException(DomainException):
    """Raised when a chunk request fails or the provider rejects it."""

    def __init__(
        self,
        reason: str,
        *,
        status_code: int | None = None,
        chunk_index: int | None = None,
        response_text: str | None = None,
    ) -> None:
        self.reason = reason
        self.status_code = status_code
        self.chunk_index = chunk_index
        self.response_text = response_text
        super().__init__(f"Chunk upload failed: {reason}")


class UploadCancelledException(DomainException):
    """Raised inside the uploader when the caller cancelled the upload.

    The uploader turns this into a ``cancelled`` outcome; it is not a failure.
    """

    def __init__(self, upload_id: str, chunk_index: int) -> None:
        self.upload_id = upload_id
        self.chunk_index = chunk_index
        super().__init__(f"Upload {upload_id} cancelled at chunk {chunk_index}")


class UploadStateException(DomainException):
    """Raised when an uploader is used outside its lifecycle."""

    def __init__(self, upload_id: str, state: str) -> None:
        self.upload_id = upload_id
        self.state = state
        super().__init__(f"Upload {upload_id} cannot start from state '{state}'")


class VideoNotFoundException(DomainException):
    """Raised when a requested video is not found."""

    def __init__(self, video_id: str) -> None:
        self.video_id = video_id
        super().__init__(f"Video not found: {video_id}")


class PersistenceException(DomainException):
    """Raised when the catalog store fails to write or read a record."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Persistence failed during {operation}: {reason}")
