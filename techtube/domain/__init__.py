"""Domain layer - business models and logic."""

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
from techtube.domain.models import (
    UploadedAsset,
    UploadOutcome,
    UploadSession,
    UploadSignature,
    UploadState,
    Video,
    VideoStatus,
)
from techtube.domain.value_objects import (
    ChunkRange,
    MediaUrlBuilder,
    UploadChunkingConfig,
)

__all__ = [
    # Exceptions
    "DomainException",
    "ConfigurationException",
    "ValidationException",
    "AuthorizationException",
    "TransportException",
    "UploadCancelledException",
    "UploadStateException",
    "VideoNotFoundException",
    "PersistenceException",
    # Video
    "Video",
    "VideoStatus",
    # Upload
    "UploadSignature",
    "UploadSession",
    "UploadState",
    "UploadedAsset",
    "UploadOutcome",
    # Value Objects
    "ChunkRange",
    "MediaUrlBuilder",
    "UploadChunkingConfig",
]
