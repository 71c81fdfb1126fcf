"""Data Transfer Objects for application layer."""

from techtube.application.dtos.upload import (
    GenerateSignatureRequest,
    UploadSignatureResponse,
)
from techtube.application.dtos.video import (
    CreateVideoRequest,
    VideoListResponse,
    VideoResponse,
)

__all__ = [
    # Upload DTOs
    "GenerateSignatureRequest",
    "UploadSignatureResponse",
    # Video DTOs
    "CreateVideoRequest",
    "VideoResponse",
    "VideoListResponse",
]
