"""Application layer - use cases and orchestration.

This layer contains:
- Services: Upload signing and catalog use cases
- DTOs: Data transfer objects for API boundaries
"""

from techtube.application.dtos import (
    CreateVideoRequest,
    GenerateSignatureRequest,
    UploadSignatureResponse,
    VideoListResponse,
    VideoResponse,
)
from techtube.application.services import (
    UploadSignatureService,
    VideoCatalogService,
)

__all__ = [
    # DTOs
    "GenerateSignatureRequest",
    "UploadSignatureResponse",
    "CreateVideoRequest",
    "VideoResponse",
    "VideoListResponse",
    # Services
    "UploadSignatureService",
    "VideoCatalogService",
]
