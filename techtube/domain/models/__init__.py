"""Domain models."""

from techtube.domain.models.upload import (
    UploadedAsset,
    UploadOutcome,
    UploadSession,
    UploadSignature,
    UploadState,
    generate_upload_id,
)
from techtube.domain.models.video import Video, VideoStatus

__all__ = [
    # Video
    "Video",
    "VideoStatus",
    # Upload
    "UploadSignature",
    "UploadSession",
    "UploadState",
    "UploadedAsset",
    "UploadOutcome",
    "generate_upload_id",
]
