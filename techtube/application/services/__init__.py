"""Application services for upload signing and the video catalog."""

from techtube.application.services.signing import (
    UploadSignatureService,
    build_string_to_sign,
    compute_signature,
)
from techtube.application.services.video_catalog import VideoCatalogService

__all__ = [
    "UploadSignatureService",
    "VideoCatalogService",
    "build_string_to_sign",
    "compute_signature",
]
