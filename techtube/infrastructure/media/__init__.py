"""Media provider upload clients."""

from techtube.infrastructure.media.base import SignatureProviderBase
from techtube.infrastructure.media.chunked_uploader import (
    ChunkedUploader,
    ProgressCallback,
    UploadSource,
)
from techtube.infrastructure.media.signature_providers import (
    LocalSignatureProvider,
    RemoteSignatureProvider,
)

__all__ = [
    # Base classes
    "SignatureProviderBase",
    # Implementations
    "LocalSignatureProvider",
    "RemoteSignatureProvider",
    # Uploader
    "ChunkedUploader",
    "ProgressCallback",
    "UploadSource",
]
