"""Domain value objects."""

from techtube.domain.value_objects.media_urls import MediaUrlBuilder
from techtube.domain.value_objects.upload_chunking import ChunkRange, UploadChunkingConfig

__all__ = [
    "ChunkRange",
    "MediaUrlBuilder",
    "UploadChunkingConfig",
]
