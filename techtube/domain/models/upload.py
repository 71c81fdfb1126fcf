"""Domain models for signed, chunked media uploads."""

from __future__ import annotations

import random
import string
import time
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from techtube.domain.value_objects.upload_chunking import ChunkRange

if TYPE_CHECKING:
    from techtube.domain.value_objects.media_urls import MediaUrlBuilder

_BASE36 = string.digits + string.ascii_lowercase


def generate_upload_id() -> str:
    """Create a unique upload ID: ``uqid-<epoch ms>-<7 base36 chars>``."""
    suffix = "".join(random.choices(_BASE36, k=7))
    return f"uqid-{int(time.time() * 1000)}-{suffix}"


class UploadState(str, Enum):
    """Lifecycle of one chunked upload attempt."""

    IDLE = "idle"
    REQUESTING_SIGNATURE = "requesting_signature"
    UPLOADING = "uploading"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition can happen."""
        return self in {
            UploadState.COMPLETED,
            UploadState.CANCELLED,
            UploadState.FAILED,
        }


class UploadSignature(BaseModel):
    """Server-issued authorization for a direct-to-provider upload.

    ``signed_params`` is exactly what was signed; the client must echo every
    entry, unchanged, on each chunk request.
    """

    model_config = ConfigDict(frozen=True)

    signature: str = Field(description="Hex SHA-1 digest of the signed params")
    api_key: str = Field(description="Public API key of the media account")
    timestamp: int = Field(description="Signed timestamp (seconds since epoch)")
    cloud_name: str = Field(description="Public cloud/tenant identifier")
    signed_params: dict[str, str] = Field(
        description="Exact parameter map that was signed",
    )


class UploadSession(BaseModel):
    """Everything one upload attempt needs, fixed once the signature arrives.

    A new attempt gets a new session; nothing here is mutated mid-upload.
    """

    model_config = ConfigDict(frozen=True)

    upload_id: str = Field(default_factory=generate_upload_id)
    upload_url: str = Field(description="Provider endpoint receiving the chunks")
    resource_type: str = Field(default="video")
    file_size: int = Field(gt=0)
    chunks: tuple[ChunkRange, ...] = Field(min_length=1)
    signature: UploadSignature

    @property
    def total_chunks(self) -> int:
        """Number of chunk requests this session will send."""
        return len(self.chunks)

    def form_fields(self) -> dict[str, str]:
        """Non-file multipart fields sent with every chunk."""
        fields = {
            "api_key": self.signature.api_key,
            "timestamp": str(self.signature.timestamp),
            "signature": self.signature.signature,
            "resource_type": self.resource_type,
        }
        for key, value in self.signature.signed_params.items():
            if key != "timestamp":
                fields[key] = value
        return fields

    def headers_for(self, chunk: ChunkRange) -> dict[str, str]:
        """Headers tying a chunk to this upload and to its byte range."""
        return {
            "X-Unique-Upload-Id": self.upload_id,
            "Content-Range": chunk.content_range,
        }


class UploadedAsset(BaseModel):
    """Terminal payload returned by the provider after the final chunk."""

    public_id: str = Field(min_length=1, description="Permanent asset identifier")
    duration: float | None = None
    width: int | None = None
    height: int | None = None
    format: str | None = None
    size_bytes: int | None = None
    secure_url: str | None = None
    thumbnail_url: str | None = None

    @classmethod
    def from_provider_response(
        cls,
        payload: dict[str, Any],
        urls: MediaUrlBuilder | None = None,
    ) -> UploadedAsset:
        """Pick the fields the catalog cares about out of a provider response.

        Args:
            payload: Decoded JSON body of the final chunk response.
            urls: When given, derives a thumbnail URL if the provider sent none.
        """
        public_id = payload["public_id"]
        thumbnail = payload.get("thumbnail_url")
        if not thumbnail and urls is not None:
            thumbnail = urls.thumbnail_url(public_id)
        return cls(
            public_id=public_id,
            duration=payload.get("duration"),
            width=payload.get("width"),
            height=payload.get("height"),
            format=payload.get("format"),
            size_bytes=payload.get("bytes"),
            secure_url=payload.get("secure_url"),
            thumbnail_url=thumbnail,
        )


class UploadOutcome(BaseModel):
    """How an upload attempt ended when it did not fail."""

    upload_id: str
    state: UploadState
    chunks_sent: int = Field(ge=0)
    total_chunks: int = Field(ge=0)
    asset: UploadedAsset | None = None

    @property
    def is_completed(self) -> bool:
        """Check if the provider confirmed the whole file."""
        return self.state == UploadState.COMPLETED

    @property
    def is_cancelled(self) -> bool:
        """Check if the caller cancelled the upload."""
        return self.state == UploadState.CANCELLED
