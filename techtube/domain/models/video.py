"""Video catalog domain model."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field


class VideoStatus(str, Enum):
    """Visibility/lifecycle status of a catalog entry."""

    PROCESSING = "processing"
    PUBLISHED = "published"
    PRIVATE = "private"
    UNLISTED = "unlisted"


class Video(BaseModel):
    """A video in the catalog.

    A row exists only once the media provider has confirmed the upload and
    returned a permanent asset identifier.
    """

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="Internal UUID for this video record",
    )
    title: str = Field(description="Video title")
    description: str | None = Field(default=None, description="Video description")
    video_url: str = Field(description="Playback URL on the media CDN")
    thumbnail_url: str | None = Field(default=None, description="Thumbnail URL")
    asset_id: str = Field(description="Media provider public ID")
    duration: float | None = Field(
        default=None,
        ge=0,
        description="Duration in seconds, when known",
    )
    view_count: int = Field(default=0, ge=0, description="Number of views")
    status: VideoStatus = Field(
        default=VideoStatus.PROCESSING,
        description="Current visibility status",
    )
    user_id: str = Field(description="ID of the owning user")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When this record was created",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Last update timestamp",
    )

    @property
    def is_published(self) -> bool:
        """Check if the video is publicly visible."""
        return self.status == VideoStatus.PUBLISHED

    @property
    def duration_formatted(self) -> str | None:
        """Get duration as H:MM:SS or M:SS."""
        if self.duration is None:
            return None
        hours, remainder = divmod(int(self.duration), 3600)
        minutes, seconds = divmod(remainder, 60)
        if hours > 0:
            return f"{hours:d}:{minutes:02d}:{seconds:02d}"
        return f"{minutes:d}:{seconds:02d}"

    def to_document(self) -> dict[str, Any]:
        """Dump for the document store (native datetimes, plain status)."""
        document = self.model_dump()
        document["status"] = self.status.value
        return document
