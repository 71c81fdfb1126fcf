"""DTOs for catalog operations."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from techtube.domain.models.video import Video, VideoStatus

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class CreateVideoRequest(BaseModel):
    """Request to add an uploaded asset to the catalog.

    The owner is never part of the request; it comes from the session.
    """

    title: str = Field(
        min_length=TITLE_MIN_LENGTH,
        max_length=TITLE_MAX_LENGTH,
        description="Video title",
    )
    description: str | None = Field(
        default=None,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Optional description",
    )
    asset_id: str = Field(min_length=1, description="Provider public ID of the upload")
    thumbnail_url: str | None = Field(
        default=None,
        description="Explicit thumbnail; derived from asset_id when omitted",
    )
    duration: float | None = Field(
        default=None,
        gt=0,
        description="Duration in seconds reported by the provider",
    )

    @field_validator("asset_id")
    @classmethod
    def strip_asset_id(cls, v: str) -> str:
        """Reject whitespace-only asset IDs."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("asset_id must not be blank")
        return stripped

    @field_validator("thumbnail_url", "description")
    @classmethod
    def empty_as_none(cls, v: str | None) -> str | None:
        """Treat empty strings from forms as absent."""
        return v or None


class VideoResponse(BaseModel):
    """Catalog entry as returned to clients."""

    id: str = Field(description="Internal video UUID")
    title: str = Field(description="Video title")
    description: str | None = Field(default=None, description="Video description")
    video_url: str = Field(description="Playback URL")
    thumbnail_url: str | None = Field(default=None, description="Thumbnail URL")
    asset_id: str = Field(description="Provider public ID")
    duration: float | None = Field(default=None, description="Duration in seconds")
    duration_formatted: str | None = Field(default=None, description="H:MM:SS")
    view_count: int = Field(description="Number of views")
    status: VideoStatus = Field(description="Visibility status")
    user_id: str = Field(description="Owner ID")
    created_at: datetime = Field(description="Creation time")
    updated_at: datetime = Field(description="Last update time")

    @classmethod
    def from_video(cls, video: Video) -> "VideoResponse":
        """Build the response from a domain video."""
        return cls(
            **video.model_dump(),
            duration_formatted=video.duration_formatted,
        )


class VideoListResponse(BaseModel):
    """A page of catalog entries."""

    videos: list[VideoResponse] = Field(description="Videos in display order")
    count: int = Field(ge=0, description="Number of videos returned")
