"""Delivery URL derivation for provider-hosted media assets."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_THUMBNAIL_EXTENSION = "jpg"


class MediaUrlBuilder(BaseModel):
    """Builds CDN URLs from a provider asset ID.

    Examples:
        >>> urls = MediaUrlBuilder(cdn_base_url="https://res.cloudinary.com", cloud_name="demo")
        >>> urls.video_url("abc123")
        'https://res.cloudinary.com/demo/video/upload/abc123'
        >>> urls.thumbnail_url("abc123")
        'https://res.cloudinary.com/demo/video/upload/abc123.jpg'
    """

    model_config = ConfigDict(frozen=True)

    cdn_base_url: str = Field(default="https://res.cloudinary.com")
    cloud_name: str = Field(min_length=1)

    @property
    def video_prefix(self) -> str:
        """Common prefix of every video delivery URL."""
        return f"{self.cdn_base_url.rstrip('/')}/{self.cloud_name}/video/upload"

    def video_url(
        self,
        asset_id: str,
        *,
        quality: str = "auto",
        format: str = "auto",
        transformation: str = "",
    ) -> str:
        """Playback URL, optionally with quality/format/raw transformation segments."""
        segments = [self.video_prefix]
        if quality != "auto":
            segments.append(f"q_{quality}")
        if format != "auto":
            segments.append(f"f_{format}")
        if transformation:
            segments.append(transformation)
        segments.append(asset_id)
        return "/".join(segments)

    def thumbnail_url(
        self,
        asset_id: str,
        *,
        transformation: str = "",
        extension: str = DEFAULT_THUMBNAIL_EXTENSION,
    ) -> str:
        """Still-frame URL; e.g. ``transformation="w_640,h_360,c_fill,g_auto,q_auto"``."""
        segments = [self.video_prefix]
        if transformation:
            segments.append(transformation)
        segments.append(f"{asset_id}.{extension}")
        return "/".join(segments)
