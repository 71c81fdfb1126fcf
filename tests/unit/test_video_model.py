"""Unit tests for the Video domain model."""

from datetime import UTC, datetime

import pytest

from techtube.domain.models.video import Video, VideoStatus


def _video(**overrides) -> Video:
    fields = {
        "title": "Intro to asyncio",
        "video_url": "https://res.cloudinary.com/demo/video/upload/abc123",
        "asset_id": "abc123",
        "user_id": "user-1",
    }
    fields.update(overrides)
    return Video(**fields)


class TestVideoStatus:
    """Tests for VideoStatus enum."""

    def test_values(self):
        assert VideoStatus.PROCESSING.value == "processing"
        assert VideoStatus.PUBLISHED.value == "published"
        assert VideoStatus.PRIVATE.value == "private"
        assert VideoStatus.UNLISTED.value == "unlisted"


class TestVideo:
    """Tests for Video model."""

    def test_defaults(self):
        video = _video()
        assert len(video.id) == 36
        assert video.status == VideoStatus.PROCESSING
        assert video.view_count == 0
        assert video.description is None
        assert video.created_at.tzinfo is not None

    def test_unique_ids(self):
        assert _video().id != _video().id

    def test_is_published(self):
        assert _video(status=VideoStatus.PUBLISHED).is_published is True
        assert _video(status=VideoStatus.UNLISTED).is_published is False

    def test_negative_duration_rejected(self):
        with pytest.raises(ValueError):
            _video(duration=-1)

    def test_negative_view_count_rejected(self):
        with pytest.raises(ValueError):
            _video(view_count=-5)

    @pytest.mark.parametrize(
        ("duration", "expected"),
        [
            (None, None),
            (0, "0:00"),
            (59.9, "0:59"),
            (61, "1:01"),
            (3600, "1:00:00"),
            (3725, "1:02:05"),
        ],
    )
    def test_duration_formatted(self, duration, expected):
        assert _video(duration=duration).duration_formatted == expected

    def test_to_document_uses_plain_status(self):
        created = datetime(2024, 1, 2, tzinfo=UTC)
        video = _video(status=VideoStatus.PUBLISHED, created_at=created)

        document = video.to_document()

        assert document["status"] == "published"
        assert document["created_at"] == created
        assert document["id"] == video.id
        assert document["asset_id"] == "abc123"

    def test_document_round_trip(self):
        video = _video(status=VideoStatus.PUBLISHED, duration=42.5)
        restored = Video.model_validate(video.to_document())
        assert restored == video
