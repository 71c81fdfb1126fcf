"""Unit tests for VideoCatalogService."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from techtube.application.dtos.video import CreateVideoRequest
from techtube.application.services.video_catalog import VideoCatalogService
from techtube.domain.exceptions import (
    ConfigurationException,
    PersistenceException,
    VideoNotFoundException,
)
from techtube.domain.models.video import Video, VideoStatus
from techtube.domain.value_objects.media_urls import MediaUrlBuilder

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_document_db():
    """Create mock document DB."""
    db = MagicMock()
    db.insert = AsyncMock(side_effect=lambda _collection, doc: doc["id"])
    db.find_by_id = AsyncMock(return_value=None)
    db.find = AsyncMock(return_value=[])
    return db


@pytest.fixture
def url_builder():
    return MediaUrlBuilder(cdn_base_url="https://res.cloudinary.com", cloud_name="demo")


@pytest.fixture
def service(mock_document_db, url_builder):
    return VideoCatalogService(
        document_db=mock_document_db,
        url_builder=lambda: url_builder,
        collection="videos",
    )


def _stored_video(**overrides) -> dict:
    video = Video(
        title="Stored",
        video_url="https://res.cloudinary.com/demo/video/upload/x",
        asset_id="x",
        user_id="user-1",
        status=VideoStatus.PUBLISHED,
        **overrides,
    )
    return video.to_document()


# =============================================================================
# create_video
# =============================================================================


class TestCreateVideo:
    """Tests for VideoCatalogService.create_video."""

    async def test_derives_urls_from_asset_id(self, service):
        request = CreateVideoRequest(title="My first upload", asset_id="abc123")

        video = await service.create_video(request, user_id="user-1")

        assert video.video_url.endswith("/abc123")
        assert video.thumbnail_url is not None
        assert video.thumbnail_url.endswith("/abc123.jpg")
        assert video.video_url == "https://res.cloudinary.com/demo/video/upload/abc123"

    async def test_is_published_with_zero_views(self, service):
        video = await service.create_video(
            CreateVideoRequest(title="My first upload", asset_id="abc123"),
            user_id="user-1",
        )

        assert video.status == VideoStatus.PUBLISHED
        assert video.view_count == 0
        assert video.user_id == "user-1"
        assert video.created_at.tzinfo == UTC

    async def test_explicit_thumbnail_is_kept(self, service):
        video = await service.create_video(
            CreateVideoRequest(
                title="My first upload",
                asset_id="abc123",
                thumbnail_url="https://thumbs.test/custom.jpg",
            ),
            user_id="user-1",
        )
        assert video.thumbnail_url == "https://thumbs.test/custom.jpg"

    async def test_empty_thumbnail_treated_as_absent(self, service):
        video = await service.create_video(
            CreateVideoRequest(title="Title", asset_id="abc123", thumbnail_url=""),
            user_id="user-1",
        )
        assert video.thumbnail_url is not None
        assert video.thumbnail_url.endswith("/abc123.jpg")

    async def test_persists_document(self, service, mock_document_db):
        video = await service.create_video(
            CreateVideoRequest(
                title="Title",
                description="About things",
                asset_id="abc123",
                duration=12.5,
            ),
            user_id="user-1",
        )

        mock_document_db.insert.assert_awaited_once()
        collection, document = mock_document_db.insert.call_args.args
        assert collection == "videos"
        assert document["id"] == video.id
        assert document["status"] == "published"
        assert document["asset_id"] == "abc123"
        assert document["duration"] == 12.5
        assert document["description"] == "About things"

    async def test_new_id_per_video(self, service):
        request = CreateVideoRequest(title="Title", asset_id="abc123")
        first = await service.create_video(request, user_id="user-1")
        second = await service.create_video(request, user_id="user-1")
        assert first.id != second.id

    async def test_store_failure_wrapped(self, service, mock_document_db):
        mock_document_db.insert.side_effect = ConnectionError("mongo down")

        with pytest.raises(PersistenceException) as exc_info:
            await service.create_video(
                CreateVideoRequest(title="Title", asset_id="abc123"),
                user_id="user-1",
            )

        assert exc_info.value.operation == "create_video"
        assert "mongo down" in exc_info.value.reason


class TestCreateVideoRequestValidation:
    """Tests for CreateVideoRequest bounds."""

    @pytest.mark.parametrize("title", ["ab", "x" * 101])
    def test_title_bounds(self, title):
        with pytest.raises(ValidationError):
            CreateVideoRequest(title=title, asset_id="abc123")

    def test_title_edges_accepted(self):
        CreateVideoRequest(title="abc", asset_id="abc123")
        CreateVideoRequest(title="x" * 100, asset_id="abc123")

    def test_description_too_long(self):
        with pytest.raises(ValidationError):
            CreateVideoRequest(title="Title", description="d" * 501, asset_id="a")

    @pytest.mark.parametrize("asset_id", ["", "   "])
    def test_blank_asset_id(self, asset_id):
        with pytest.raises(ValidationError):
            CreateVideoRequest(title="Title", asset_id=asset_id)

    @pytest.mark.parametrize("duration", [0, -1.5])
    def test_non_positive_duration(self, duration):
        with pytest.raises(ValidationError):
            CreateVideoRequest(title="Title", asset_id="a", duration=duration)


# =============================================================================
# Read side
# =============================================================================


class TestGetVideo:
    """Tests for VideoCatalogService.get_video."""

    async def test_found(self, service, mock_document_db):
        document = _stored_video()
        mock_document_db.find_by_id.return_value = document

        video = await service.get_video(document["id"])

        assert video.id == document["id"]
        assert video.status == VideoStatus.PUBLISHED
        mock_document_db.find_by_id.assert_awaited_once_with("videos", document["id"])

    async def test_not_found(self, service):
        with pytest.raises(VideoNotFoundException) as exc_info:
            await service.get_video("missing")
        assert exc_info.value.video_id == "missing"

    async def test_read_failure_wrapped(self, service, mock_document_db):
        mock_document_db.find_by_id.side_effect = TimeoutError("slow")
        with pytest.raises(PersistenceException):
            await service.get_video("any")


class TestListVideos:
    """Tests for recent and popular listings."""

    async def test_recent_sorted_by_creation(self, service, mock_document_db):
        mock_document_db.find.return_value = [
            _stored_video(created_at=datetime(2024, 2, 1, tzinfo=UTC)),
            _stored_video(created_at=datetime(2024, 1, 1, tzinfo=UTC)),
        ]

        videos = await service.list_recent_videos()

        assert len(videos) == 2
        mock_document_db.find.assert_awaited_once_with(
            "videos", {}, limit=20, sort=[("created_at", -1)]
        )

    async def test_popular_sorted_by_views(self, service, mock_document_db):
        mock_document_db.find.return_value = [_stored_video(view_count=10)]

        videos = await service.list_popular_videos(limit=5)

        assert videos[0].view_count == 10
        mock_document_db.find.assert_awaited_once_with(
            "videos", {}, limit=5, sort=[("view_count", -1)]
        )

    async def test_list_failure_wrapped(self, service, mock_document_db):
        mock_document_db.find.side_effect = ConnectionError("down")
        with pytest.raises(PersistenceException) as exc_info:
            await service.list_popular_videos()
        assert exc_info.value.operation == "list_popular_videos"


class TestMissingMediaConfiguration:
    """Tests for a catalog whose cloud name is not configured."""

    @pytest.fixture
    def unconfigured_service(self, mock_document_db):
        def url_builder() -> MediaUrlBuilder:
            raise ConfigurationException("Media storage", ["cloud_name"])

        return VideoCatalogService(
            document_db=mock_document_db,
            url_builder=url_builder,
        )

    async def test_reads_do_not_need_urls(self, unconfigured_service, mock_document_db):
        document = _stored_video()
        mock_document_db.find.return_value = [document]
        mock_document_db.find_by_id.return_value = document

        assert len(await unconfigured_service.list_recent_videos()) == 1
        assert len(await unconfigured_service.list_popular_videos()) == 1
        assert (await unconfigured_service.get_video(document["id"])).id == document["id"]

    async def test_create_fails_before_writing(
        self, unconfigured_service, mock_document_db
    ):
        with pytest.raises(ConfigurationException):
            await unconfigured_service.create_video(
                CreateVideoRequest(title="Title", asset_id="abc123"),
                user_id="user-1",
            )

        mock_document_db.insert.assert_not_called()
