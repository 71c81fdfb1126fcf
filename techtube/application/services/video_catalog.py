"""Video catalog service: records confirmed uploads and serves them back."""

from collections.abc import Callable
from typing import Any

from techtube.application.dtos.video import CreateVideoRequest
from techtube.commons.infrastructure.documentdb.base import DocumentDBBase
from techtube.commons.telemetry import get_logger, timed
from techtube.domain.exceptions import PersistenceException, VideoNotFoundException
from techtube.domain.models.video import Video, VideoStatus
from techtube.domain.value_objects.media_urls import MediaUrlBuilder

DEFAULT_LIST_LIMIT = 20


class VideoCatalogService:
    """Creates and reads catalog entries in the document store.

    A video is only ever created after the media provider confirmed the
    final chunk, so new entries are published immediately.
    """

    def __init__(
        self,
        document_db: DocumentDBBase,
        url_builder: Callable[[], MediaUrlBuilder],
        collection: str = "videos",
    ) -> None:
        """Initialize the catalog service.

        Args:
            document_db: Document database holding video records.
            url_builder: Returns the delivery URL builder. Called only when a
                video is created, so reads work without media configuration.
            collection: Name of the videos collection.
        """
        self._document_db = document_db
        self._url_builder = url_builder
        self._collection = collection
        self._logger = get_logger(__name__)

    @timed
    async def create_video(self, request: CreateVideoRequest, user_id: str) -> Video:
        """Persist a catalog entry for an uploaded asset.

        Args:
            request: Validated metadata plus the provider asset ID.
            user_id: Owner, taken from the authenticated session.

        Returns:
            The stored video.

        Raises:
            ConfigurationException: If no cloud name is configured.
            PersistenceException: If the document store rejects the write.
        """
        urls = self._url_builder()
        video = Video(
            title=request.title,
            description=request.description,
            video_url=urls.video_url(request.asset_id),
            thumbnail_url=request.thumbnail_url
            or urls.thumbnail_url(request.asset_id),
            asset_id=request.asset_id,
            duration=request.duration,
            status=VideoStatus.PUBLISHED,
            user_id=user_id,
        )

        try:
            await self._document_db.insert(self._collection, video.to_document())
        except Exception as e:
            self._logger.error(
                "Failed to store video record",
                extra={"video_id": video.id, "asset_id": video.asset_id, "error": str(e)},
            )
            raise PersistenceException("create_video", str(e)) from e

        self._logger.info(
            "Video record created",
            extra={"video_id": video.id, "asset_id": video.asset_id, "user_id": user_id},
        )
        return video

    async def get_video(self, video_id: str) -> Video:
        """Fetch one video by its internal ID.

        Raises:
            VideoNotFoundException: If no record has this ID.
            PersistenceException: If the store read fails.
        """
        try:
            document = await self._document_db.find_by_id(self._collection, video_id)
        except Exception as e:
            raise PersistenceException("get_video", str(e)) from e

        if document is None:
            raise VideoNotFoundException(video_id)
        return Video.model_validate(document)

    async def list_recent_videos(self, limit: int = DEFAULT_LIST_LIMIT) -> list[Video]:
        """Newest videos first."""
        return await self._list("list_recent_videos", "created_at", limit)

    async def list_popular_videos(self, limit: int = DEFAULT_LIST_LIMIT) -> list[Video]:
        """Most viewed videos first."""
        return await self._list("list_popular_videos", "view_count", limit)

    async def _list(self, operation: str, sort_field: str, limit: int) -> list[Video]:
        try:
            documents: list[dict[str, Any]] = await self._document_db.find(
                self._collection,
                {},
                limit=limit,
                sort=[(sort_field, -1)],
            )
        except Exception as e:
            raise PersistenceException(operation, str(e)) from e

        return [Video.model_validate(doc) for doc in documents]
