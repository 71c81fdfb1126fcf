"""Video catalog endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from techtube.api.dependencies import CurrentSessionDep, VideoCatalogServiceDep
from techtube.application.dtos.video import (
    CreateVideoRequest,
    VideoListResponse,
    VideoResponse,
)

router = APIRouter()

ListLimit = Annotated[
    int,
    Query(ge=1, le=100, description="Maximum number of videos to return"),
]


@router.post(
    "/videos",
    response_model=VideoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create video",
    description=(
        "Record an uploaded asset in the catalog. Call this only after the "
        "media provider confirmed the final chunk."
    ),
)
async def create_video(
    request: CreateVideoRequest,
    service: VideoCatalogServiceDep,
    session: CurrentSessionDep,
) -> VideoResponse:
    """Create a published video owned by the caller."""
    video = await service.create_video(request, user_id=session.user_id)
    return VideoResponse.from_video(video)


@router.get(
    "/videos/recent",
    response_model=VideoListResponse,
    summary="Recent videos",
    description="Newest videos first.",
)
async def list_recent_videos(
    service: VideoCatalogServiceDep,
    limit: ListLimit = 20,
) -> VideoListResponse:
    """List the most recently created videos."""
    videos = await service.list_recent_videos(limit=limit)
    return VideoListResponse(
        videos=[VideoResponse.from_video(v) for v in videos],
        count=len(videos),
    )


@router.get(
    "/videos/popular",
    response_model=VideoListResponse,
    summary="Popular videos",
    description="Most viewed videos first.",
)
async def list_popular_videos(
    service: VideoCatalogServiceDep,
    limit: ListLimit = 20,
) -> VideoListResponse:
    """List the most viewed videos."""
    videos = await service.list_popular_videos(limit=limit)
    return VideoListResponse(
        videos=[VideoResponse.from_video(v) for v in videos],
        count=len(videos),
    )


@router.get(
    "/videos/{video_id}",
    response_model=VideoResponse,
    summary="Get video",
    description="Get one video by its internal ID.",
)
async def get_video(
    video_id: str,
    service: VideoCatalogServiceDep,
) -> VideoResponse:
    """Get a single video."""
    video = await service.get_video(video_id)
    return VideoResponse.from_video(video)
