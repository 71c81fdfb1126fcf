"""Unit tests for domain value objects."""

import pytest

from techtube.domain.value_objects.media_urls import MediaUrlBuilder
from techtube.domain.value_objects.upload_chunking import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CHUNKED_THRESHOLD,
    ChunkRange,
    UploadChunkingConfig,
)

MIB = 1024 * 1024


class TestChunkRange:
    """Tests for ChunkRange value object."""

    def test_content_range_uses_inclusive_end(self):
        chunk = ChunkRange(index=0, start=0, end=5 * MIB, total=12 * MIB)
        assert chunk.content_range == "bytes 0-5242879/12582912"

    def test_size_and_last(self):
        chunk = ChunkRange(index=2, start=10, end=25, total=25)
        assert chunk.size == 15
        assert chunk.is_last is True

    def test_progress_rounds_half_up(self):
        # 1/8 = 12.5% rounds up
        assert ChunkRange(index=1, start=1, end=2, total=8).progress_percent == 13
        # 1/3 = 33.33%
        assert ChunkRange(index=1, start=1, end=2, total=3).progress_percent == 33

    @pytest.mark.parametrize(
        ("start", "end", "total"),
        [(5, 5, 10), (6, 5, 10), (0, 11, 10)],
    )
    def test_invalid_bounds_rejected(self, start, end, total):
        with pytest.raises(ValueError):
            ChunkRange(index=0, start=start, end=end, total=total)

    def test_frozen(self):
        chunk = ChunkRange(index=0, start=0, end=1, total=1)
        with pytest.raises(ValueError):
            chunk.start = 1  # type: ignore[misc]


class TestUploadChunkingConfig:
    """Tests for chunk planning."""

    def test_defaults(self):
        config = UploadChunkingConfig()
        assert config.chunk_size_bytes == DEFAULT_CHUNK_SIZE == 5 * MIB
        assert config.chunked_threshold_bytes == DEFAULT_CHUNKED_THRESHOLD == 100 * MIB

    def test_twelve_mib_file_in_five_mib_chunks(self):
        chunks = UploadChunkingConfig().plan(12 * MIB)

        assert [c.content_range for c in chunks] == [
            "bytes 0-5242879/12582912",
            "bytes 5242880-10485759/12582912",
            "bytes 10485760-12582911/12582912",
        ]
        assert [c.progress_percent for c in chunks] == [0, 42, 83]

    @pytest.mark.parametrize(
        ("file_size", "chunk_size", "expected"),
        [
            (1, 5, 1),
            (5, 5, 1),
            (6, 5, 2),
            (10, 5, 2),
            (11, 5, 3),
            (12 * MIB, 5 * MIB, 3),
            (0, 5, 0),
        ],
    )
    def test_chunk_count(self, file_size, chunk_size, expected):
        config = UploadChunkingConfig(chunk_size_bytes=chunk_size)
        assert config.calculate_chunk_count(file_size) == expected
        assert len(config.plan(file_size)) == expected

    @pytest.mark.parametrize(("file_size", "chunk_size"), [(1, 1), (7, 3), (1000, 64), (64, 64)])
    def test_plan_partitions_file(self, file_size, chunk_size):
        chunks = UploadChunkingConfig(chunk_size_bytes=chunk_size).plan(file_size)

        assert chunks[0].start == 0
        assert chunks[-1].end == file_size
        assert sum(c.size for c in chunks) == file_size
        for previous, current in zip(chunks, chunks[1:], strict=False):
            assert current.start == previous.end
            assert previous.size == chunk_size
        assert [c.index for c in chunks] == list(range(len(chunks)))
        assert [c.is_last for c in chunks].count(True) == 1

    def test_requires_chunked_upload(self):
        config = UploadChunkingConfig()
        assert config.requires_chunked_upload(100 * MIB) is False
        assert config.requires_chunked_upload(100 * MIB + 1) is True

    def test_zero_chunk_size_rejected(self):
        with pytest.raises(ValueError):
            UploadChunkingConfig(chunk_size_bytes=0)


class TestMediaUrlBuilder:
    """Tests for delivery URL derivation."""

    @pytest.fixture
    def urls(self):
        return MediaUrlBuilder(cdn_base_url="https://res.cloudinary.com", cloud_name="demo")

    def test_video_url(self, urls):
        assert urls.video_url("abc123") == (
            "https://res.cloudinary.com/demo/video/upload/abc123"
        )

    def test_video_url_with_quality_and_format(self, urls):
        assert urls.video_url("abc123", quality="80", format="mp4") == (
            "https://res.cloudinary.com/demo/video/upload/q_80/f_mp4/abc123"
        )

    def test_video_url_with_transformation(self, urls):
        assert urls.video_url("abc123", transformation="w_1280") == (
            "https://res.cloudinary.com/demo/video/upload/w_1280/abc123"
        )

    def test_thumbnail_url(self, urls):
        assert urls.thumbnail_url("abc123") == (
            "https://res.cloudinary.com/demo/video/upload/abc123.jpg"
        )

    def test_thumbnail_url_with_transformation(self, urls):
        assert urls.thumbnail_url(
            "abc123", transformation="w_640,h_360,c_fill,g_auto,q_auto"
        ) == (
            "https://res.cloudinary.com/demo/video/upload/"
            "w_640,h_360,c_fill,g_auto,q_auto/abc123.jpg"
        )

    def test_trailing_slash_in_cdn_url(self):
        urls = MediaUrlBuilder(cdn_base_url="https://cdn.test/", cloud_name="demo")
        assert urls.video_prefix == "https://cdn.test/demo/video/upload"

    def test_folder_in_asset_id_is_kept(self, urls):
        assert urls.video_url("videos/abc123").endswith("/upload/videos/abc123")

    def test_empty_cloud_name_rejected(self):
        with pytest.raises(ValueError):
            MediaUrlBuilder(cloud_name="")
