"""Chunk planning value objects for large file uploads."""

import math

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_CHUNK_SIZE = 5 * 1024 * 1024
DEFAULT_CHUNKED_THRESHOLD = 100 * 1024 * 1024


class ChunkRange(BaseModel):
    """Half-open byte range ``[start, end)`` of a file of ``total`` bytes."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    start: int = Field(ge=0)
    end: int = Field(gt=0)
    total: int = Field(gt=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "ChunkRange":
        if not self.start < self.end <= self.total:
            msg = f"Invalid chunk range [{self.start}, {self.end}) of {self.total}"
            raise ValueError(msg)
        return self

    @property
    def size(self) -> int:
        """Number of bytes in this chunk."""
        return self.end - self.start

    @property
    def is_last(self) -> bool:
        """Whether this chunk ends the file."""
        return self.end == self.total

    @property
    def content_range(self) -> str:
        """Value of the ``Content-Range`` header (inclusive end)."""
        return f"bytes {self.start}-{self.end - 1}/{self.total}"

    @property
    def progress_percent(self) -> int:
        """Share of the file queued before this chunk, rounded half up."""
        return math.floor(self.start / self.total * 100 + 0.5)


class UploadChunkingConfig(BaseModel):
    """How files are split for upload.

    Files up to ``chunked_threshold_bytes`` may go in a single request;
    larger ones must use the chunked path.
    """

    chunk_size_bytes: int = Field(
        default=DEFAULT_CHUNK_SIZE,
        ge=1,
        description="Size of every chunk except possibly the last",
    )
    chunked_threshold_bytes: int = Field(
        default=DEFAULT_CHUNKED_THRESHOLD,
        ge=0,
        description="Files larger than this must be uploaded in chunks",
    )

    def calculate_chunk_count(self, file_size: int) -> int:
        """Number of chunks for a file: ``ceil(size / chunk_size)``."""
        if file_size <= 0:
            return 0
        return math.ceil(file_size / self.chunk_size_bytes)

    def plan(self, file_size: int) -> tuple[ChunkRange, ...]:
        """Split ``[0, file_size)`` into contiguous, non-overlapping ranges."""
        return tuple(
            ChunkRange(
                index=index,
                start=start,
                end=min(start + self.chunk_size_bytes, file_size),
                total=file_size,
            )
            for index, start in enumerate(range(0, file_size, self.chunk_size_bytes))
        )

    def requires_chunked_upload(self, file_size: int) -> bool:
        """Whether a file is too large for a single upload request."""
        return file_size > self.chunked_threshold_bytes
