"""Sequential, signed, chunked uploads straight to the media provider.

One uploader instance drives one upload attempt:

    idle -> requesting_signature -> uploading -> completed
                     |                   |
                     +--> failed <-------+
                     +--> cancelled <----+

Chunks are sent strictly one after another. The provider stitches them
together using the shared ``X-Unique-Upload-Id`` and each ``Content-Range``.
A failed attempt is not retried or resumed; a new uploader starts again at
chunk 0 with a new upload ID.
"""

import asyncio
import io
import os
import time
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import BinaryIO, TypeVar

import httpx

from techtube.application.dtos.upload import GenerateSignatureRequest
from techtube.commons.telemetry import bind_log_context, get_logger
from techtube.domain.exceptions import (
    TransportException,
    UploadCancelledException,
    UploadStateException,
    ValidationException,
)
from techtube.domain.models.upload import (
    UploadedAsset,
    UploadOutcome,
    UploadSession,
    UploadSignature,
    UploadState,
    generate_upload_id,
)
from techtube.domain.value_objects.media_urls import MediaUrlBuilder
from techtube.domain.value_objects.upload_chunking import (
    ChunkRange,
    UploadChunkingConfig,
)
from techtube.infrastructure.media.base import SignatureProviderBase

ProgressCallback = Callable[[int], None]
UploadSource = str | os.PathLike[str] | bytes | BinaryIO

T = TypeVar("T")

_MAX_PROGRESS_BEFORE_COMPLETION = 99


class _ByteSource:
    """Random access to the bytes being uploaded.

    Only one chunk is held in memory at a time for paths and file objects.
    """

    def __init__(self, source: UploadSource) -> None:
        self._path: Path | None = None
        self._buffer: bytes | None = None
        self._stream: BinaryIO | None = None

        if isinstance(source, str | os.PathLike):
            self._path = Path(source)
        elif isinstance(source, bytes | bytearray | memoryview):
            self._buffer = bytes(source)
        else:
            self._stream = source

    @property
    def name(self) -> str:
        if self._path is not None:
            return self._path.name
        return "blob"

    def size(self) -> int:
        if self._path is not None:
            return self._path.stat().st_size
        if self._buffer is not None:
            return len(self._buffer)
        assert self._stream is not None
        return self._stream.seek(0, io.SEEK_END)

    def read(self, chunk: ChunkRange) -> bytes:
        if self._buffer is not None:
            return self._buffer[chunk.start : chunk.end]
        if self._path is not None:
            with self._path.open("rb") as f:
                f.seek(chunk.start)
                return f.read(chunk.size)
        assert self._stream is not None
        self._stream.seek(chunk.start)
        return self._stream.read(chunk.size)


class ChunkedUploader:
    """Uploads one file to the provider in fixed-size, signed chunks.

    Example:
        >>> uploader = ChunkedUploader(
        ...     Path("talk.mp4"),
        ...     signature_provider,
        ...     on_progress=lambda pct: print(f"{pct}%"),
        ... )
        >>> outcome = await uploader.upload()
        >>> outcome.asset.public_id
        'videos/abc123'
    """

    def __init__(
        self,
        source: UploadSource,
        signature_provider: SignatureProviderBase,
        *,
        upload_base_url: str = "https://api.cloudinary.com/v1_1",
        cdn_base_url: str = "https://res.cloudinary.com",
        chunking: UploadChunkingConfig | None = None,
        folder: str | None = "videos",
        resource_type: str = "video",
        on_progress: ProgressCallback | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the uploader.

        Args:
            source: Local path (``str`` or path-like), in-memory bytes or a
                seekable binary file.
            signature_provider: Source of the upload signature.
            upload_base_url: Provider upload API root, without the cloud name.
            cdn_base_url: Provider delivery root, used to derive thumbnails.
            chunking: Chunk size settings. Defaults to 5 MiB chunks.
            folder: Destination folder, signed with the upload.
            resource_type: Provider resource type.
            on_progress: Called with an integer percentage before each chunk
                and with 100 once the provider confirmed the last one.
            http_client: Pre-built client; the uploader will not close it.
            timeout: Per-request timeout in seconds. ``None`` waits forever.
        """
        self._source = _ByteSource(source)
        self._signature_provider = signature_provider
        self._upload_base_url = upload_base_url.rstrip("/")
        self._cdn_base_url = cdn_base_url
        self._chunking = chunking or UploadChunkingConfig()
        self._folder = folder
        self._resource_type = resource_type
        self._on_progress = on_progress
        self._http_client = http_client
        self._timeout = timeout

        self._upload_id = generate_upload_id()
        self._state = UploadState.IDLE
        self._current_chunk: int | None = None
        self._chunks_sent = 0
        self._total_chunks = 0
        self._cancel_event = asyncio.Event()
        self._inflight: asyncio.Task[object] | None = None
        self._logger = get_logger(__name__)

    @property
    def upload_id(self) -> str:
        """Identifier shared by every chunk of this attempt."""
        return self._upload_id

    @property
    def state(self) -> UploadState:
        """Current lifecycle state."""
        return self._state

    @property
    def current_chunk(self) -> int | None:
        """Index of the chunk being sent, or the last one sent."""
        return self._current_chunk

    @property
    def chunks_sent(self) -> int:
        """Number of chunks the provider acknowledged."""
        return self._chunks_sent

    def cancel(self) -> None:
        """Stop the upload.

        No chunk is sent after this call, and a request already on the wire
        is abandoned. Chunks the provider already accepted are not rolled
        back. Has no effect once the upload reached a terminal state.
        """
        if self._state.is_terminal:
            return
        self._cancel_event.set()
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._logger.info(
            "Upload cancellation requested",
            extra={"upload_id": self._upload_id, "state": self._state.value},
        )

    async def upload(self) -> UploadOutcome:
        """Run the whole attempt: sign once, then send every chunk in order.

        Returns:
            ``completed`` outcome with the provider asset, or ``cancelled``
            outcome if :meth:`cancel` was called.

        Raises:
            UploadStateException: If this uploader was already started.
            ValidationException: If the source is empty.
            TransportException: On a network error, a non-2xx response, or a
                final response without ``public_id``.
        """
        if self._state != UploadState.IDLE:
            raise UploadStateException(self._upload_id, self._state.value)

        file_size = self._source.size()
        if file_size <= 0:
            raise ValidationException("source", "cannot upload an empty file")

        chunks = self._chunking.plan(file_size)
        self._total_chunks = len(chunks)

        with bind_log_context(upload_id=self._upload_id):
            try:
                return await self._run(file_size, chunks)
            except UploadCancelledException as e:
                self._state = UploadState.CANCELLED
                self._logger.info(
                    "Upload cancelled",
                    extra={"chunk_index": e.chunk_index, "chunks_sent": self._chunks_sent},
                )
                return self._outcome()
            except asyncio.CancelledError:
                self._state = UploadState.CANCELLED
                raise
            except Exception:
                self._state = UploadState.FAILED
                self._logger.exception(
                    "Upload failed",
                    extra={"chunk_index": self._current_chunk, "chunks_sent": self._chunks_sent},
                )
                raise
            finally:
                self._inflight = None

    async def _run(
        self,
        file_size: int,
        chunks: tuple[ChunkRange, ...],
    ) -> UploadOutcome:
        self._state = UploadState.REQUESTING_SIGNATURE
        self._raise_if_cancelled(chunk_index=0)

        signature = await self._cancellable(
            self._signature_provider.request_signature(
                GenerateSignatureRequest(
                    timestamp=int(time.time()),
                    folder=self._folder,
                    auto_chaptering=True,
                    resource_type=self._resource_type,
                )
            ),
            chunk_index=0,
        )

        session = self._open_session(signature, file_size, chunks)
        self._state = UploadState.UPLOADING
        self._logger.info(
            "Starting chunked upload",
            extra={
                "file_size": file_size,
                "total_chunks": session.total_chunks,
                "chunk_size": self._chunking.chunk_size_bytes,
            },
        )

        if self._http_client is not None:
            response = await self._send_all(self._http_client, session)
        else:
            async with httpx.AsyncClient(timeout=httpx.Timeout(self._timeout)) as client:
                response = await self._send_all(client, session)

        asset = self._parse_asset(response, signature)
        self._state = UploadState.COMPLETED
        self._report_progress(100)
        self._logger.info(
            "Upload completed",
            extra={"public_id": asset.public_id, "chunks_sent": self._chunks_sent},
        )
        return self._outcome(asset)

    def _open_session(
        self,
        signature: UploadSignature,
        file_size: int,
        chunks: tuple[ChunkRange, ...],
    ) -> UploadSession:
        return UploadSession(
            upload_id=self._upload_id,
            upload_url=(
                f"{self._upload_base_url}/{signature.cloud_name}"
                f"/{self._resource_type}/upload"
            ),
            resource_type=self._resource_type,
            file_size=file_size,
            chunks=chunks,
            signature=signature,
        )

    async def _send_all(
        self,
        client: httpx.AsyncClient,
        session: UploadSession,
    ) -> httpx.Response:
        response: httpx.Response | None = None
        for chunk in session.chunks:
            self._raise_if_cancelled(chunk.index)
            self._current_chunk = chunk.index
            self._report_progress(
                min(chunk.progress_percent, _MAX_PROGRESS_BEFORE_COMPLETION)
            )
            # The progress callback may itself cancel.
            self._raise_if_cancelled(chunk.index)
            response = await self._cancellable(
                self._send_chunk(client, session, chunk),
                chunk_index=chunk.index,
            )
            self._chunks_sent += 1
        assert response is not None
        return response

    async def _send_chunk(
        self,
        client: httpx.AsyncClient,
        session: UploadSession,
        chunk: ChunkRange,
    ) -> httpx.Response:
        self._logger.info(
            "Uploading chunk",
            extra={
                "chunk_index": chunk.index,
                "total_chunks": session.total_chunks,
                "content_range": chunk.content_range,
            },
        )
        payload = self._source.read(chunk)

        try:
            response = await client.post(
                session.upload_url,
                data=session.form_fields(),
                files={"file": (self._source.name, payload, "application/octet-stream")},
                headers=session.headers_for(chunk),
            )
        except httpx.HTTPError as e:
            raise TransportException(
                f"{type(e).__name__} while sending chunk {chunk.index}",
                chunk_index=chunk.index,
            ) from e

        if not response.is_success:
            raise TransportException(
                f"provider returned HTTP {response.status_code} for chunk {chunk.index}",
                status_code=response.status_code,
                chunk_index=chunk.index,
                response_text=response.text,
            )
        return response

    def _parse_asset(
        self,
        response: httpx.Response,
        signature: UploadSignature,
    ) -> UploadedAsset:
        last_index = self._total_chunks - 1
        try:
            payload = response.json()
        except ValueError as e:
            raise TransportException(
                "final response is not JSON",
                status_code=response.status_code,
                chunk_index=last_index,
                response_text=response.text,
            ) from e

        if not isinstance(payload, dict) or not payload.get("public_id"):
            raise TransportException(
                "final response has no public_id",
                status_code=response.status_code,
                chunk_index=last_index,
                response_text=response.text,
            )

        urls = MediaUrlBuilder(
            cdn_base_url=self._cdn_base_url,
            cloud_name=signature.cloud_name,
        )
        return UploadedAsset.from_provider_response(payload, urls)

    async def _cancellable(self, awaitable: Awaitable[T], *, chunk_index: int) -> T:
        """Await ``awaitable`` as a task that :meth:`cancel` can abort."""
        task: asyncio.Task[T] = asyncio.ensure_future(awaitable)
        self._inflight = task  # type: ignore[assignment]
        try:
            return await task
        except asyncio.CancelledError:
            if self._cancel_event.is_set():
                raise UploadCancelledException(self._upload_id, chunk_index) from None
            raise
        finally:
            self._inflight = None

    def _raise_if_cancelled(self, chunk_index: int) -> None:
        if self._cancel_event.is_set():
            raise UploadCancelledException(self._upload_id, chunk_index)

    def _report_progress(self, percent: int) -> None:
        if self._on_progress is not None:
            self._on_progress(percent)

    def _outcome(self, asset: UploadedAsset | None = None) -> UploadOutcome:
        return UploadOutcome(
            upload_id=self._upload_id,
            state=self._state,
            chunks_sent=self._chunks_sent,
            total_chunks=self._total_chunks,
            asset=asset,
        )
