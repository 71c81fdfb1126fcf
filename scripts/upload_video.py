#!/usr/bin/env python3
"""
Upload a local video to the media provider and add it to the catalog.

Runs the same flow as the web client:
1. Ask the API for an upload signature
2. Send the file to the provider in signed, sequential chunks
3. Record the confirmed asset with POST /videos

Usage:
    python scripts/upload_video.py talk.mp4 --title "My talk" --cookie "session=..."

Options:
    --api-url       TechTube API root (default: http://localhost:8000)
    --cookie        Session cookie issued by the auth service
    --token         Bearer token, as an alternative to --cookie
    --local-sign    Sign in-process with the configured credentials
    --chunk-size-mb Chunk size in MiB (default: from settings)

Press Ctrl+C during the upload to cancel it.
"""

from __future__ import annotations

import argparse
import asyncio
import signal
import sys
from dataclasses import dataclass
from pathlib import Path

import httpx
from pydantic import ValidationError

from techtube.application.dtos.video import CreateVideoRequest
from techtube.commons.settings import get_settings
from techtube.commons.settings.models import MIB
from techtube.commons.telemetry import configure_logging
from techtube.domain.exceptions import DomainException
from techtube.domain.models.upload import UploadOutcome
from techtube.domain.value_objects.upload_chunking import UploadChunkingConfig
from techtube.infrastructure.factory import InfrastructureFactory
from techtube.infrastructure.media import (
    ChunkedUploader,
    LocalSignatureProvider,
    RemoteSignatureProvider,
    SignatureProviderBase,
)


@dataclass
class UploadArgs:
    """Parsed command line arguments."""

    file: Path
    title: str
    description: str | None
    api_url: str
    cookie: str | None
    token: str | None
    local_sign: bool
    chunk_size_mb: int | None
    verbose: bool


def parse_args() -> UploadArgs:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Upload a video in signed chunks and add it to the catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("file", type=Path, help="Video file to upload")
    parser.add_argument("--title", required=True, help="Video title (3-100 chars)")
    parser.add_argument("--description", default=None, help="Optional description")
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="TechTube API root URL",
    )
    parser.add_argument("--cookie", default=None, help="Session cookie header value")
    parser.add_argument("--token", default=None, help="Bearer token")
    parser.add_argument(
        "--local-sign",
        action="store_true",
        help="Sign with local credentials instead of calling the API",
    )
    parser.add_argument(
        "--chunk-size-mb",
        type=int,
        default=None,
        help="Chunk size in MiB",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()
    return UploadArgs(
        file=args.file,
        title=args.title,
        description=args.description,
        api_url=args.api_url.rstrip("/"),
        cookie=args.cookie,
        token=args.token,
        local_sign=args.local_sign,
        chunk_size_mb=args.chunk_size_mb,
        verbose=args.verbose,
    )


def auth_headers(args: UploadArgs) -> dict[str, str]:
    """Headers that carry the caller's session to the API."""
    headers: dict[str, str] = {}
    if args.cookie:
        headers["Cookie"] = args.cookie
    if args.token:
        headers["Authorization"] = f"Bearer {args.token}"
    return headers


def print_progress(percent: int) -> None:
    """Render a single-line progress bar."""
    filled = percent // 2
    bar = "#" * filled + "-" * (50 - filled)
    print(f"\r  [{bar}] {percent:3d}%", end="", flush=True)
    if percent == 100:
        print()


def resolve_chunking(
    chunking: UploadChunkingConfig,
    file_size: int,
    chunk_size_mb: int | None,
) -> UploadChunkingConfig:
    """Pick the chunk size for this file.

    An explicit ``--chunk-size-mb`` wins. Otherwise files at or below the
    chunked threshold go up in a single request.
    """
    if chunk_size_mb:
        return chunking.model_copy(update={"chunk_size_bytes": chunk_size_mb * MIB})
    if not chunking.requires_chunked_upload(file_size):
        return chunking.model_copy(update={"chunk_size_bytes": max(file_size, 1)})
    return chunking


async def run_upload(args: UploadArgs) -> int:
    """Run the full flow and return the process exit code."""
    settings = get_settings()
    factory = InfrastructureFactory(settings)
    api_prefix = settings.server.api_prefix
    headers = auth_headers(args)

    file_size = args.file.stat().st_size
    chunking = resolve_chunking(
        factory.get_chunking_config(), file_size, args.chunk_size_mb
    )

    provider: SignatureProviderBase
    if args.local_sign:
        provider = LocalSignatureProvider(factory.get_signature_service())
    else:
        provider = RemoteSignatureProvider(
            args.api_url,
            api_prefix=api_prefix,
            headers=headers,
        )

    uploader = ChunkedUploader(
        args.file,
        provider,
        upload_base_url=settings.media.upload_base_url,
        cdn_base_url=settings.media.cdn_base_url,
        chunking=chunking,
        folder=settings.media.upload_folder,
        on_progress=print_progress,
        timeout=settings.media.request_timeout_seconds,
    )

    chunk_count = chunking.calculate_chunk_count(file_size)
    print(f"Uploading {args.file.name} ({file_size} bytes, {chunk_count} chunk(s))")
    print(f"  Upload ID: {uploader.upload_id}")

    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, uploader.cancel)
    try:
        outcome: UploadOutcome = await uploader.upload()
    finally:
        loop.remove_signal_handler(signal.SIGINT)
        await provider.close()

    if outcome.is_cancelled:
        print(f"\nUpload cancelled after {outcome.chunks_sent}/{outcome.total_chunks} chunks")
        return 130

    assert outcome.asset is not None
    print(f"  Provider asset: {outcome.asset.public_id}")

    request = CreateVideoRequest(
        title=args.title,
        description=args.description,
        asset_id=outcome.asset.public_id,
        thumbnail_url=outcome.asset.thumbnail_url,
        duration=outcome.asset.duration or None,
    )
    async with httpx.AsyncClient(headers=headers, timeout=30.0) as client:
        response = await client.post(
            f"{args.api_url}{api_prefix}/videos",
            json=request.model_dump(exclude_none=True),
        )

    if not response.is_success:
        print(f"Failed to create video record: HTTP {response.status_code}")
        print(response.text)
        return 1

    video = response.json()
    print(f"Created video {video['id']}")
    print(f"  Playback:  {video['video_url']}")
    print(f"  Thumbnail: {video['thumbnail_url']}")
    return 0


def main() -> None:
    """Main entry point."""
    args = parse_args()
    configure_logging(
        level="DEBUG" if args.verbose else "WARNING",
        format_type="text",
    )

    if not args.file.is_file():
        print(f"File not found: {args.file}")
        sys.exit(2)

    try:
        exit_code = asyncio.run(run_upload(args))
    except DomainException as e:
        print(f"\nUpload failed: {e}")
        sys.exit(1)
    except ValidationError as e:
        print(f"\nInvalid video metadata: {e}")
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
