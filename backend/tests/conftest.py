"""Pytest configuration and shared fixtures for video job tests."""

import os
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from dotenv import load_dotenv

# Load environment variables from backend/.env
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)

from app.integrations.video_jobs import (
    InputReference,
    VideoCreateParams,
    VideoJob,
    VideoTransport,
)


# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)


# ============================================================================
# Payload Fixtures
# ============================================================================


@pytest.fixture
def queued_video_payload() -> dict:
    """Video record as returned by the OpenAI API for a queued job."""
    return {
        "id": "video_test_001",
        "object": "video",
        "model": "sora-2",
        "status": "queued",
        "progress": 0,
        "created_at": 1759938772,
        "completed_at": None,
        "expires_at": None,
        "size": "1280x720",
        "seconds": "8",
        "remixed_from_video_id": None,
        "error": None,
    }


@pytest.fixture
def completed_video_payload(queued_video_payload) -> dict:
    """Video record for a completed job."""
    return {
        **queued_video_payload,
        "status": "completed",
        "progress": 100,
        "completed_at": 1759938900,
        "expires_at": 1760025300,
    }


@pytest.fixture
def failed_video_payload(queued_video_payload) -> dict:
    """Video record for a failed job."""
    return {
        **queued_video_payload,
        "status": "failed",
        "error": {"code": "moderation_blocked", "message": "Content policy violation"},
    }


@pytest.fixture
def sample_create_params() -> VideoCreateParams:
    """Normalized create parameters without an input reference."""
    return VideoCreateParams(model="sora-2", prompt="cat", size="1280x720", seconds="8")


@pytest.fixture
def sample_image_reference() -> InputReference:
    """A tiny PNG used as an input reference."""
    return InputReference(
        filename="first_frame.png",
        content=b"\x89PNG\r\n\x1a\n" + b"\x00" * 16,
        mime_type="image/png",
    )


# ============================================================================
# SDK Mock Fixtures
# ============================================================================


def make_sdk_video(payload: dict) -> MagicMock:
    """Create a stand-in for an openai Video object."""
    video = MagicMock()
    video.model_dump.return_value = dict(payload)
    return video


@pytest.fixture
def sdk_video_factory() -> Callable[[dict], MagicMock]:
    """Factory for stand-ins of openai Video objects."""
    return make_sdk_video


@pytest.fixture
def mock_openai_client():
    """Create a mock openai.AsyncOpenAI usable as an async context manager."""
    mock_client = MagicMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=None)
    mock_client.videos = MagicMock()
    mock_client.videos.create = AsyncMock()
    mock_client.videos.remix = AsyncMock()
    mock_client.videos.retrieve = AsyncMock()
    mock_client.videos.delete = AsyncMock()
    mock_client.videos.download_content = AsyncMock()
    return mock_client


@pytest.fixture
def patched_openai(mock_openai_client):
    """Patch AsyncOpenAI in the direct transport and yield the class mock."""
    with patch(
        "app.integrations.video_jobs.transports.direct.AsyncOpenAI",
        return_value=mock_openai_client,
    ) as mock_class:
        yield mock_class


# ============================================================================
# HTTP Mock Fixtures
# ============================================================================


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays canned responses."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []
        self._respond = respond

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def recording_handler() -> Callable[..., RecordingHandler]:
    """Factory for RecordingHandler instances returning a fixed status and body."""

    def factory(
        status_code: int = 200,
        json_body: Any = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> RecordingHandler:
        def respond(request: httpx.Request) -> httpx.Response:
            if json_body is not None:
                return httpx.Response(status_code, json=json_body, headers=headers)
            return httpx.Response(status_code, content=content or b"", headers=headers)

        return RecordingHandler(respond)

    return factory


def multipart_fields(request: httpx.Request) -> dict[str, bytes]:
    """Parse a multipart request body into {field name: raw value}."""
    content_type = request.headers["content-type"]
    boundary = content_type.split("boundary=")[1].encode()
    fields: dict[str, bytes] = {}
    for part in request.content.split(b"--" + boundary):
        if b"Content-Disposition" not in part:
            continue
        head, _, value = part.partition(b"\r\n\r\n")
        name = head.split(b'name="')[1].split(b'"')[0].decode()
        fields[name] = value[: -len(b"\r\n")] if value.endswith(b"\r\n") else value
    return fields


@pytest.fixture
def parse_multipart() -> Callable[[httpx.Request], dict[str, bytes]]:
    """Expose the multipart parser to tests."""
    return multipart_fields


# ============================================================================
# Transport Spy Fixtures
# ============================================================================


class SpyTransport(VideoTransport):
    """Transport that records every call and returns canned results."""

    mode = "spy"

    def __init__(self, job: VideoJob | None = None, content: bytes = b"video-bytes"):
        self.calls: list[tuple[str, tuple]] = []
        self.job = job
        self.content = content

    async def create(self, params):
        self.calls.append(("create", (params,)))
        return self.job

    async def remix(self, video_id, prompt):
        self.calls.append(("remix", (video_id, prompt)))
        return self.job

    async def retrieve(self, video_id):
        self.calls.append(("retrieve", (video_id,)))
        return self.job

    async def delete(self, video_id):
        self.calls.append(("delete", (video_id,)))

    async def download_content(self, video_id, variant):
        self.calls.append(("download_content", (video_id, variant)))
        return self.content


@pytest.fixture
def spy_transport(queued_video_payload) -> SpyTransport:
    """A transport spy returning the queued job."""
    return SpyTransport(job=VideoJob.model_validate(queued_video_payload))


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture
def clean_env():
    """Run with none of the client/backend environment variables set."""
    keys = (
        "VIDEO_API_MODE",
        "OPENAI_API_KEY",
        "OPENAI_BASE_URL",
        "VIDEO_PASSWORD_HASH",
        "VIDEO_BACKEND_URL",
        "APP_PASSWORD",
    )
    saved = {key: os.environ.pop(key) for key in keys if key in os.environ}
    try:
        yield
    finally:
        os.environ.update(saved)
