"""Provider-direct transport: calls the OpenAI Videos API through the official SDK."""

import logging
from typing import NoReturn

import httpx
import openai
from openai import AsyncOpenAI
from pydantic import SecretStr

from ..exceptions import (
    UNEXPECTED_PROVIDER_ERROR,
    ConfigurationError,
    InvalidCredentialError,
    TransportError,
    VideoJobError,
)
from ..types import ContentVariant, VideoCreateParams, VideoJob
from .base import VideoTransport

logger = logging.getLogger(__name__)

AUTH_FAILURE_STATUSES = (401, 403)


def _error_status(error: Exception) -> int | None:
    for attr in ("status_code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def translate_provider_error(error: Exception) -> Exception:
    """
    Map an exception raised by the SDK onto the client's error taxonomy.

    Errors exposing a 401/403 status or an ``invalid_api_key`` code become
    InvalidCredentialError. SDK and HTTP errors become TransportError with
    the original message. Anything else is returned unchanged.
    """
    status = _error_status(error)
    code = getattr(error, "code", None)
    if status in AUTH_FAILURE_STATUSES or (isinstance(code, str) and code == "invalid_api_key"):
        return InvalidCredentialError(status_code=status)

    if isinstance(error, VideoJobError):
        return error

    if isinstance(error, (openai.APIError, httpx.HTTPError)):
        message = getattr(error, "message", None) or str(error) or UNEXPECTED_PROVIDER_ERROR
        return TransportError(message, status_code=status)

    return error


class DirectTransport(VideoTransport):
    """Video transport using the caller's own OpenAI API key."""

    mode = "provider-direct"

    def __init__(self, api_key: SecretStr | str | None, base_url: str | None = None):
        """
        Initialize the direct transport.

        Args:
            api_key: OpenAI API key supplied by the caller.
            base_url: Optional override for the OpenAI API base URL.
        """
        if isinstance(api_key, SecretStr):
            api_key = api_key.get_secret_value()
        if not api_key:
            raise ConfigurationError("API key is required for provider-direct mode")
        self._api_key = SecretStr(api_key)
        self.base_url = base_url

    def _client(self) -> AsyncOpenAI:
        return AsyncOpenAI(api_key=self._api_key.get_secret_value(), base_url=self.base_url)

    def _raise_translated(self, error: Exception) -> NoReturn:
        translated = translate_provider_error(error)
        logger.warning("[DIRECT] request failed: %s", type(translated).__name__)
        if translated is error:
            raise error
        raise translated from error

    async def create(self, params: VideoCreateParams) -> VideoJob:
        create_params = {
            "model": params.model,
            "prompt": params.prompt,
            "size": params.size,
            "seconds": params.seconds,
        }
        if params.input_reference:
            create_params["input_reference"] = params.input_reference.as_upload()

        try:
            async with self._client() as client:
                video = await client.videos.create(**create_params)
        except Exception as e:
            self._raise_translated(e)
        return VideoJob.from_payload(video)

    async def remix(self, video_id: str, prompt: str) -> VideoJob:
        try:
            async with self._client() as client:
                video = await client.videos.remix(video_id, prompt=prompt)
        except Exception as e:
            self._raise_translated(e)
        return VideoJob.from_payload(video)

    async def retrieve(self, video_id: str) -> VideoJob:
        try:
            async with self._client() as client:
                video = await client.videos.retrieve(video_id)
        except Exception as e:
            self._raise_translated(e)
        return VideoJob.from_payload(video)

    async def delete(self, video_id: str) -> None:
        try:
            async with self._client() as client:
                await client.videos.delete(video_id)
        except Exception as e:
            self._raise_translated(e)

    async def download_content(self, video_id: str, variant: ContentVariant) -> bytes:
        try:
            async with self._client() as client:
                content = await client.videos.download_content(video_id, variant=variant)
                return await content.aread()
        except Exception as e:
            self._raise_translated(e)
