"""Backend-proxy transport: calls the trusted backend's /api/videos routes."""

import logging
from typing import Any
from urllib.parse import quote

import httpx
import pydantic

from ..config import DEFAULT_BACKEND_URL
from ..exceptions import TransportError
from ..types import ContentVariant, VideoCreateParams, VideoJob
from .base import VideoTransport

logger = logging.getLogger(__name__)

API_PREFIX = "/api/videos"
PASSWORD_HASH_HEADER = "x-password-hash"
PASSWORD_HASH_QUERY_PARAM = "password-hash"


def error_message_from_response(response: httpx.Response) -> str:
    """
    Extract a human-readable failure message from a non-2xx response.

    Prefers the JSON body's ``error`` field, then the HTTP reason phrase,
    then a generic message with the status code.
    """
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict):
            error = error.get("message")
        if isinstance(error, str) and error:
            return error

    if response.reason_phrase:
        return response.reason_phrase
    return f"API request failed with status {response.status_code}"


class ProxyTransport(VideoTransport):
    """Video transport that goes through the backend holding the real API key."""

    mode = "backend-proxy"

    def __init__(
        self,
        base_url: str = DEFAULT_BACKEND_URL,
        password_hash: str | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the proxy transport.

        Args:
            base_url: Base URL of the trusted backend.
            password_hash: Hash of the shared password, attached to every request when set.
            http_transport: Optional httpx transport (used to mount an ASGI app or a mock).
        """
        self.base_url = base_url
        self._password_hash = password_hash
        self._http_transport = http_transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, transport=self._http_transport)

    def _auth_headers(self) -> dict[str, str]:
        if self._password_hash:
            return {PASSWORD_HASH_HEADER: self._password_hash}
        return {}

    def _video_path(self, video_id: str, suffix: str = "") -> str:
        return f"{API_PREFIX}/{quote(video_id, safe='')}{suffix}"

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        logger.info("[PROXY] %s %s", method, url)
        try:
            async with self._client() as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(str(e) or f"Request to {url} failed") from e

        if not response.is_success:
            message = error_message_from_response(response)
            logger.warning("[PROXY] %s %s failed with status %d", method, url, response.status_code)
            raise TransportError(message, status_code=response.status_code)
        return response

    def _job(self, response: httpx.Response) -> VideoJob:
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                "Backend returned an invalid JSON body", status_code=response.status_code
            ) from e
        try:
            return VideoJob.from_payload(data)
        except pydantic.ValidationError as e:
            raise TransportError(
                "Backend returned an invalid video record", status_code=response.status_code
            ) from e

    async def create(self, params: VideoCreateParams) -> VideoJob:
        # Every field goes through ``files`` so the body is multipart even without an upload
        fields: list[tuple[str, Any]] = []
        if self._password_hash:
            fields.append(("passwordHash", (None, self._password_hash)))
        fields.extend(
            [
                ("model", (None, params.model)),
                ("prompt", (None, params.prompt)),
                ("size", (None, params.size)),
                ("seconds", (None, params.seconds)),
            ]
        )
        if params.input_reference:
            fields.append(("input_reference", params.input_reference.as_upload()))

        response = await self._send("POST", API_PREFIX, files=fields)
        return self._job(response)

    async def remix(self, video_id: str, prompt: str) -> VideoJob:
        body: dict[str, str] = {"prompt": prompt}
        if self._password_hash:
            body["passwordHash"] = self._password_hash

        response = await self._send("POST", self._video_path(video_id, "/remix"), json=body)
        return self._job(response)

    async def retrieve(self, video_id: str) -> VideoJob:
        response = await self._send("GET", self._video_path(video_id), headers=self._auth_headers())
        return self._job(response)

    async def delete(self, video_id: str) -> None:
        await self._send("DELETE", self._video_path(video_id), headers=self._auth_headers())

    async def download_content(self, video_id: str, variant: ContentVariant) -> bytes:
        query = {"variant": variant}
        if self._password_hash:
            query[PASSWORD_HASH_QUERY_PARAM] = self._password_hash

        response = await self._send(
            "GET",
            self._video_path(video_id, "/content"),
            params=query,
            headers=self._auth_headers(),
        )
        return response.content
