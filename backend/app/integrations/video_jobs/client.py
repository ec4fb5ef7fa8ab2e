"""Video job client that serves every operation through the transport for its mode."""

import logging

from .config import DirectConfig, ProxyConfig
from .exceptions import ConfigurationError
from .normalize import (
    normalize_duration,
    normalize_input_reference,
    normalize_model,
    normalize_prompt,
    normalize_size,
    normalize_variant,
    normalize_video_id,
)
from .transports import DirectTransport, ProxyTransport, VideoTransport
from .types import ContentVariant, InputReference, VideoCreateParams, VideoJob

logger = logging.getLogger(__name__)


class VideoJobClient:
    """
    Client for creating and managing Sora video jobs.

    Talks to the OpenAI API directly (provider-direct mode) or through the
    trusted backend (backend-proxy mode). Inputs are validated the same way
    in both modes, and both modes return the same shapes.
    """

    def __init__(
        self,
        config: DirectConfig | ProxyConfig,
        transport: VideoTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: DirectConfig or ProxyConfig selecting the mode and its credential.
            transport: Optional transport to use instead of the one built from config.
        """
        self.config = config
        self._transport = transport

    @property
    def mode(self) -> str:
        return self.config.mode

    def _get_transport(self) -> VideoTransport:
        """Get or create the transport for the configured mode."""
        if self._transport is None:
            if isinstance(self.config, DirectConfig):
                self._transport = DirectTransport(
                    api_key=self.config.api_key,
                    base_url=self.config.base_url,
                )
            elif isinstance(self.config, ProxyConfig):
                self._transport = ProxyTransport(
                    base_url=self.config.base_url,
                    password_hash=self.config.password_hash,
                )
            else:
                raise ConfigurationError(f"Unsupported client mode: {self.config.mode}")
        return self._transport

    async def create_video(
        self,
        model: str,
        prompt: str,
        size: str,
        seconds: int | str,
        input_reference: InputReference | None = None,
    ) -> VideoJob:
        """
        Submit a new video generation.

        Args:
            model: "sora-2" or "sora-2-pro"
            prompt: Text description of the video
            size: Resolution as WIDTHxHEIGHT, e.g. "1280x720"
            seconds: Positive duration in seconds, as a number or numeric string
            input_reference: Optional image or video to start from

        Returns:
            VideoJob with its initial status

        Example:
            client = VideoJobClient(ProxyConfig(password_hash=hash_password("secret")))
            job = await client.create_video("sora-2", "A cat walking", "1280x720", 8)
        """
        params = VideoCreateParams(
            model=normalize_model(model),
            prompt=normalize_prompt(prompt),
            size=normalize_size(size),
            seconds=normalize_duration(seconds),
            input_reference=normalize_input_reference(input_reference),
        )

        transport = self._get_transport()
        logger.info(
            "[CREATE] mode=%s model=%s size=%s seconds=%s reference=%s",
            self.mode,
            params.model,
            params.size,
            params.seconds,
            params.input_reference is not None,
        )
        job = await transport.create(params)
        logger.info("[CREATE] video_id=%s status=%s", job.id, job.status)
        return job

    async def remix_video(self, video_id: str, prompt: str) -> VideoJob:
        """Submit a remix of a completed video with a new prompt."""
        video_id = normalize_video_id(video_id)
        prompt = normalize_prompt(prompt)

        transport = self._get_transport()
        logger.info("[REMIX] mode=%s source_video_id=%s", self.mode, video_id)
        return await transport.remix(video_id, prompt)

    async def retrieve_video(self, video_id: str) -> VideoJob:
        video_id = normalize_video_id(video_id)
        transport = self._get_transport()
        return await transport.retrieve(video_id)

    async def delete_video(self, video_id: str) -> None:
        video_id = normalize_video_id(video_id)
        transport = self._get_transport()
        logger.info("[DELETE] mode=%s video_id=%s", self.mode, video_id)
        await transport.delete(video_id)

    async def download_content(
        self,
        video_id: str,
        variant: ContentVariant = "video",
    ) -> bytes:
        """
        Download a binary asset of a completed video.

        Args:
            video_id: The provider's unique video identifier
            variant: "video" (default), "thumbnail" or "spritesheet"

        Returns:
            The asset bytes
        """
        video_id = normalize_video_id(video_id)
        variant = normalize_variant(variant)

        transport = self._get_transport()
        logger.info("[DOWNLOAD] mode=%s video_id=%s variant=%s", self.mode, video_id, variant)
        return await transport.download_content(video_id, variant)
