"""Abstract base class for video job transports."""

from abc import ABC, abstractmethod

from ..types import ContentVariant, VideoCreateParams, VideoJob


class VideoTransport(ABC):
    """One way of reaching the video API. Implemented once per client mode."""

    mode: str = "base"

    @abstractmethod
    async def create(self, params: VideoCreateParams) -> VideoJob:
        """
        Submit a new video generation.

        Args:
            params: Normalized create parameters

        Returns:
            VideoJob with its initial status (usually 'queued')
        """
        ...

    @abstractmethod
    async def remix(self, video_id: str, prompt: str) -> VideoJob:
        """
        Submit a derivative generation based on an existing video.

        Args:
            video_id: Id of the completed source video
            prompt: Description of the change to apply

        Returns:
            VideoJob for the new remix generation
        """
        ...

    @abstractmethod
    async def retrieve(self, video_id: str) -> VideoJob:
        """Fetch the current state of a video job."""
        ...

    @abstractmethod
    async def delete(self, video_id: str) -> None:
        """Delete a video job and its assets remotely."""
        ...

    @abstractmethod
    async def download_content(self, video_id: str, variant: ContentVariant) -> bytes:
        """
        Download one binary asset of a completed video.

        Args:
            video_id: The provider's unique video identifier
            variant: Which asset to fetch (video, thumbnail or spritesheet)

        Returns:
            The raw asset bytes
        """
        ...
