"""Pydantic models for video job requests and results."""

import mimetypes
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

VideoModel = Literal["sora-2", "sora-2-pro"]
ContentVariant = Literal["video", "thumbnail", "spritesheet"]
ApiMode = Literal["provider-direct", "backend-proxy"]

SUPPORTED_MODELS: tuple[str, ...] = ("sora-2", "sora-2-pro")
CONTENT_VARIANTS: tuple[str, ...] = ("video", "thumbnail", "spritesheet")

# Media type served for each downloadable variant
VARIANT_MEDIA_TYPES: dict[str, str] = {
    "video": "video/mp4",
    "thumbnail": "image/webp",
    "spritesheet": "image/jpeg",
}


class InputReference(BaseModel):
    """Binary reference (first frame image or source clip) attached to a create request."""

    filename: str = Field(..., description="File name sent with the upload")
    content: bytes = Field(..., repr=False, description="Raw file bytes")
    mime_type: str = Field(..., description="MIME type of the file")

    @classmethod
    def from_path(cls, path: str | Path, mime_type: str | None = None) -> "InputReference":
        """Read a file from disk, guessing its MIME type from the extension."""
        file_path = Path(path)
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(file_path.name)
        return cls(
            filename=file_path.name,
            content=file_path.read_bytes(),
            mime_type=mime_type or "application/octet-stream",
        )

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    def as_upload(self) -> tuple[str, bytes, str]:
        """Return the (filename, content, mime_type) triple used for multipart uploads."""
        return (self.filename, self.content, self.mime_type)


class VideoCreateParams(BaseModel):
    """Normalized input for a video generation request."""

    model: VideoModel = Field(..., description="Sora model identifier")
    prompt: str = Field(..., min_length=1, description="Text description for the model")
    size: str = Field(..., pattern=r"^[0-9]+x[0-9]+$", description="Resolution as WIDTHxHEIGHT")
    seconds: str = Field(..., description="Duration in seconds, as sent on the wire")
    input_reference: Optional[InputReference] = Field(
        None, description="Optional image or video to start from"
    )


class VideoJobFailure(BaseModel):
    """Failure details reported by the provider for a job."""

    model_config = ConfigDict(extra="allow")

    code: Optional[str] = None
    message: Optional[str] = None


class VideoJob(BaseModel):
    """Provider-owned video job record, passed through unchanged."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Provider's unique video identifier")
    object: str = Field("video", description="Object type")
    model: Optional[str] = Field(None, description="Model that generated the video")
    status: str = Field(
        ..., description="Lifecycle status (queued, in_progress, completed, failed)"
    )
    progress: Optional[int] = Field(None, description="Generation progress percentage")
    created_at: Optional[int] = Field(None, description="Unix timestamp of job creation")
    completed_at: Optional[int] = Field(None, description="Unix timestamp of completion")
    expires_at: Optional[int] = Field(None, description="Unix timestamp when assets expire")
    size: Optional[str] = Field(None, description="Resolution as WIDTHxHEIGHT")
    seconds: Optional[str] = Field(None, description="Duration in seconds")
    remixed_from_video_id: Optional[str] = Field(
        None, description="Source job id when this job is a remix"
    )
    error: Optional[VideoJobFailure] = Field(None, description="Failure details if failed")

    @classmethod
    def from_payload(cls, payload: Any) -> "VideoJob":
        """Build a VideoJob from an SDK object or a decoded JSON body."""
        if hasattr(payload, "model_dump"):
            payload = payload.model_dump()
        return cls.model_validate(payload)
