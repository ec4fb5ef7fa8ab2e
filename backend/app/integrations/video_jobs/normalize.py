"""Input normalization shared by both transport modes.

Every function here is pure and raises ValidationError before any request
is attempted, so switching modes never changes what inputs are accepted.
"""

import re
from typing import Optional

from .exceptions import ValidationError
from .types import CONTENT_VARIANTS, SUPPORTED_MODELS, InputReference

SIZE_PATTERN = re.compile(r"^[0-9]+x[0-9]+$")
DURATION_PATTERN = re.compile(r"^\+?[0-9]+$")

MAX_INPUT_REFERENCE_BYTES = 100 * 1024 * 1024  # 100 MB
INPUT_REFERENCE_MIME_TYPES: tuple[str, ...] = (
    "image/jpeg",
    "image/png",
    "image/webp",
    "video/mp4",
)


def normalize_duration(value: int | float | str) -> str:
    """Parse a duration in seconds and return its canonical string form."""
    if isinstance(value, bool):
        raise ValidationError("duration", f"{value!r}. Duration must be a positive number.")

    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError("duration", f"{value}. Duration must be a whole number of seconds.")
        seconds = int(value)
    elif isinstance(value, int):
        seconds = value
    else:
        text = str(value).strip()
        if not DURATION_PATTERN.fullmatch(text):
            raise ValidationError("duration", f"{value!r}. Duration must be a positive number.")
        seconds = int(text)

    if seconds <= 0:
        raise ValidationError("duration", f"{value!r}. Duration must be a positive number.")
    return str(seconds)


def normalize_size(value: str) -> str:
    """Check a WIDTHxHEIGHT size string. Range checks are left to the provider."""
    if not isinstance(value, str) or not SIZE_PATTERN.fullmatch(value):
        raise ValidationError(
            "video size format",
            f"{value!r}. Must be in format WIDTHxHEIGHT (e.g., 1280x720)",
        )
    return value


def normalize_prompt(value: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("prompt", "prompt must not be empty")
    return value


def normalize_model(value: str) -> str:
    if value not in SUPPORTED_MODELS:
        raise ValidationError(
            "model", f"{value!r}. Supported models: {', '.join(SUPPORTED_MODELS)}"
        )
    return value


def normalize_video_id(value: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("video id", "video id must not be empty")
    return value.strip()


def normalize_variant(value: str) -> str:
    if value not in CONTENT_VARIANTS:
        raise ValidationError(
            "content variant", f"{value!r}. Must be one of: {', '.join(CONTENT_VARIANTS)}"
        )
    return value


def normalize_input_reference(ref: Optional[InputReference]) -> Optional[InputReference]:
    """Enforce the upload limits on an optional input reference."""
    if ref is None:
        return None
    if ref.mime_type not in INPUT_REFERENCE_MIME_TYPES:
        raise ValidationError(
            "input reference",
            f"unsupported file type {ref.mime_type!r}. "
            "Please select a JPEG, PNG, WebP image or MP4 video.",
        )
    if ref.size_bytes == 0:
        raise ValidationError("input reference", f"{ref.filename} is empty")
    if ref.size_bytes > MAX_INPUT_REFERENCE_BYTES:
        size_mb = ref.size_bytes / (1024 * 1024)
        raise ValidationError(
            "input reference",
            f"file size exceeds 100 MB limit. Selected file is {size_mb:.2f} MB.",
        )
    return ref
