"""Video job module with one interface over direct and backend-proxied Sora access."""

from .client import VideoJobClient
from .config import ClientConfig, DirectConfig, ProxyConfig, load_client_config, parse_client_config
from .credentials import hash_password, password_hash_matches
from .exceptions import (
    ConfigurationError,
    InvalidCredentialError,
    TransportError,
    ValidationError,
    VideoJobError,
)
from .normalize import normalize_duration, normalize_size
from .transports import DirectTransport, ProxyTransport, VideoTransport
from .types import (
    ApiMode,
    ContentVariant,
    InputReference,
    VideoCreateParams,
    VideoJob,
    VideoJobFailure,
    VideoModel,
)

__all__ = [
    # Client
    "VideoJobClient",
    # Config
    "ClientConfig",
    "DirectConfig",
    "ProxyConfig",
    "load_client_config",
    "parse_client_config",
    "hash_password",
    "password_hash_matches",
    # Transports
    "VideoTransport",
    "DirectTransport",
    "ProxyTransport",
    # Normalization
    "normalize_duration",
    "normalize_size",
    # Types
    "ApiMode",
    "ContentVariant",
    "InputReference",
    "VideoCreateParams",
    "VideoJob",
    "VideoJobFailure",
    "VideoModel",
    # Exceptions
    "VideoJobError",
    "ValidationError",
    "ConfigurationError",
    "InvalidCredentialError",
    "TransportError",
]
