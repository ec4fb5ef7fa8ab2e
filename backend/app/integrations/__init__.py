"""Integrations module for external API providers."""

from .video_jobs import (
    # Client
    VideoJobClient,
    # Config
    DirectConfig,
    ProxyConfig,
    load_client_config,
    # Types
    InputReference,
    VideoJob,
    # Exceptions
    VideoJobError,
    ValidationError,
    ConfigurationError,
    InvalidCredentialError,
    TransportError,
)

__all__ = [
    # Client
    "VideoJobClient",
    # Config
    "DirectConfig",
    "ProxyConfig",
    "load_client_config",
    # Types
    "InputReference",
    "VideoJob",
    # Exceptions
    "VideoJobError",
    "ValidationError",
    "ConfigurationError",
    "InvalidCredentialError",
    "TransportError",
]
