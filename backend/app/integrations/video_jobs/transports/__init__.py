"""Video job transport implementations, one per client mode."""

from .base import VideoTransport
from .direct import DirectTransport, translate_provider_error
from .proxy import ProxyTransport, error_message_from_response

__all__ = [
    "VideoTransport",
    "DirectTransport",
    "ProxyTransport",
    "translate_provider_error",
    "error_message_from_response",
]
