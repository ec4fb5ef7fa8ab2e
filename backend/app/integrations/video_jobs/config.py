"""Client configuration for the two transport modes."""

import os
from typing import Annotated, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, TypeAdapter

from .exceptions import ConfigurationError

DEFAULT_BACKEND_URL = "http://localhost:8000"


class DirectConfig(BaseModel):
    """Talk to the OpenAI API directly with a caller-supplied API key."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Literal["provider-direct"] = "provider-direct"
    api_key: Optional[SecretStr] = Field(None, description="OpenAI API key")
    base_url: Optional[str] = Field(None, description="Override for the OpenAI API base URL")


class ProxyConfig(BaseModel):
    """Talk to the trusted backend, which holds the real API key."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Literal["backend-proxy"] = "backend-proxy"
    password_hash: Optional[str] = Field(
        None, description="Hash of the shared password, never the password itself"
    )
    base_url: str = Field(DEFAULT_BACKEND_URL, description="Base URL of the trusted backend")


ClientConfig = Annotated[Union[DirectConfig, ProxyConfig], Field(discriminator="mode")]

_client_config_adapter: TypeAdapter[DirectConfig | ProxyConfig] = TypeAdapter(ClientConfig)


def parse_client_config(data: Mapping[str, object]) -> DirectConfig | ProxyConfig:
    """Validate a mapping into the config variant selected by its ``mode`` key."""
    return _client_config_adapter.validate_python(dict(data))


def load_client_config(env: Mapping[str, str] | None = None) -> DirectConfig | ProxyConfig:
    """
    Build a client config from environment variables.

    Reads VIDEO_API_MODE (default "backend-proxy"). Direct mode uses
    OPENAI_API_KEY and OPENAI_BASE_URL; proxy mode uses VIDEO_PASSWORD_HASH
    and VIDEO_BACKEND_URL.
    """
    if env is None:
        env = os.environ

    mode = env.get("VIDEO_API_MODE", "backend-proxy")
    if mode not in ("provider-direct", "backend-proxy"):
        raise ConfigurationError(
            f"Unsupported VIDEO_API_MODE: {mode!r}. Use 'provider-direct' or 'backend-proxy'."
        )

    if mode == "provider-direct":
        data: dict[str, object] = {
            "mode": mode,
            "api_key": env.get("OPENAI_API_KEY") or None,
            "base_url": env.get("OPENAI_BASE_URL") or None,
        }
    else:
        data = {
            "mode": mode,
            "password_hash": env.get("VIDEO_PASSWORD_HASH") or None,
        }
        if env.get("VIDEO_BACKEND_URL"):
            data["base_url"] = env["VIDEO_BACKEND_URL"]
    return parse_client_config(data)
