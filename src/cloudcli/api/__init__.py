"""API client configuration built from profiles."""

from cloudcli.api.config import (
    USER_AGENT,
    ClientConfig,
    Credential,
    build_client_config,
    build_credential,
)

__all__ = [
    "USER_AGENT",
    "ClientConfig",
    "Credential",
    "build_client_config",
    "build_credential",
]
