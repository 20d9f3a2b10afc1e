"""
API client configuration for cloudcli.

Turns a resolved profile into the configuration and credential pair handed to
the API client.
"""

from typing import Literal

from pydantic import BaseModel, Field

from cloudcli import __version__
from cloudcli.profiles.models import Profile

USER_AGENT = f"cloudcli/{__version__}"


class ClientConfig(BaseModel):
    """Connection settings for the API client."""

    region: str = ""
    project_id: str = ""
    base_url: str
    timeout_sec: int
    user_agent: str = USER_AGENT
    max_retries: int
    log_level: Literal["fatal", "debug"] = "fatal"


class Credential(BaseModel):
    """Key pair used to sign API requests."""

    public_key: str = ""
    private_key: str = Field(default="", repr=False)


def build_client_config(profile: Profile, debug: bool = False) -> ClientConfig:
    """
    Build the client configuration for a profile.

    Args:
        profile: Resolved profile.
        debug: Log every request and response of the API client.

    Returns:
        ClientConfig for the API client.
    """
    return ClientConfig(
        region=profile.region,
        project_id=profile.project_id,
        base_url=profile.base_url,
        timeout_sec=profile.timeout_sec,
        max_retries=profile.max_retry_times,
        log_level="debug" if debug else "fatal",
    )


def build_credential(
    profile: Profile,
    public_key: str | None = None,
    private_key: str | None = None,
) -> Credential:
    """
    Build the credential pair for a profile.

    Keys given on the command line or in the environment take precedence over
    the profile's keys, but only when both halves are given.

    Args:
        profile: Resolved profile.
        public_key: Override public key.
        private_key: Override private key.

    Returns:
        Credential for the API client.
    """
    if public_key and private_key:
        return Credential(public_key=public_key, private_key=private_key)
    return Credential(public_key=profile.public_key, private_key=profile.private_key)
