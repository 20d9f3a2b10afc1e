"""Selection of the profile used by the current invocation."""

import logging

from cloudcli.profiles.exceptions import ProfileNotFoundError
from cloudcli.profiles.masking import LOG_PREFIX_CHARS, LOG_SUFFIX_CHARS, mask_secret
from cloudcli.profiles.models import DEFAULT_PROFILE, Profile
from cloudcli.profiles.store import ProfileStore

logger = logging.getLogger(__name__)


def default_profile() -> Profile:
    """In-memory profile used before any profile has been configured."""
    return Profile(name=DEFAULT_PROFILE, active=True)


def resolve_profile(store: ProfileStore, name: str | None = None) -> Profile:
    """
    Pick the profile for this invocation.

    Resolution order:
    1. The explicitly requested profile
    2. The active profile
    3. An unsaved default profile, when no profile is configured at all

    Args:
        store: Loaded profile store.
        name: Explicitly requested profile name.

    Returns:
        The resolved profile.

    Raises:
        ProfileNotFoundError: If the requested profile does not exist.
        NoActiveProfileError: If profiles exist but none of them is active.
    """
    if name:
        profile = store.get(name)
        if profile is None:
            raise ProfileNotFoundError(name)
    elif len(store) == 0:
        profile = default_profile()
    else:
        profile = store.active_profile()

    masked = profile.model_copy(
        update={
            "public_key": mask_secret(profile.public_key, LOG_PREFIX_CHARS, LOG_SUFFIX_CHARS),
            "private_key": mask_secret(profile.private_key, LOG_PREFIX_CHARS, LOG_SUFFIX_CHARS),
        }
    )
    logger.info(f"Using profile: {masked!r}")
    return profile
