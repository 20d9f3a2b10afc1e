"""
cloudcli profiles.

Named connection profiles persisted in config.json and credential.json.
"""

from cloudcli.profiles.exceptions import (
    CannotDeleteActiveError,
    DecodeError,
    DuplicateProfileError,
    MigrationError,
    MissingCredentialError,
    NoActiveProfileError,
    PersistError,
    ProfileError,
    ProfileFilesMissing,
    ProfileNotFoundError,
)
from cloudcli.profiles.masking import mask_secret
from cloudcli.profiles.migration import MigrationResult, MigrationStatus, migrate_legacy_config
from cloudcli.profiles.models import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_RETRY_TIMES,
    DEFAULT_PROFILE,
    DEFAULT_TIMEOUT_SEC,
    CredentialRecord,
    LegacyConfig,
    Profile,
    SettingsRecord,
)
from cloudcli.profiles.resolver import resolve_profile
from cloudcli.profiles.store import ProfileStore

__all__ = [
    # Models
    "CredentialRecord",
    "LegacyConfig",
    "Profile",
    "SettingsRecord",
    "DEFAULT_BASE_URL",
    "DEFAULT_MAX_RETRY_TIMES",
    "DEFAULT_PROFILE",
    "DEFAULT_TIMEOUT_SEC",
    # Store
    "ProfileStore",
    "resolve_profile",
    "mask_secret",
    # Migration
    "MigrationResult",
    "MigrationStatus",
    "migrate_legacy_config",
    # Exceptions
    "CannotDeleteActiveError",
    "DecodeError",
    "DuplicateProfileError",
    "MigrationError",
    "MissingCredentialError",
    "NoActiveProfileError",
    "PersistError",
    "ProfileError",
    "ProfileFilesMissing",
    "ProfileNotFoundError",
]
