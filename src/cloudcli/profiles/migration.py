"""
One-time adoption of the single-profile configuration of old releases.

Old releases kept one flat JSON object (keys, region, zone, project) in
config.json. On first run of a multi-profile release that object becomes the
active "default" profile and the old file is kept as config.json.old.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from cloudcli.profiles.codec import read_legacy_config
from cloudcli.profiles.exceptions import MigrationError, ProfileError
from cloudcli.profiles.masking import LOG_PREFIX_CHARS, LOG_SUFFIX_CHARS, mask_secret
from cloudcli.profiles.models import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_RETRY_TIMES,
    DEFAULT_PROFILE,
    DEFAULT_TIMEOUT_SEC,
    LegacyConfig,
    Profile,
)
from cloudcli.storage.paths import get_legacy_backup_path

if TYPE_CHECKING:
    from cloudcli.profiles.store import ProfileStore

logger = logging.getLogger(__name__)


class MigrationStatus(Enum):
    """Outcome of a legacy migration attempt."""

    MIGRATED = "migrated"
    NOT_NEEDED = "not_needed"
    FAILED = "failed"


@dataclass
class MigrationResult:
    """Result of migrate_legacy_config."""

    status: MigrationStatus
    profile: Profile | None = None
    error: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.status is MigrationStatus.FAILED


def needs_migration(settings_path: Path, credential_path: Path) -> bool:
    """Migration runs only while either multi-profile file is missing."""
    return not (settings_path.exists() and credential_path.exists())


def build_default_profile(legacy: LegacyConfig) -> Profile:
    """Build the active default profile from a legacy record."""
    return Profile(
        name=DEFAULT_PROFILE,
        active=True,
        project_id=legacy.project_id,
        region=legacy.region,
        zone=legacy.zone,
        base_url=DEFAULT_BASE_URL,
        timeout_sec=DEFAULT_TIMEOUT_SEC,
        public_key=legacy.public_key,
        private_key=legacy.private_key,
        max_retry_times=DEFAULT_MAX_RETRY_TIMES,
    )


def migrate_legacy_config(store: "ProfileStore", legacy_path: Path) -> MigrationResult:
    """
    Adopt the legacy single-profile configuration into the store.

    The legacy file is renamed with a .old suffix before the default profile
    is appended, so a later run never migrates again. A missing legacy file
    yields a default profile with empty values. An existing credential file
    without its settings file is never overwritten; that case fails.

    Args:
        store: Store to append the default profile to. Its backing files are
            written by the append.
        legacy_path: Location of the legacy configuration file.

    Returns:
        MigrationResult; FAILED carries the rename or append error, or the
        MigrationError for a credential file left without settings.
    """
    if not needs_migration(store.settings_path, store.credential_path):
        logger.debug("Profile files exist, legacy migration not needed")
        return MigrationResult(MigrationStatus.NOT_NEEDED)

    if store.credential_path.exists():
        error = MigrationError(
            f"{store.credential_path} exists without {store.settings_path}, "
            "refusing to overwrite stored keys"
        )
        logger.error(str(error))
        return MigrationResult(MigrationStatus.FAILED, error=error)

    try:
        legacy = read_legacy_config(legacy_path)
    except OSError as e:
        logger.error(f"Cannot read legacy config {legacy_path}: {e}")
        return MigrationResult(MigrationStatus.FAILED, error=e)

    profile = build_default_profile(legacy)

    if legacy_path.exists():
        backup_path = get_legacy_backup_path(legacy_path)
        try:
            legacy_path.rename(backup_path)
        except OSError as e:
            logger.error(f"Cannot rename legacy config {legacy_path}: {e}")
            return MigrationResult(MigrationStatus.FAILED, profile=profile, error=e)
        logger.info(f"Legacy config moved to {backup_path}")

    try:
        store.append(profile)
    except ProfileError as e:
        logger.error(f"Cannot save migrated profile '{profile.name}': {e}")
        return MigrationResult(MigrationStatus.FAILED, profile=profile, error=e)

    logger.info(
        f"Migrated legacy config to profile '{profile.name}' "
        f"(public key {mask_secret(profile.public_key, LOG_PREFIX_CHARS, LOG_SUFFIX_CHARS)})"
    )
    return MigrationResult(MigrationStatus.MIGRATED, profile=profile)
