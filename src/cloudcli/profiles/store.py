"""
Profile store for cloudcli.

Holds every configured profile in memory, tracks the active one and flushes
each change to the settings and credential files.

The store assumes one process at a time: there is no cross-process locking,
and a crash between the two file writes can leave one file stale.
"""

import logging
from pathlib import Path

from cloudcli.profiles.codec import (
    WriteResults,
    read_credentials,
    read_settings,
    write_credentials,
    write_settings,
)
from cloudcli.profiles.exceptions import (
    CannotDeleteActiveError,
    DuplicateProfileError,
    MigrationError,
    MissingCredentialError,
    NoActiveProfileError,
    ProfileError,
    ProfileFilesMissing,
    ProfileNotFoundError,
)
from cloudcli.profiles.migration import migrate_legacy_config
from cloudcli.profiles.models import Profile, SettingsRecord
from cloudcli.storage.paths import (
    get_credential_path,
    get_legacy_config_path,
    get_settings_path,
)

logger = logging.getLogger(__name__)


class ProfileStore:
    """
    Named profiles joined from the settings and credential files.

    At most one profile is active at a time, and exactly one while the store
    is not empty. Every mutation rewrites both files.
    """

    def __init__(self, settings_path: Path, credential_path: Path):
        """
        Create an empty store bound to its backing files.

        Use ProfileStore.open() to create a store populated from disk.

        Args:
            settings_path: JSON list of settings records.
            credential_path: JSON list of credential records.
        """
        self.settings_path = Path(settings_path)
        self.credential_path = Path(credential_path)
        self._profiles: dict[str, Profile] = {}
        self._active_name = ""

    @classmethod
    def open(
        cls,
        settings_path: Path | None = None,
        credential_path: Path | None = None,
        legacy_path: Path | None = None,
    ) -> "ProfileStore":
        """
        Create a store and load it from disk.

        When the backing files do not exist yet, the legacy single-profile
        configuration is migrated and loading is retried once.

        Args:
            settings_path: Defaults to ~/.cloudcli/config.json
            credential_path: Defaults to ~/.cloudcli/credential.json
            legacy_path: Defaults to ~/.cloudcli/config.json

        Returns:
            Loaded ProfileStore.

        Raises:
            DecodeError: If a backing file is malformed.
            NoActiveProfileError: If profiles exist but none is active.
            MissingCredentialError: If the active profile has no credential.
            MigrationError: If migration or the reload after it fails.
        """
        store = cls(
            settings_path or get_settings_path(),
            credential_path or get_credential_path(),
        )
        try:
            store.load()
        except ProfileFilesMissing as e:
            logger.info(f"{e}, migrating legacy config")
            result = migrate_legacy_config(store, legacy_path or get_legacy_config_path())
            if result.failed:
                raise MigrationError(f"Adapt to old config failed: {result.error}") from result.error

            try:
                store.load()
            except (ProfileError, ProfileFilesMissing) as retry_error:
                raise MigrationError(
                    f"Retry to load profiles failed: {retry_error}"
                ) from retry_error

        return store

    def load(self) -> None:
        """
        Replace the in-memory profiles with the content of the backing files.

        A settings record without a matching credential record is skipped
        with a warning, unless it is the active one.

        Raises:
            ProfileFilesMissing: If either file does not exist.
            DecodeError: If either file is malformed.
            NoActiveProfileError: If settings exist but none is active.
            MissingCredentialError: If the active profile has no credential.
        """
        for path in (self.settings_path, self.credential_path):
            if not path.exists():
                raise ProfileFilesMissing(path)

        settings = read_settings(self.settings_path)
        credentials = read_credentials(self.credential_path)

        settings_map: dict[str, SettingsRecord] = {}
        active_name = ""
        for record in settings:
            settings_map[record.name] = record
            if record.active:
                active_name = record.name

        credential_map = {record.name: record for record in credentials}

        profiles: dict[str, Profile] = {}
        for name, record in settings_map.items():
            credential = credential_map.get(name)
            if credential is None:
                logger.warning(f"Profile '{name}' has no credential, skipping it")
                continue
            profiles[name] = Profile.from_records(record, credential)

        if not active_name and settings_map:
            raise NoActiveProfileError()
        if active_name and active_name not in credential_map:
            raise MissingCredentialError(active_name)

        # A hand-edited file may flag several profiles; the last one wins
        for name, profile in profiles.items():
            if profile.active and name != active_name:
                logger.warning(f"Profile '{name}' is also flagged active, deactivating it")
                profile.active = False

        self._profiles = profiles
        self._active_name = active_name
        logger.debug(f"Loaded {len(profiles)} profile(s), active: '{active_name}'")

    def persist(self) -> None:
        """
        Write every profile to the settings and credential files.

        Both files are written even if the first write fails.

        Raises:
            PersistError: Naming every file that could not be written. The
                in-memory state is kept as is.
        """
        settings = [profile.to_settings() for profile in self._profiles.values()]
        credentials = [profile.to_credential() for profile in self._profiles.values()]

        results = WriteResults()
        results.attempt(self.settings_path, write_settings, settings)
        results.attempt(self.credential_path, write_credentials, credentials)
        results.raise_for_failures()

    def append(self, profile: Profile) -> None:
        """
        Add a new profile and persist.

        If the new profile is active, the previously active profile is
        deactivated. The first profile of an empty store becomes active.
        The store keeps its own copy of the profile.

        Raises:
            DuplicateProfileError: If the name is already taken.
            PersistError: If writing the backing files fails.
        """
        if profile.name in self._profiles:
            raise DuplicateProfileError(profile.name)

        profile = profile.model_copy()
        self._hand_off(profile)
        self._profiles[profile.name] = profile
        self.persist()

    def update(self, profile: Profile) -> None:
        """
        Replace the profile of the same name, or append it if unknown.

        Raises:
            NoActiveProfileError: If the update would deactivate the active
                profile without activating another one.
            PersistError: If writing the backing files fails.
        """
        current = self._profiles.get(profile.name)
        if current is None:
            self.append(profile)
            return

        if profile.name == self._active_name and not profile.active:
            raise NoActiveProfileError(
                f"Profile '{profile.name}' is active, switch to another profile to deactivate it"
            )

        profile = profile.model_copy()
        self._hand_off(profile)
        self._profiles[profile.name] = profile
        self.persist()

    def switch_active(self, name: str) -> Profile:
        """
        Make the named profile the active one and persist.

        Returns:
            The newly active profile.

        Raises:
            ProfileNotFoundError: If no profile has that name.
            PersistError: If writing the backing files fails.
        """
        current = self._profiles.get(name)
        if current is None:
            raise ProfileNotFoundError(name)

        activated = current.model_copy(update={"active": True})
        self.update(activated)
        return activated

    def delete(self, name: str) -> None:
        """
        Remove a profile and persist.

        Raises:
            ProfileNotFoundError: If no profile has that name.
            CannotDeleteActiveError: If the profile is the active one.
            PersistError: If writing the backing files fails.
        """
        profile = self._profiles.get(name)
        if profile is None:
            raise ProfileNotFoundError(name)
        if profile.active:
            raise CannotDeleteActiveError(name)

        del self._profiles[name]
        self.persist()

    def profile_names(self) -> list[str]:
        """Names of all profiles, used for shell completion."""
        return list(self._profiles)

    def profiles(self) -> list[Profile]:
        """
        Copies of all profiles.

        The copies carry the private keys in clear; mask them before output.
        """
        return [profile.model_copy() for profile in self._profiles.values()]

    def get(self, name: str) -> Profile | None:
        """Return a copy of the named profile, or None if it does not exist."""
        profile = self._profiles.get(name)
        return profile.model_copy() if profile is not None else None

    def active_profile(self) -> Profile:
        """
        Return a copy of the active profile.

        Raises:
            NoActiveProfileError: If no profile is active.
        """
        profile = self._profiles.get(self._active_name)
        if profile is None:
            raise NoActiveProfileError(
                "Active profile not found, run 'cloudcli profile list' to check"
            )
        return profile.model_copy()

    def active_profile_name(self) -> str:
        """Name of the active profile, or an empty string if there is none."""
        if self._active_name in self._profiles:
            return self._active_name
        return ""

    def _hand_off(self, profile: Profile) -> None:
        if self.active_profile_name() == "" and not profile.active:
            logger.info(f"No active profile yet, activating '{profile.name}'")
            profile.active = True

        if profile.active and profile.name != self._active_name:
            previous = self._profiles.get(self._active_name)
            if previous is not None:
                previous.active = False
                logger.debug(f"Deactivated profile '{previous.name}'")
            self._active_name = profile.name

    def __contains__(self, name: object) -> bool:
        return name in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def __repr__(self) -> str:
        return f"ProfileStore(profiles={self.profile_names()!r}, active={self._active_name!r})"
