"""
Profile store exceptions for cloudcli.

Every error raised by the profile store derives from ProfileError so the CLI
can report it in one place.
"""

from pathlib import Path


class ProfileError(Exception):
    """Base exception for profile-related errors."""

    pass


class DecodeError(ProfileError):
    """A backing file holds content that cannot be decoded."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Cannot decode {path}: {reason}")
        self.path = path
        self.reason = reason


class NoActiveProfileError(ProfileError):
    """No profile is flagged active where one is required."""

    def __init__(self, message: str = "No active profile found, run 'cloudcli profile list' to check"):
        super().__init__(message)


class MissingCredentialError(ProfileError):
    """The active profile has no matching credential record."""

    def __init__(self, profile: str):
        super().__init__(
            f"Credential of profile '{profile}' does not exist, "
            "run 'cloudcli profile list' to check"
        )
        self.profile = profile


class DuplicateProfileError(ProfileError):
    """A profile with the same name already exists."""

    def __init__(self, profile: str):
        super().__init__(f"Profile '{profile}' already exists")
        self.profile = profile


class ProfileNotFoundError(ProfileError):
    """The named profile does not exist."""

    def __init__(self, profile: str):
        super().__init__(f"Profile '{profile}' does not exist")
        self.profile = profile


class CannotDeleteActiveError(ProfileError):
    """The active profile cannot be deleted while it is active."""

    def __init__(self, profile: str):
        super().__init__(
            f"Cannot delete active profile '{profile}', switch to another profile first"
        )
        self.profile = profile


class PersistError(ProfileError):
    """Writing one or both backing files failed.

    The in-memory store keeps its mutated state; disk and memory have diverged.
    """

    def __init__(self, failures: dict[Path, OSError]):
        details = " | ".join(f"save {path} failed: {error}" for path, error in failures.items())
        super().__init__(details)
        self.failures = failures


class MigrationError(ProfileError):
    """Adopting the legacy configuration, or reloading after it, failed."""

    pass


class ProfileFilesMissing(FileNotFoundError):
    """The settings or credential file does not exist yet (first run)."""

    def __init__(self, path: Path):
        super().__init__(f"Profile file not found: {path}")
        self.path = path
