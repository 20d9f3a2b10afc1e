"""
Path utilities for cloudcli.

Provides consistent path resolution for the settings, credential and legacy
configuration files.
"""

import os
from pathlib import Path

SETTINGS_FILE_NAME = "config.json"
CREDENTIAL_FILE_NAME = "credential.json"
LEGACY_BACKUP_SUFFIX = ".old"


def get_cloudcli_home() -> Path:
    """
    Get the cloudcli configuration directory.

    Resolution order:
    1. CLOUDCLI_HOME environment variable
    2. Default: ~/.cloudcli

    Returns:
        Path to the cloudcli configuration directory.
    """
    env_home = os.environ.get("CLOUDCLI_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".cloudcli"


def get_settings_path() -> Path:
    """
    Get the path to the profile settings file.

    Returns:
        Path to ~/.cloudcli/config.json
    """
    return get_cloudcli_home() / SETTINGS_FILE_NAME


def get_credential_path() -> Path:
    """
    Get the path to the profile credential file.

    Returns:
        Path to ~/.cloudcli/credential.json
    """
    return get_cloudcli_home() / CREDENTIAL_FILE_NAME


def get_legacy_config_path() -> Path:
    """
    Get the path of the single-profile configuration written by old releases.

    Old releases kept one flat JSON object in config.json, the same file name
    the settings list uses now.

    Returns:
        Path to ~/.cloudcli/config.json
    """
    return get_cloudcli_home() / SETTINGS_FILE_NAME


def get_legacy_backup_path(legacy_path: Path) -> Path:
    """Path the legacy file is renamed to once migrated."""
    return legacy_path.with_name(legacy_path.name + LEGACY_BACKUP_SUFFIX)


def ensure_directory(path: Path, mode: int = 0o700) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path.
        mode: Permission mode for created directories.

    Returns:
        The path (for chaining).
    """
    path.mkdir(parents=True, exist_ok=True, mode=mode)
    return path
