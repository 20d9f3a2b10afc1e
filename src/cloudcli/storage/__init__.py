"""Storage utilities for cloudcli."""

from cloudcli.storage.paths import (
    ensure_directory,
    get_cloudcli_home,
    get_credential_path,
    get_legacy_backup_path,
    get_legacy_config_path,
    get_settings_path,
)

__all__ = [
    "ensure_directory",
    "get_cloudcli_home",
    "get_credential_path",
    "get_legacy_backup_path",
    "get_legacy_config_path",
    "get_settings_path",
]
