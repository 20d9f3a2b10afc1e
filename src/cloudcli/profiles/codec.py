"""
JSON codec for the profile backing files.

Reads and writes the settings list (config.json), the credential list
(credential.json) and the flat legacy configuration.
"""

import json
import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from cloudcli.profiles.exceptions import DecodeError, PersistError, ProfileFilesMissing
from cloudcli.profiles.models import (
    DEFAULT_MAX_RETRY_TIMES,
    LOCAL_FILE_MODE,
    CredentialRecord,
    LegacyConfig,
    SettingsRecord,
)
from cloudcli.storage.paths import ensure_directory

logger = logging.getLogger(__name__)

_settings_adapter = TypeAdapter(list[SettingsRecord])
_credentials_adapter = TypeAdapter(list[CredentialRecord])


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ProfileFilesMissing(path) from e
    except UnicodeDecodeError as e:
        raise DecodeError(path, f"invalid UTF-8: {e}") from e
    except OSError as e:
        raise DecodeError(path, f"cannot read file: {e}") from e


def _decode_list(path: Path, adapter: TypeAdapter) -> list[Any]:
    raw = _read_text(path)
    if not raw.strip():
        return []

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DecodeError(path, f"invalid JSON: {e}") from e

    if data is None:
        return []

    try:
        return adapter.validate_python(data)
    except ValidationError as e:
        raise DecodeError(path, str(e)) from e


def read_settings(path: Path) -> list[SettingsRecord]:
    """
    Read the settings list.

    Records written before max_retry_times existed are given the default
    retry count.

    Raises:
        ProfileFilesMissing: If the file does not exist.
        DecodeError: If the content is not a list of settings records.
    """
    records: list[SettingsRecord] = _decode_list(path, _settings_adapter)
    for record in records:
        if record.max_retry_times is None:
            record.max_retry_times = DEFAULT_MAX_RETRY_TIMES
    return records


def read_credentials(path: Path) -> list[CredentialRecord]:
    """
    Read the credential list.

    Raises:
        ProfileFilesMissing: If the file does not exist.
        DecodeError: If the content is not a list of credential records.
    """
    return _decode_list(path, _credentials_adapter)


def read_legacy_config(path: Path) -> LegacyConfig:
    """
    Read the single-profile configuration of old releases.

    A missing file yields an empty record. Content that is not a legacy object
    is ignored with a warning; it is preserved by the rename that follows
    migration.
    """
    if not path.exists():
        return LegacyConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8") or "{}")
        return LegacyConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        logger.warning(f"Ignoring unreadable legacy config {path}: {e}")
        return LegacyConfig()


def write_json_file(path: Path, payload: Any) -> None:
    """
    Overwrite a file with JSON content, readable and writable by the owner only.

    Raises:
        OSError: If the file cannot be written.
    """
    ensure_directory(path.parent)
    content = json.dumps(payload, indent=2, ensure_ascii=False)

    fd = os.open(path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, LOCAL_FILE_MODE)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(content)

    # os.open only applies the mode when it creates the file
    path.chmod(LOCAL_FILE_MODE)


def _dump_records(records: Sequence[BaseModel]) -> list[dict[str, Any]]:
    return [record.model_dump(by_alias=True) for record in records]


def write_settings(path: Path, records: Sequence[SettingsRecord]) -> None:
    """Overwrite the settings file with the full list of records."""
    write_json_file(path, _dump_records(records))


def write_credentials(path: Path, records: Sequence[CredentialRecord]) -> None:
    """Overwrite the credential file with the full list of records."""
    write_json_file(path, _dump_records(records))


@dataclass
class WriteResults:
    """
    Collects the outcome of several file writes.

    Every write is attempted even when an earlier one failed; the failures are
    raised together afterwards.
    """

    failures: dict[Path, OSError] = field(default_factory=dict)

    def attempt(self, path: Path, write: Callable[[Path, Any], None], payload: Any) -> bool:
        try:
            write(path, payload)
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            self.failures[path] = e
            return False
        logger.debug(f"Wrote {path}")
        return True

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        if self.failures:
            raise PersistError(dict(self.failures))
