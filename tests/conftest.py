"""
Pytest configuration and fixtures for cloudcli tests.
"""

import json
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cloudcli.profiles import Profile, ProfileStore


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_cloudcli_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a mock ~/.cloudcli directory and point CLOUDCLI_HOME at it."""
    cloudcli_home = temp_dir / ".cloudcli"
    cloudcli_home.mkdir()
    monkeypatch.setenv("CLOUDCLI_HOME", str(cloudcli_home))
    for var in ("CLOUDCLI_PROFILE", "CLOUDCLI_PUBLIC_KEY", "CLOUDCLI_PRIVATE_KEY"):
        monkeypatch.delenv(var, raising=False)
    return cloudcli_home


@pytest.fixture
def settings_path(mock_cloudcli_home: Path) -> Path:
    return mock_cloudcli_home / "config.json"


@pytest.fixture
def credential_path(mock_cloudcli_home: Path) -> Path:
    return mock_cloudcli_home / "credential.json"


@pytest.fixture
def empty_store(settings_path: Path, credential_path: Path) -> ProfileStore:
    """Provide a loaded store backed by two empty files."""
    settings_path.write_text("")
    credential_path.write_text("")
    return ProfileStore.open(settings_path, credential_path)


@pytest.fixture
def write_profile_files(settings_path: Path, credential_path: Path):
    """Write raw settings and credential lists to the backing files."""

    def _write(settings: list[dict], credentials: list[dict]) -> None:
        settings_path.write_text(json.dumps(settings))
        credential_path.write_text(json.dumps(credentials))

    return _write


@pytest.fixture
def sample_profile() -> Profile:
    """Provide a fully populated profile."""
    return Profile(
        name="dev",
        active=True,
        project_id="org-dev",
        region="cn-bj2",
        zone="cn-bj2-05",
        base_url="https://api.example.com/",
        timeout_sec=30,
        public_key="dev-public-key-0123456789",
        private_key="dev-private-key-0123456789",
        max_retry_times=5,
    )
