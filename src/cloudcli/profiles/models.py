"""
Profile data models for cloudcli.

Settings and credential records are the on-disk shapes; a Profile is the
in-memory join of the two, keyed by profile name.
"""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PROFILE = "default"
DEFAULT_BASE_URL = "https://api.ucloud.cn/"
DEFAULT_TIMEOUT_SEC = 15
# Releases before max_retry_times existed retried a hard-coded three times
DEFAULT_MAX_RETRY_TIMES = 3

# Owner read/write only, the credential file holds private keys
LOCAL_FILE_MODE = 0o600


class SettingsRecord(BaseModel):
    """Non-secret settings of one profile, as stored in config.json."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    project_id: str = ""
    region: str = ""
    zone: str = ""
    base_url: str = ""
    timeout_sec: int = 0
    name: str = Field(alias="profile", min_length=1)
    active: bool = False
    max_retry_times: int | None = None


class CredentialRecord(BaseModel):
    """Key pair of one profile, as stored in credential.json."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    public_key: str = ""
    private_key: str = ""
    name: str = Field(alias="profile", min_length=1)


class LegacyConfig(BaseModel):
    """Flat single-profile configuration written by old releases."""

    model_config = ConfigDict(extra="ignore")

    public_key: str = ""
    private_key: str = ""
    region: str = ""
    zone: str = ""
    project_id: str = ""


class Profile(BaseModel):
    """A named bundle of connection settings and credentials."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    name: str = Field(alias="profile", min_length=1)
    active: bool = False
    project_id: str = ""
    region: str = ""
    zone: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout_sec: int = DEFAULT_TIMEOUT_SEC
    public_key: str = ""
    private_key: str = ""
    max_retry_times: int = DEFAULT_MAX_RETRY_TIMES

    @classmethod
    def from_records(cls, settings: SettingsRecord, credential: CredentialRecord) -> "Profile":
        """Join a settings record with the credential record of the same name."""
        return cls(
            name=settings.name,
            active=settings.active,
            project_id=settings.project_id,
            region=settings.region,
            zone=settings.zone,
            base_url=settings.base_url,
            timeout_sec=settings.timeout_sec,
            public_key=credential.public_key,
            private_key=credential.private_key,
            max_retry_times=(
                settings.max_retry_times
                if settings.max_retry_times is not None
                else DEFAULT_MAX_RETRY_TIMES
            ),
        )

    def to_settings(self) -> SettingsRecord:
        return SettingsRecord(
            name=self.name,
            active=self.active,
            project_id=self.project_id,
            region=self.region,
            zone=self.zone,
            base_url=self.base_url,
            timeout_sec=self.timeout_sec,
            max_retry_times=self.max_retry_times,
        )

    def to_credential(self) -> CredentialRecord:
        return CredentialRecord(
            name=self.name,
            public_key=self.public_key,
            private_key=self.private_key,
        )

    def has_keys(self) -> bool:
        """Check whether both halves of the key pair are set."""
        return bool(self.public_key and self.private_key)
