"""
Unit tests for the profile store.
"""

import json
import logging

import pytest

from cloudcli.profiles import (
    DEFAULT_MAX_RETRY_TIMES,
    CannotDeleteActiveError,
    DecodeError,
    DuplicateProfileError,
    MissingCredentialError,
    NoActiveProfileError,
    PersistError,
    Profile,
    ProfileFilesMissing,
    ProfileNotFoundError,
    ProfileStore,
)


def _active_names(store: ProfileStore) -> list[str]:
    return [profile.name for profile in store.profiles() if profile.active]


# =============================================================================
# Load Tests
# =============================================================================


class TestLoad:
    """Tests for building the store from disk."""

    def test_empty_files_load_no_profiles(self, empty_store):
        assert len(empty_store) == 0
        assert empty_store.profile_names() == []
        assert empty_store.active_profile_name() == ""

    def test_joins_settings_and_credentials(self, write_profile_files, settings_path, credential_path):
        write_profile_files(
            [{"profile": "a", "active": True, "region": "cn-bj2", "max_retry_times": 4}],
            [{"profile": "a", "public_key": "pk", "private_key": "sk"}],
        )

        store = ProfileStore.open(settings_path, credential_path)

        profile = store.get("a")
        assert profile is not None
        assert profile.region == "cn-bj2"
        assert profile.public_key == "pk"
        assert profile.private_key == "sk"
        assert profile.max_retry_times == 4
        assert store.active_profile_name() == "a"

    def test_backfills_retry_count(self, write_profile_files, settings_path, credential_path):
        write_profile_files(
            [{"profile": "a", "active": True}],
            [{"profile": "a", "public_key": "pk", "private_key": "sk"}],
        )

        store = ProfileStore.open(settings_path, credential_path)

        assert store.active_profile().max_retry_times == DEFAULT_MAX_RETRY_TIMES

    def test_no_active_profile(self, write_profile_files, settings_path, credential_path):
        write_profile_files(
            [{"profile": "a", "active": False}],
            [{"profile": "a", "public_key": "pk", "private_key": "sk"}],
        )

        with pytest.raises(NoActiveProfileError):
            ProfileStore.open(settings_path, credential_path)

    def test_active_profile_without_credential(
        self, write_profile_files, settings_path, credential_path
    ):
        """B would join fine, but the active A has no credential."""
        write_profile_files(
            [{"profile": "A", "active": True}, {"profile": "B", "active": False}],
            [{"profile": "B", "public_key": "pk", "private_key": "sk"}],
        )

        with pytest.raises(MissingCredentialError) as exc_info:
            ProfileStore.open(settings_path, credential_path)

        assert exc_info.value.profile == "A"

    def test_inactive_profile_without_credential_is_skipped(
        self, write_profile_files, settings_path, credential_path, caplog
    ):
        write_profile_files(
            [{"profile": "A", "active": True}, {"profile": "B", "active": False}],
            [{"profile": "A", "public_key": "pk", "private_key": "sk"}],
        )

        with caplog.at_level(logging.WARNING):
            store = ProfileStore.open(settings_path, credential_path)

        assert store.profile_names() == ["A"]
        assert "B" in caplog.text

    def test_several_active_flags_keep_the_last(
        self, write_profile_files, settings_path, credential_path
    ):
        write_profile_files(
            [{"profile": "a", "active": True}, {"profile": "b", "active": True}],
            [
                {"profile": "a", "public_key": "pk", "private_key": "sk"},
                {"profile": "b", "public_key": "pk", "private_key": "sk"},
            ],
        )

        store = ProfileStore.open(settings_path, credential_path)

        assert _active_names(store) == ["b"]

    def test_malformed_file(self, settings_path, credential_path):
        settings_path.write_text("not json")
        credential_path.write_text("")

        with pytest.raises(DecodeError):
            ProfileStore.open(settings_path, credential_path)

    def test_load_reports_missing_files(self, settings_path, credential_path):
        store = ProfileStore(settings_path, credential_path)

        with pytest.raises(ProfileFilesMissing):
            store.load()


# =============================================================================
# Mutation Tests
# =============================================================================


class TestAppend:
    """Tests for ProfileStore.append."""

    def test_append_persists(self, empty_store, sample_profile, settings_path, credential_path):
        empty_store.append(sample_profile)

        settings = json.loads(settings_path.read_text())
        credentials = json.loads(credential_path.read_text())
        assert [item["profile"] for item in settings] == ["dev"]
        assert credentials == [
            {
                "public_key": sample_profile.public_key,
                "private_key": sample_profile.private_key,
                "profile": "dev",
            }
        ]

    def test_duplicate_name(self, empty_store, sample_profile):
        empty_store.append(sample_profile)

        with pytest.raises(DuplicateProfileError):
            empty_store.append(Profile(name="dev"))

        assert len(empty_store) == 1

    def test_active_hand_off(self, empty_store):
        empty_store.append(Profile(name="A", active=True))
        empty_store.append(Profile(name="B", active=True))

        assert empty_store.get("A").active is False
        assert empty_store.get("B").active is True
        assert empty_store.active_profile_name() == "B"

    def test_inactive_append_keeps_active(self, empty_store):
        empty_store.append(Profile(name="A", active=True))
        empty_store.append(Profile(name="B"))

        assert _active_names(empty_store) == ["A"]

    def test_first_profile_becomes_active(self, empty_store):
        empty_store.append(Profile(name="A"))

        assert empty_store.active_profile().name == "A"

    def test_persist_failure_keeps_memory_state(self, temp_dir):
        settings_dir = temp_dir / "settings-as-dir"
        credential_dir = temp_dir / "credential-as-dir"
        settings_dir.mkdir()
        credential_dir.mkdir()
        store = ProfileStore(settings_dir, credential_dir)

        with pytest.raises(PersistError) as exc_info:
            store.append(Profile(name="A", active=True))

        assert set(exc_info.value.failures) == {settings_dir, credential_dir}
        assert "A" in store


class TestUpdate:
    """Tests for ProfileStore.update."""

    def test_unknown_name_appends(self, empty_store):
        empty_store.update(Profile(name="A", active=True))

        assert empty_store.profile_names() == ["A"]

    def test_replaces_values(self, empty_store, sample_profile, settings_path):
        empty_store.append(sample_profile)

        empty_store.update(sample_profile.model_copy(update={"region": "hk"}))

        assert empty_store.get("dev").region == "hk"
        assert json.loads(settings_path.read_text())[0]["region"] == "hk"

    def test_active_hand_off(self, empty_store):
        empty_store.append(Profile(name="A", active=True))
        empty_store.append(Profile(name="B"))

        empty_store.update(Profile(name="B", active=True))

        assert _active_names(empty_store) == ["B"]

    def test_cannot_deactivate_active_profile(self, empty_store):
        empty_store.append(Profile(name="A", active=True))

        with pytest.raises(NoActiveProfileError):
            empty_store.update(Profile(name="A", active=False))

        assert empty_store.get("A").active is True

    def test_rejected_deactivation_leaves_store_intact(self, empty_store):
        empty_store.append(Profile(name="A", active=True))
        fetched = empty_store.get("A")
        fetched.active = False

        with pytest.raises(NoActiveProfileError):
            empty_store.update(fetched)

        assert _active_names(empty_store) == ["A"]
        assert empty_store.active_profile().name == "A"

    def test_never_duplicates_names(self, empty_store):
        for _ in range(3):
            empty_store.update(Profile(name="A", active=True))
            empty_store.update(Profile(name="B"))

        assert sorted(empty_store.profile_names()) == ["A", "B"]


class TestSwitchActive:
    """Tests for ProfileStore.switch_active."""

    def test_switch(self, empty_store):
        empty_store.append(Profile(name="A", active=True))
        empty_store.append(Profile(name="B"))

        empty_store.switch_active("B")

        assert _active_names(empty_store) == ["B"]

    def test_unknown_profile(self, empty_store):
        with pytest.raises(ProfileNotFoundError):
            empty_store.switch_active("missing")


class TestDelete:
    """Tests for ProfileStore.delete."""

    def test_delete_inactive(self, empty_store, credential_path):
        empty_store.append(Profile(name="A", active=True))
        empty_store.append(Profile(name="B"))

        empty_store.delete("B")

        assert empty_store.profile_names() == ["A"]
        assert [item["profile"] for item in json.loads(credential_path.read_text())] == ["A"]

    def test_delete_active_is_refused(self, empty_store, settings_path):
        empty_store.append(Profile(name="A", active=True))
        before = settings_path.read_text()

        with pytest.raises(CannotDeleteActiveError):
            empty_store.delete("A")

        assert empty_store.profile_names() == ["A"]
        assert settings_path.read_text() == before

    def test_delete_unknown(self, empty_store):
        with pytest.raises(ProfileNotFoundError):
            empty_store.delete("missing")


# =============================================================================
# Query and Round-Trip Tests
# =============================================================================


class TestQueries:
    """Tests for the read-only store accessors."""

    def test_get_missing_returns_none(self, empty_store):
        assert empty_store.get("missing") is None
        assert "missing" not in empty_store

    def test_active_profile_on_empty_store(self, empty_store):
        with pytest.raises(NoActiveProfileError):
            empty_store.active_profile()
        assert empty_store.active_profile_name() == ""

    def test_profiles_returns_copies(self, empty_store, sample_profile):
        empty_store.append(sample_profile)

        listed = empty_store.profiles()
        listed[0].public_key = "changed"

        assert empty_store.get("dev").public_key == sample_profile.public_key

    def test_get_returns_copy(self, empty_store):
        empty_store.append(Profile(name="A", active=True))
        empty_store.append(Profile(name="B"))

        empty_store.get("B").active = True
        empty_store.active_profile().active = False

        assert _active_names(empty_store) == ["A"]
        assert empty_store.active_profile_name() == "A"

    def test_appended_profile_is_not_shared(self, empty_store):
        profile = Profile(name="A", active=True)
        empty_store.append(profile)

        profile.region = "changed"

        assert empty_store.get("A").region == ""


class TestRoundTrip:
    """Saving and reloading reproduces the same profiles."""

    def test_round_trip(self, empty_store, sample_profile, settings_path, credential_path):
        empty_store.append(sample_profile)
        empty_store.append(Profile(name="ops", region="hk", public_key="p", private_key="s"))

        reloaded = ProfileStore.open(settings_path, credential_path)

        original = {profile.name: profile.model_dump() for profile in empty_store.profiles()}
        restored = {profile.name: profile.model_dump() for profile in reloaded.profiles()}
        assert restored == original
        assert reloaded.active_profile_name() == "dev"
