"""Tests for raw profile upgrade orchestration."""

import copy
import json
import logging
from collections.abc import Callable
from typing import Any

import pytest

from rawprofile.versioning import (
    CURRENT_VERSION,
    LegacyProfileUnsupportedError,
    MalformedDescriptorError,
    ProfileTooNewError,
    UpgradeErrorKind,
    get_profile_version,
    try_upgrade_raw_profile,
    upgrade_raw_profile,
)
from rawprofile.versioning.migrations import UPGRADERS

LegacyProfileFactory = Callable[..., dict[str, Any]]


@pytest.fixture
def current_profile(make_legacy_profile: LegacyProfileFactory) -> dict[str, Any]:
    """A profile already in the current format."""
    profile = make_legacy_profile()
    upgrade_raw_profile(profile)
    return profile


class TestUpgradeCurrentProfile:
    """Tests for profiles that are already current."""

    def test_is_a_no_op(self, current_profile: dict[str, Any]) -> None:
        before = copy.deepcopy(current_profile)

        upgrade_raw_profile(current_profile)

        assert current_profile == before
        assert json.dumps(current_profile) == json.dumps(before)

    def test_does_not_touch_unparsed_fields(self) -> None:
        """A current profile is returned as is, even with legacy-looking data."""
        profile = {"meta": {"version": CURRENT_VERSION}, "libs": "[]", "threads": []}
        upgrade_raw_profile(profile)
        assert profile == {"meta": {"version": 4}, "libs": "[]", "threads": []}


class TestUpgradeLegacyProfile:
    """Tests for upgrading version 3 profiles."""

    def test_stamps_current_version(
        self, make_legacy_profile: LegacyProfileFactory
    ) -> None:
        profile = make_legacy_profile()

        upgrade_raw_profile(profile)

        assert get_profile_version(profile) == CURRENT_VERSION
        assert profile["meta"]["version"] == CURRENT_VERSION

    def test_applies_version_4_changes(
        self, make_legacy_profile: LegacyProfileFactory, windows_lib: dict
    ) -> None:
        profile = make_legacy_profile(
            libs=[windows_lib], threads=[{"name": "Content"}], abi="x86-msvc"
        )

        upgrade_raw_profile(profile)

        assert profile["libs"][0]["breakpadId"] == "ABCDEF1234567890ABCDEF12345678901"
        assert profile["threads"] == [{"name": "GeckoMain", "processType": "tab"}]

    def test_keeps_other_meta_fields(
        self, make_legacy_profile: LegacyProfileFactory
    ) -> None:
        profile = make_legacy_profile()
        upgrade_raw_profile(profile)
        assert profile["meta"]["product"] == "Firefox"
        assert profile["meta"]["abi"] == "x86_64-gcc3"

    def test_embedded_profiles_keep_their_version(
        self, make_legacy_profile: LegacyProfileFactory
    ) -> None:
        child = make_legacy_profile()
        profile = make_legacy_profile(threads=[json.dumps(child)])

        upgrade_raw_profile(profile)

        assert profile["meta"]["version"] == CURRENT_VERSION
        assert json.loads(profile["threads"][0])["meta"]["version"] == 3

    def test_logs_upgrade(
        self,
        make_legacy_profile: LegacyProfileFactory,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        profile = make_legacy_profile()

        with caplog.at_level(logging.INFO, logger="rawprofile.versioning"):
            upgrade_raw_profile(profile)

        assert "Upgraded raw profile from version 3 to 4" in caplog.text


class TestUpgradeTooNewProfile:
    """Tests for profiles newer than CURRENT_VERSION."""

    @pytest.mark.parametrize("version", [5, 6, 100])
    def test_raises_and_leaves_profile_unchanged(
        self, version: int, make_legacy_profile: LegacyProfileFactory
    ) -> None:
        profile = make_legacy_profile(version=version)
        before = copy.deepcopy(profile)

        with pytest.raises(ProfileTooNewError) as exc_info:
            upgrade_raw_profile(profile)

        assert exc_info.value.version == version
        assert exc_info.value.current_version == CURRENT_VERSION
        assert exc_info.value.kind is UpgradeErrorKind.TOO_NEW
        assert profile == before

    def test_message_names_both_versions(
        self, make_legacy_profile: LegacyProfileFactory
    ) -> None:
        with pytest.raises(ProfileTooNewError) as exc_info:
            upgrade_raw_profile(make_legacy_profile(version=7))

        message = str(exc_info.value)
        assert "version 7" in message
        assert f"version {CURRENT_VERSION}" in message


class TestUpgradeUnsupportedProfile:
    """Tests for profiles older than version 3."""

    @pytest.mark.parametrize("version", [1, 2])
    def test_raises_naming_version_and_leaves_profile_unchanged(
        self, version: int, make_legacy_profile: LegacyProfileFactory
    ) -> None:
        profile = make_legacy_profile(version=version, threads=[{"name": "Content"}])
        before = copy.deepcopy(profile)

        with pytest.raises(LegacyProfileUnsupportedError) as exc_info:
            upgrade_raw_profile(profile)

        assert exc_info.value.version == version
        assert f"version {version}" in str(exc_info.value)
        assert exc_info.value.kind is UpgradeErrorKind.LEGACY_UNSUPPORTED
        assert profile == before

    def test_unversioned_profile(
        self, make_legacy_profile: LegacyProfileFactory
    ) -> None:
        profile = make_legacy_profile(version=None)
        before = copy.deepcopy(profile)

        with pytest.raises(LegacyProfileUnsupportedError) as exc_info:
            upgrade_raw_profile(profile)

        assert exc_info.value.version == 0
        assert profile == before


class TestUpgradeStepOrdering:
    """Tests for the order in which migrations are applied."""

    def test_steps_run_in_increasing_order(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[int] = []
        monkeypatch.setattr("rawprofile.versioning.upgrade.CURRENT_VERSION", 7)
        for target in (5, 6, 7):
            monkeypatch.setitem(
                UPGRADERS, target, lambda profile, target=target: calls.append(target)
            )

        profile = {"meta": {"version": 4}}
        upgrade_raw_profile(profile)

        assert calls == [5, 6, 7]
        assert profile["meta"]["version"] == 7

    def test_version_without_migration_is_skipped(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A version bump with no data change has no entry and still upgrades."""
        monkeypatch.setattr("rawprofile.versioning.upgrade.CURRENT_VERSION", 5)

        profile = {"meta": {"version": 4}, "libs": []}
        upgrade_raw_profile(profile)

        assert profile == {"meta": {"version": 5}, "libs": []}

    def test_failure_does_not_stamp_version(
        self, make_legacy_profile: LegacyProfileFactory, windows_lib: dict
    ) -> None:
        del windows_lib["pdbName"]
        profile = make_legacy_profile(libs=[windows_lib])

        with pytest.raises(MalformedDescriptorError):
            upgrade_raw_profile(profile)

        assert profile["meta"]["version"] == 3


class TestTryUpgradeRawProfile:
    """Tests for try_upgrade_raw_profile()."""

    def test_success(self, make_legacy_profile: LegacyProfileFactory) -> None:
        profile = make_legacy_profile()

        result = try_upgrade_raw_profile(profile)

        assert result.success is True
        assert result.from_version == 3
        assert result.to_version == CURRENT_VERSION
        assert result.error_kind is None
        assert result.error is None
        assert profile["meta"]["version"] == CURRENT_VERSION

    def test_too_new(self, make_legacy_profile: LegacyProfileFactory) -> None:
        result = try_upgrade_raw_profile(make_legacy_profile(version=9))

        assert result.success is False
        assert result.from_version == 9
        assert result.to_version == 9
        assert result.error_kind is UpgradeErrorKind.TOO_NEW
        assert "version 9" in result.error

    def test_legacy(self, make_legacy_profile: LegacyProfileFactory) -> None:
        result = try_upgrade_raw_profile(make_legacy_profile(version=1))
        assert result.error_kind is UpgradeErrorKind.LEGACY_UNSUPPORTED

    def test_malformed(self, make_legacy_profile: LegacyProfileFactory) -> None:
        profile = make_legacy_profile()
        profile["libs"] = "{"

        result = try_upgrade_raw_profile(profile)

        assert result.success is False
        assert result.error_kind is UpgradeErrorKind.MALFORMED

    def test_result_is_frozen(self, make_legacy_profile: LegacyProfileFactory) -> None:
        result = try_upgrade_raw_profile(make_legacy_profile())
        with pytest.raises(AttributeError):
            result.success = False  # type: ignore[misc]
