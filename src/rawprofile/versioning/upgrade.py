"""Raw profile upgrade orchestration.

This module provides the main entry point for upgrading a raw profile,
running the migrations between the profile's declared version and
CURRENT_VERSION in order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .definition import CURRENT_VERSION
from .exceptions import ProfileTooNewError, ProfileUpgradeError, UpgradeErrorKind
from .migrations import get_upgrader
from .version import get_profile_version

logger = logging.getLogger(__name__)


def upgrade_raw_profile(profile: dict[str, Any]) -> None:
    """Upgrade a raw profile to CURRENT_VERSION, in place.

    Migrations run one version step at a time, in increasing order, because
    each step relies on the layout produced by the previous one. Errors from
    a step propagate unchanged and leave the profile partially upgraded; the
    caller must discard it.

    Args:
        profile: The profile in the raw profile format.

    Raises:
        ProfileTooNewError: If the profile is newer than CURRENT_VERSION.
            The profile is not modified.
        LegacyProfileUnsupportedError: If the profile predates version 3.
        MalformedProfileError: If the profile does not have the layout its
            version requires.
    """
    profile_version = get_profile_version(profile)
    if profile_version == CURRENT_VERSION:
        return

    if profile_version > CURRENT_VERSION:
        raise ProfileTooNewError(profile_version, CURRENT_VERSION)

    logger.debug(
        "Upgrading raw profile from version %d to %d",
        profile_version,
        CURRENT_VERSION,
    )
    for dest_version in range(profile_version + 1, CURRENT_VERSION + 1):
        upgrader = get_upgrader(dest_version)
        if upgrader is None:
            continue
        logger.debug("Applying raw profile migration to version %d", dest_version)
        upgrader(profile)

    profile.setdefault("meta", {})["version"] = CURRENT_VERSION
    logger.info(
        "Upgraded raw profile from version %d to %d",
        profile_version,
        CURRENT_VERSION,
        extra={"from_version": profile_version, "to_version": CURRENT_VERSION},
    )


@dataclass(frozen=True)
class UpgradeResult:
    """Outcome of an upgrade attempt.

    Attributes:
        success: True if the profile is now at CURRENT_VERSION.
        from_version: Version the profile declared before the attempt.
        to_version: CURRENT_VERSION on success, else from_version.
        error_kind: Category of the failure, None on success.
        error: The failure message, None on success.
    """

    success: bool
    from_version: int
    to_version: int
    error_kind: UpgradeErrorKind | None = None
    error: str | None = None


def try_upgrade_raw_profile(profile: dict[str, Any]) -> UpgradeResult:
    """Upgrade a raw profile, reporting failure as a value.

    Behaves like upgrade_raw_profile() but returns an UpgradeResult instead
    of raising ProfileUpgradeError. On failure the profile may be partially
    upgraded and must be discarded.

    Example:
        result = try_upgrade_raw_profile(profile)
        if not result.success:
            logger.warning("Cannot load profile: %s", result.error)
    """
    from_version = get_profile_version(profile)
    try:
        upgrade_raw_profile(profile)
    except ProfileUpgradeError as e:
        return UpgradeResult(
            success=False,
            from_version=from_version,
            to_version=from_version,
            error_kind=e.kind,
            error=str(e),
        )
    return UpgradeResult(
        success=True, from_version=from_version, to_version=CURRENT_VERSION
    )
