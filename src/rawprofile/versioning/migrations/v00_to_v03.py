"""Raw profile migrations from version 0 to version 3.

No conversion code was ever written for these versions of the format.
Each step refuses to run instead of guessing at an undocumented layout.
The steps raise before touching the profile, so a rejected profile is
left exactly as it was.
"""

from typing import Any

from rawprofile.versioning.exceptions import LegacyProfileUnsupportedError


def migrate_v0_to_v1(profile: dict[str, Any]) -> None:
    """Reject a profile without a version number."""
    raise LegacyProfileUnsupportedError(0)


def migrate_v1_to_v2(profile: dict[str, Any]) -> None:
    """Reject a version 1 profile."""
    raise LegacyProfileUnsupportedError(1)


def migrate_v2_to_v3(profile: dict[str, Any]) -> None:
    """Reject a version 2 profile."""
    raise LegacyProfileUnsupportedError(2)
