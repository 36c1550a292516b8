"""Raw profile format versioning for rawprofile.

This package upgrades profiles written by the Gecko profiler at any
historical version of the "raw profile" format to CURRENT_VERSION, so that
old saved profiles and profiles from older Firefox releases can be loaded.

Module organization:
- definition.py: Version constants (CURRENT_VERSION, UNANNOTATED_VERSION)
- version.py: Version query helper (get_profile_version)
- upgrade.py: Upgrade orchestration (upgrade_raw_profile)
- libraries.py: Legacy library descriptor normalization
- embedded.py: Traversal of embedded subprocess profiles
- migrations/: One migration function per version step

Usage:
    from rawprofile.versioning import upgrade_raw_profile, CURRENT_VERSION
"""

from .definition import CURRENT_VERSION, UNANNOTATED_VERSION, current_version
from .exceptions import (
    LegacyProfileUnsupportedError,
    MalformedDescriptorError,
    MalformedProfileError,
    ProfileTooNewError,
    ProfileUpgradeError,
    UpgradeErrorKind,
)
from .migrations import (
    migrate_v0_to_v1,
    migrate_v1_to_v2,
    migrate_v2_to_v3,
    migrate_v3_to_v4,
)
from .upgrade import UpgradeResult, try_upgrade_raw_profile, upgrade_raw_profile
from .version import get_profile_version

__all__ = [
    # Constants
    "CURRENT_VERSION",
    "UNANNOTATED_VERSION",
    # Core functions
    "current_version",
    "get_profile_version",
    "try_upgrade_raw_profile",
    "upgrade_raw_profile",
    "UpgradeResult",
    # Errors
    "LegacyProfileUnsupportedError",
    "MalformedDescriptorError",
    "MalformedProfileError",
    "ProfileTooNewError",
    "ProfileUpgradeError",
    "UpgradeErrorKind",
    # Migrations (exported for testing)
    "migrate_v0_to_v1",
    "migrate_v1_to_v2",
    "migrate_v2_to_v3",
    "migrate_v3_to_v4",
]
