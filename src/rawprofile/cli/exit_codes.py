"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Configuration errors
    20-29: Target/file errors
    50-59: Profile errors
"""

from enum import IntEnum

from rawprofile.versioning.exceptions import UpgradeErrorKind


class ExitCode(IntEnum):
    """Exit codes for rawprofile CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1

    # Configuration errors (10-19)
    CONFIG_ERROR = 11

    # Target/file errors (20-29)
    TARGET_NOT_FOUND = 20

    # Profile errors (50-59)
    PARSE_ERROR = 51
    PROFILE_TOO_NEW = 52
    LEGACY_UNSUPPORTED = 53
    MALFORMED_PROFILE = 54


# Exit code for each upgrade failure category
UPGRADE_ERROR_EXIT_CODES: dict[UpgradeErrorKind, ExitCode] = {
    UpgradeErrorKind.TOO_NEW: ExitCode.PROFILE_TOO_NEW,
    UpgradeErrorKind.LEGACY_UNSUPPORTED: ExitCode.LEGACY_UNSUPPORTED,
    UpgradeErrorKind.MALFORMED: ExitCode.MALFORMED_PROFILE,
}
