"""Exceptions raised while upgrading raw profiles.

Every failure is terminal for the upgrade attempt: the document is a fixed,
fully available input, so retrying without a code change cannot succeed.
No rollback is attempted. A document that raised partway through an upgrade
must be discarded by the caller.
"""

from enum import Enum


class UpgradeErrorKind(Enum):
    """Category of an upgrade failure."""

    TOO_NEW = "too_new"  # Produced by a newer profiler than this tool knows
    LEGACY_UNSUPPORTED = "legacy_unsupported"  # Predates supported history
    MALFORMED = "malformed"  # Internally inconsistent document


class ProfileUpgradeError(Exception):
    """Base class for raw profile upgrade errors.

    All upgrade exceptions inherit from this class, allowing callers
    to catch every upgrade failure with a single except clause.
    """

    kind: UpgradeErrorKind = UpgradeErrorKind.MALFORMED


class ProfileTooNewError(ProfileUpgradeError):
    """Raised when a profile declares a version newer than CURRENT_VERSION.

    Attributes:
        version: The version declared by the profile.
        current_version: The most recent version this tool understands.
    """

    kind = UpgradeErrorKind.TOO_NEW

    def __init__(self, version: int, current_version: int) -> None:
        self.version = version
        self.current_version = current_version
        super().__init__(
            f"Unable to parse a raw profile of version {version} - are you "
            "running an outdated version of the profile tools? The most recent "
            f"version understood by this version is version {current_version}.\n"
            "Try updating to a newer release."
        )


class LegacyProfileUnsupportedError(ProfileUpgradeError):
    """Raised when no conversion code exists for a very old profile version.

    Attributes:
        version: The source version that cannot be upgraded.
    """

    kind = UpgradeErrorKind.LEGACY_UNSUPPORTED

    def __init__(self, version: int) -> None:
        self.version = version
        if version == 0:
            subject = "Raw profiles without version numbers (version 0) are"
        else:
            subject = f"Raw profile version {version} is"
        super().__init__(
            f"{subject} very old and no conversion code has been written "
            "for that version of the profile format."
        )


class MalformedProfileError(ProfileUpgradeError):
    """Raised when a profile does not have the shape its version requires."""

    kind = UpgradeErrorKind.MALFORMED

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        if path:
            message = f"{message} (at {path})"
        super().__init__(message)


class MalformedDescriptorError(MalformedProfileError):
    """Raised when a library descriptor matches neither legacy shape.

    Attributes:
        index: Position of the descriptor in the legacy libs list.
        missing: Names of the required fields that are absent or invalid.
    """

    def __init__(
        self, index: int, missing: list[str], path: str | None = None
    ) -> None:
        self.index = index
        self.missing = missing
        super().__init__(
            f"Library descriptor {index} is malformed: "
            f"missing or invalid {', '.join(missing)}",
            path=path,
        )
