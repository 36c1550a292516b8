"""Raw profile format version constants.

CURRENT_VERSION is the only version of the raw profile format that the rest
of the tooling understands. Every older version is upgraded to it by the
migrations in ``rawprofile.versioning.migrations``.
"""

CURRENT_VERSION = 4

# Raw profiles before version 1 did not have a meta.version field.
# Treat those as version zero.
UNANNOTATED_VERSION = 0


def current_version() -> int:
    """Return the current raw profile format version."""
    return CURRENT_VERSION
