"""Version query helper for raw profiles.

This module provides the function to read the declared format version
from a raw profile document.
"""

from typing import Any

from .definition import UNANNOTATED_VERSION


def get_profile_version(profile: dict[str, Any]) -> int:
    """Get the declared format version of a raw profile.

    Args:
        profile: The profile in the raw profile format.

    Returns:
        The value of ``meta.version`` when it is a non-negative integer,
        otherwise UNANNOTATED_VERSION.
    """
    meta = profile.get("meta")
    if not isinstance(meta, dict):
        return UNANNOTATED_VERSION

    version = meta.get("version")
    # bool is an int subclass; a JSON true is not a version number
    if isinstance(version, bool) or not isinstance(version, int):
        return UNANNOTATED_VERSION
    if version < 0:
        return UNANNOTATED_VERSION
    return version
